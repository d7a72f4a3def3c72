from __future__ import annotations

from pathlib import Path

import pytest

from walk_sizer.sizerconfig import NEW_CONFIG
from walk_sizer.sizerconfig import SizerConfig
from walk_sizer.sizerconfig import write_new_config

CONFIG_PATH = "tests/test_config.ini"


def test_sizerconfig_raises_on_invalid_config_path() -> None:
    with pytest.raises(ValueError):
        SizerConfig("foo/bar")


def test_sizerconfig_defaults_without_file() -> None:
    config = SizerConfig()

    assert config.top_count == 10
    assert config.show_top is True
    assert config.unit == "B"
    assert config.follow_links is False


def test_sizerconfig_loads_test_fixture_completely() -> None:
    config = SizerConfig(CONFIG_PATH)

    assert config.top_count == 3
    assert config.show_top is True
    assert config.unit == "kb"
    assert config.follow_links is True


def test_set_option_overrides_and_creates_sections() -> None:
    config = SizerConfig()

    config.set_option("report", "top_count", "25")
    config.set_option("walk", "follow_links", "true")

    assert config.top_count == 25
    assert config.follow_links is True


def test_sizerconfig_raises_on_malformed_value(tmp_path: Path) -> None:
    filepath = tmp_path / "bad.ini"
    filepath.write_text("[report]\ntop_count = lots\n")
    config = SizerConfig(str(filepath))

    with pytest.raises(ValueError):
        config.top_count


def test_write_new_config(tmp_path: Path) -> None:
    filename = str(tmp_path / "walk_sizer.ini")

    write_new_config(filename)

    assert Path(filename).read_text() == NEW_CONFIG

    config = SizerConfig(filename)
    assert config.top_count == 10
    assert config.show_top is True
    assert config.unit == "B"
    assert config.follow_links is False


def test_write_new_config_early_exit_when_exists(tmp_path: Path) -> None:
    filepath = tmp_path / "walk_sizer.ini"
    filepath.write_text("")

    write_new_config(str(filepath))

    assert filepath.read_text() == ""
