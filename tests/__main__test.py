from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from unittest.mock import patch

import pytest

from walk_sizer import __main__


@pytest.fixture(autouse=True)
def close_file_handlers():
    yield
    for handler in logging.root.handlers[:]:
        if isinstance(handler, logging.FileHandler):
            handler.close()
            logging.root.handlers.remove(handler)


def test_parse_args():
    args = __main__.parse_args(["some/root", "--top", "5", "--unit", "kb"])
    assert args.root == "some/root"
    assert args.top == 5
    assert args.unit == "KB"
    assert args.no_top is False


def test_parse_args_no_root():
    args = __main__.parse_args([])
    assert args.root is None
    assert args.config is None
    assert args.top is None


def test_parse_args_rejects_unknown_unit():
    with pytest.raises(SystemExit):
        __main__.parse_args(["--unit", "PB"])


def test_main_defaults_to_program_path():
    with patch("sys.argv", ["/opt/tools/walk-sizer"]):
        with patch("walk_sizer.__main__.Sizer.run_once") as mock_run:
            result = __main__.main(cli_args=[])

    assert result == 0
    mock_run.assert_called_once_with("/opt/tools/walk-sizer")


def test_main_walks_given_root(tmp_path: Path, capsys: pytest.CaptureFixture[str]):
    (tmp_path / "file01.txt").write_text("hello")

    result = __main__.main(cli_args=[str(tmp_path)])

    output = capsys.readouterr().out
    assert result == 0
    assert f"++ File size distribution for : {tmp_path} ++" in output
    assert "Total number of files counted: 1" in output


def test_main_returns_error_on_missing_root(
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
    caplog: pytest.LogCaptureFixture,
):
    result = __main__.main(cli_args=[str(tmp_path / "missing")])

    assert result == 1
    assert capsys.readouterr().out == ""
    assert "Not a valid path" in caplog.text


def test_main_returns_error_on_unreadable_size(
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
):
    (tmp_path / "file01.txt").write_text("hello")

    with patch("os.path.getsize", side_effect=PermissionError(13, "denied")):
        result = __main__.main(cli_args=[str(tmp_path)])

    assert result == 1
    assert capsys.readouterr().out == ""


def test_main_returns_error_on_missing_config(tmp_path: Path):
    result = __main__.main(cli_args=[str(tmp_path), "--config", "foo/bar.ini"])

    assert result == 1


def test_main_returns_error_on_negative_top(tmp_path: Path):
    result = __main__.main(cli_args=[str(tmp_path), "--top", "-1"])

    assert result == 1


def test_main_applies_overrides(tmp_path: Path):
    cli_args = [
        str(tmp_path),
        "--config",
        "tests/test_config.ini",
        "--top",
        "7",
        "--no-top",
        "--unit",
        "mb",
    ]

    with patch("walk_sizer.__main__.Sizer") as mock_sizer:
        result = __main__.main(cli_args=cli_args)

    config = mock_sizer.call_args.args[0]
    assert result == 0
    assert config.top_count == 7
    assert config.show_top is False
    assert config.unit == "MB"
    assert config.follow_links is True
    mock_sizer.return_value.run_once.assert_called_once_with(str(tmp_path))


def test_main_create_config():
    cli_args = ["--make-config", "tests/new_test_config.ini"]

    with patch("walk_sizer.__main__.write_new_config") as mock_write:
        result = __main__.main(cli_args=cli_args)

    assert result == 0
    mock_write.assert_called_once_with("tests/new_test_config.ini")


def test_main_creates_log_file(tmp_path: Path):
    log_path = tmp_path / "walk_sizer.log"
    cli_args = [str(tmp_path), "--log-file", str(log_path), "--debug"]

    with patch("walk_sizer.__main__.Sizer.run_once") as mock_run:
        result = __main__.main(cli_args=cli_args)

    assert result == 0
    assert mock_run.call_count == 1
    assert log_path.exists()


def test_main_top_zero_omits_largest_files(
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
):
    (tmp_path / "file01.txt").write_text("hello")

    result = __main__.main(cli_args=[str(tmp_path), "--top", "0"])

    output = capsys.readouterr().out
    assert result == 0
    assert "Largest files" not in output
    assert "Total number of files counted: 1" in output


@pytest.mark.skipif(sys.platform != "linux", reason="requires bytes filenames")
def test_main_reports_tree_with_undecodable_filename(
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
):
    with open(os.path.join(os.fsencode(tmp_path), b"bad\xff.bin"), "wb") as bad:
        bad.write(b"x" * 10)

    result = __main__.main(cli_args=[str(tmp_path)])

    output = capsys.readouterr().out
    assert result == 0
    assert "Total number of files counted: 1" in output
    assert "bad�.bin" in output
