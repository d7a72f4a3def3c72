from __future__ import annotations

import logging
import os
from configparser import ConfigParser

NEW_CONFIG = """\
[report]
# Number of largest files to list in the report.
top_count = 10
# Set to false to skip ranking the largest files.
show_top = true
# Unit for the total and ranked sizes. One of: B, KB, MB, GB, TB
unit = B

[walk]
# Descend into symlinked directories.
follow_links = false
"""


class SizerConfig:
    """Configuration for the Sizer. Every option has a default."""

    logger = logging.getLogger("walk_sizer.SizerConfig")

    def __init__(self, filepath: str | None = None) -> None:
        """
        Load the configuration from the given file, if any.

        Raises:
            ValueError: If a filepath is given and cannot be read.
        """
        self._config = ConfigParser()

        if filepath is None:
            self.logger.debug("No config file given, using defaults")
            return

        success = self._config.read(filepath)

        if not success:
            raise ValueError(f"Could not read config file at {filepath}")

        self.logger.debug("Loaded config from %s", filepath)

    def set_option(self, section: str, option: str, value: str) -> None:
        """Override a single option, creating the section when needed."""
        if not self._config.has_section(section):
            self._config.add_section(section)

        self._config.set(section, option, value)

    @property
    def top_count(self) -> int:
        """Return the number of largest files to keep."""
        return self._config.getint("report", "top_count", fallback=10)

    @property
    def show_top(self) -> bool:
        """Return whether to rank the largest files."""
        return self._config.getboolean("report", "show_top", fallback=True)

    @property
    def unit(self) -> str:
        """Return the display unit label for sizes."""
        return self._config.get("report", "unit", fallback="B")

    @property
    def follow_links(self) -> bool:
        """Return whether the walk descends into symlinked directories."""
        return self._config.getboolean("walk", "follow_links", fallback=False)


def write_new_config(filename: str) -> None:
    """Write a new config file if one does not exist."""
    if os.path.exists(filename):
        return

    with open(filename, "w") as config_file:
        config_file.write(NEW_CONFIG)
