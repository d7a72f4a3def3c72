from __future__ import annotations

import logging
import time

from .sizeraggregator import classify_files
from .sizerconfig import SizerConfig
from .sizermodel import RunSummary
from .sizerreport import print_report
from .sizerwalker import partition_entries
from .sizerwalker import walk_entries


class Sizer:
    """Report the file size distribution and largest files under a root."""

    logger = logging.getLogger(__name__)

    def __init__(self, config: SizerConfig) -> None:
        """
        Initialize a new Sizer.

        Args:
            config: The configuration to use for walking and reporting.
        """
        self._config = config

    @property
    def _show_top(self) -> bool:
        """True if the largest files are ranked and reported."""
        return self._config.show_top and self._config.top_count > 0

    def run_once(self, root: str) -> RunSummary:
        """Walk the root once and print the report. Returns the summary."""
        tic = time.perf_counter()

        summary = self.walk(root)

        toc = time.perf_counter()
        self.report(summary, root, toc - tic)

        return summary

    def walk(self, root: str) -> RunSummary:
        """
        Walk the root and aggregate every file found.

        Raises:
            ValueError: If root does not exist.
            OSError: If the size of a file cannot be read.
        """
        self.logger.info("Walking %s...", root)

        entries = walk_entries(root, follow_links=self._config.follow_links)
        partitioned = partition_entries(entries)

        top_count = self._config.top_count if self._show_top else None
        aggregator = classify_files(partitioned.files, top_count=top_count)

        self.logger.info("Detected %s files", aggregator.file_count)
        self.logger.info("Detected %s directories", len(partitioned.directories))

        return RunSummary(
            bucket_counts=aggregator.bucket_counts,
            file_count=aggregator.file_count,
            directory_count=len(partitioned.directories),
            total_bytes=aggregator.total_bytes,
            top_files=tuple(aggregator.top_files),
        )

    def report(self, summary: RunSummary, root: str, elapsed_seconds: float) -> None:
        """Print the report for a finished walk to stdout."""
        print_report(
            summary,
            root,
            elapsed_seconds,
            unit=self._config.unit,
            show_top=self._show_top,
        )
