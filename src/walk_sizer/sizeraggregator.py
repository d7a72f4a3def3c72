from __future__ import annotations

import heapq
import logging
import os
from collections.abc import Iterable
from typing import Callable

from .sizermodel import SIZE_BUCKETS
from .sizermodel import TOP_COUNT
from .sizermodel import FileRecord
from .sizermodel import bucket_index

SizeLookup = Callable[[str], int]


class TopRanking:
    """Keep the largest records pushed so far, up to a fixed capacity."""

    def __init__(self, capacity: int = TOP_COUNT) -> None:
        if capacity < 0:
            raise ValueError(f"Capacity cannot be negative: {capacity}")

        self._capacity = capacity
        self._heap: list[FileRecord] = []

    def __len__(self) -> int:
        return len(self._heap)

    def push(self, record: FileRecord) -> None:
        """Add the record, dropping the smallest held record when full."""
        if not self._capacity:
            return

        if len(self._heap) < self._capacity:
            heapq.heappush(self._heap, record)

        elif record > self._heap[0]:
            heapq.heapreplace(self._heap, record)

    def records(self) -> list[FileRecord]:
        """Return the held records, largest first."""
        return sorted(self._heap, reverse=True)


class SizeAggregator:
    """Count files per size bucket, total their sizes and rank the largest."""

    logger = logging.getLogger(__name__)

    def __init__(
        self,
        top_count: int | None = TOP_COUNT,
        *,
        size_of: SizeLookup | None = None,
    ) -> None:
        """
        Initialize an empty aggregator.

        Args:
            top_count: The number of largest files to keep. None or 0 turns
                ranking off entirely. Defaults to 10.

        Keyword Args:
            size_of: Function returning the size in bytes of a path. Defaults
                to os.path.getsize.
        """
        self._size_of = size_of or os.path.getsize
        self._bucket_counts = [0] * len(SIZE_BUCKETS)
        self._total_bytes = 0
        self._ranking = TopRanking(top_count) if top_count else None

    @property
    def bucket_counts(self) -> tuple[int, ...]:
        return tuple(self._bucket_counts)

    @property
    def file_count(self) -> int:
        return sum(self._bucket_counts)

    @property
    def total_bytes(self) -> int:
        return self._total_bytes

    @property
    def top_files(self) -> list[FileRecord]:
        """Largest files seen so far, largest first. Empty when ranking is off."""
        if self._ranking is None:
            return []

        return self._ranking.records()

    def add(self, record: FileRecord) -> None:
        """Account for a single file record."""
        self._bucket_counts[bucket_index(record.size_bytes)] += 1
        self._total_bytes += record.size_bytes

        if self._ranking is not None:
            self._ranking.push(record)

    def add_path(self, path: str) -> FileRecord:
        """
        Look up the size of the file at path and account for it.

        Raises:
            OSError: If the size cannot be read. This ends the run.
        """
        try:
            size_bytes = self._size_of(path)

        except OSError as error:
            self.logger.error("Unable to read size of '%s': %s", path, error)
            raise

        record = FileRecord.from_path(path, size_bytes)
        self.add(record)
        return record


def classify_files(
    files: Iterable[str],
    *,
    top_count: int | None = TOP_COUNT,
    size_of: SizeLookup | None = None,
) -> SizeAggregator:
    """Build an aggregator and feed it every path in files."""
    aggregator = SizeAggregator(top_count, size_of=size_of)

    for path in files:
        aggregator.add_path(path)

    SizeAggregator.logger.debug(
        "Classified %s files totalling %s bytes",
        aggregator.file_count,
        aggregator.total_bytes,
    )

    return aggregator
