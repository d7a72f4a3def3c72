from __future__ import annotations

import bisect
import dataclasses
import os

U64_MAX = 2**64 - 1
TOP_COUNT = 10


@dataclasses.dataclass(frozen=True)
class SizeBucket:
    """A contiguous range of file sizes in bytes, both ends inclusive."""

    floor: int
    ceiling: int
    label: str


SIZE_BUCKETS = (
    SizeBucket(0, 0, "@  0B"),
    SizeBucket(1, 1_023, ">  1B - 1,023B"),
    SizeBucket(1_024, 1_048_575, "> 1KB - 1,023KB"),
    SizeBucket(1_048_576, 1_073_741_823, "> 1MB - 1,023MB"),
    SizeBucket(1_073_741_824, 1_099_511_627_775, "> 1GB - 1,023GB"),
    SizeBucket(1_099_511_627_776, U64_MAX, "> 1TB+"),
)

_BUCKET_FLOORS = [bucket.floor for bucket in SIZE_BUCKETS]


def bucket_index(size_bytes: int) -> int:
    """
    Return the index of the size bucket that holds the given size.

    Sizes beyond U64_MAX are not produced by any filesystem and fall into
    the last, open-ended bucket.

    Raises:
        ValueError: If the size is negative.
    """
    if size_bytes < 0:
        raise ValueError(f"File size cannot be negative: {size_bytes}")

    return bisect.bisect_right(_BUCKET_FLOORS, size_bytes) - 1


@dataclasses.dataclass(frozen=True, order=True)
class FileRecord:
    """A file seen during a walk. Ordered by size, then path, then name."""

    size_bytes: int
    path: str
    name: str

    @classmethod
    def from_path(cls, path: str, size_bytes: int) -> FileRecord:
        """Build a record, taking the name from the last component of the path."""
        return cls(size_bytes, path, os.path.basename(path))


@dataclasses.dataclass(frozen=True)
class RunSummary:
    """The aggregated result of a single walk."""

    bucket_counts: tuple[int, ...]
    file_count: int
    directory_count: int
    total_bytes: int
    top_files: tuple[FileRecord, ...] = ()
