from __future__ import annotations

import dataclasses
import os

from .sizermodel import SIZE_BUCKETS
from .sizermodel import RunSummary


@dataclasses.dataclass(frozen=True)
class Unit:
    """A display unit for byte counts."""

    label: str
    divisor: int


UNITS = {
    unit.label: unit
    for unit in (
        Unit("B", 1),
        Unit("KB", 1024),
        Unit("MB", 1024**2),
        Unit("GB", 1024**3),
        Unit("TB", 1024**4),
    )
}


def get_unit(label: str) -> Unit:
    """Return the unit for the given label, case insensitive."""
    try:
        return UNITS[label.upper()]

    except KeyError:
        valid = ", ".join(UNITS)
        raise ValueError(f"Unknown unit '{label}', expected one of: {valid}") from None


def display_path(path: str) -> str:
    """Return path as printable text, replacing bytes that are not valid UTF-8."""
    return os.fsencode(path).decode("utf-8", "replace")


def convert_size(num_bytes: int, unit: Unit) -> float:
    """Convert a byte count into the given unit."""
    return num_bytes / unit.divisor


def format_size(num_bytes: int, unit: Unit) -> str:
    """Format a byte count for display, e.g. `1,234 B` or `1.21 KB`."""
    if unit.divisor == 1:
        return f"{num_bytes:,} {unit.label}"

    return f"{convert_size(num_bytes, unit):,.2f} {unit.label}"


def format_duration(seconds: float) -> str:
    """Format an elapsed time using the largest unit that keeps it above one."""
    if seconds < 0.001:
        return f"{seconds * 1_000_000:.3f}µs"

    if seconds < 1:
        return f"{seconds * 1_000:.3f}ms"

    return f"{seconds:.3f}s"


def format_report(
    summary: RunSummary,
    root: str,
    elapsed_seconds: float,
    *,
    unit: str = "B",
    show_top: bool = True,
) -> str:
    """
    Build the human readable report for a run.

    Args:
        summary: The result of the walk.
        root: The path the walk started from.
        elapsed_seconds: Wall clock time of the run.

    Keyword Args:
        unit: Unit label used for the total and ranked sizes. Defaults to "B".
        show_top: Include the largest files block. Defaults to True.

    Raises:
        ValueError: If the unit is unknown.
    """
    display_unit = get_unit(unit)
    label_width = max(len(bucket.label) for bucket in SIZE_BUCKETS)

    lines = [f"++ File size distribution for : {display_path(root)} ++", ""]

    for bucket, count in zip(SIZE_BUCKETS, summary.bucket_counts):
        lines.append(f"Files {bucket.label:<{label_width}}  : {count}")

    lines.extend(
        [
            "",
            f"Total number of files counted: {summary.file_count}",
            f"Total number of directories traversed: {summary.directory_count}",
            "Total size of all files: "
            f"{format_size(summary.total_bytes, display_unit)}",
        ]
    )

    if show_top:
        lines.extend(["", f"Largest files ({len(summary.top_files)}):"])
        if not summary.top_files:
            lines.append("  (no files)")

        for rank, record in enumerate(summary.top_files, start=1):
            size_text = format_size(record.size_bytes, display_unit)
            path = display_path(record.path)
            name = display_path(record.name)
            lines.append(f"{rank:>4}. {size_text:>16}  {path}  ({name})")

    lines.extend(["", f"Run time: {format_duration(elapsed_seconds)}"])

    return "\n".join(lines) + "\n"


def print_report(
    summary: RunSummary,
    root: str,
    elapsed_seconds: float,
    *,
    unit: str = "B",
    show_top: bool = True,
) -> None:
    """Write the report for a run to stdout."""
    report = format_report(summary, root, elapsed_seconds, unit=unit, show_top=show_top)
    print(report, end="")
