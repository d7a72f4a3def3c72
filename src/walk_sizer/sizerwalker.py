from __future__ import annotations

import dataclasses
import logging
import os
from collections.abc import Generator
from collections.abc import Iterable

logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class PartitionedEntries:
    """Walked entries split into files, directories, and everything else."""

    files: list[str]
    directories: list[str]
    excluded: list[str]


def _log_walk_error(error: OSError) -> None:
    """Unreadable entries are dropped from the walk."""
    logger.debug("Skipping unreadable entry '%s': %s", error.filename, error)


def walk_entries(
    root: str,
    *,
    follow_links: bool = False,
) -> Generator[str, None, None]:
    """
    Lazily yield the path of every entry found under root, root included.

    Entries that cannot be read are skipped and the walk continues. Sibling
    order is whatever the host filesystem lists.

    Args:
        root: The path to start walking from. May be a file, in which case
            only that path is yielded.

    Keyword Args:
        follow_links: Descend into symlinked directories. Defaults to False.

    Raises:
        ValueError: If root does not exist.
    """
    if not os.path.lexists(root):
        raise ValueError(f"Not a valid path: {root}")

    yield root

    for dirpath, dirnames, filenames in os.walk(
        root,
        onerror=_log_walk_error,
        followlinks=follow_links,
    ):
        for name in dirnames:
            yield os.path.join(dirpath, name)

        for name in filenames:
            yield os.path.join(dirpath, name)


def partition_entries(entries: Iterable[str]) -> PartitionedEntries:
    """
    Split entries into regular files and directories.

    Each path is checked against the filesystem as it is consumed. Entries
    that are neither a file nor a directory (fifos, sockets, dangling
    symlinks) are set aside in `excluded` and do not count toward either.
    """
    files: list[str] = []
    directories: list[str] = []
    excluded: list[str] = []

    for path in entries:
        if os.path.isfile(path):
            files.append(path)
        elif os.path.isdir(path):
            directories.append(path)
        else:
            excluded.append(path)

    logger.debug(
        "Partitioned %s files, %s directories, %s excluded",
        len(files),
        len(directories),
        len(excluded),
    )

    return PartitionedEntries(files, directories, excluded)
