"""Disk usage measurement for matched directories."""

import os
from typing import List

from humanfriendly import format_size as _format_size

from depexclude.types import PathType


def _allocated_bytes(stat_result: os.stat_result) -> int:
    # st_blocks is always counted in 512-byte units; it is missing on Windows
    blocks = getattr(stat_result, "st_blocks", None)
    if blocks is None:
        return stat_result.st_size
    return blocks * 512


def disk_usage(path: PathType) -> int:
    """Calculate the space a file or directory tree occupies on disk.

    Symlinks are counted as links and never followed. Entries that vanish or cannot be
    read while measuring are skipped, so the result is a lower bound in that case.

    Args:
        path: The file or directory to measure.

    Returns:
        Allocated size in bytes, or 0 if ``path`` cannot be read at all.

    Example:
        >>> import tempfile
        >>> with tempfile.TemporaryDirectory() as tmpdir:
        ...     disk_usage(os.path.join(tmpdir, "missing"))
        0
    """
    try:
        top = os.lstat(path)
    except OSError:
        return 0

    total = _allocated_bytes(top)
    if not os.path.isdir(path) or os.path.islink(path):
        return total

    pending: List[str] = [os.fspath(path)]
    while pending:
        directory = pending.pop()
        try:
            with os.scandir(directory) as it:
                entries = list(it)
        except OSError:
            continue
        for entry in entries:
            try:
                stat_result = entry.stat(follow_symlinks=False)
                total += _allocated_bytes(stat_result)
                if entry.is_dir(follow_symlinks=False):
                    pending.append(entry.path)
            except OSError:
                continue
    return total


def format_size(num_bytes: int) -> str:
    """Format a byte count for status output, in binary units like ``du -h``.

    Example:
        >>> format_size(1536)
        '1.5 KiB'
    """
    return str(_format_size(num_bytes, binary=True))
