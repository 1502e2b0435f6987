"""Loading and first-run initialization of the user-editable rule files.

The configuration directory holds three plain-text files, one entry per line:

- ``skip-paths``: paths relative to the traversal root that are never traversed.
- ``sentinels``: ``<directory name> <marker name> [# comment]`` pairs.
- ``fixed-paths``: paths relative to the traversal root that always match (optional).

The first two are created with built-in defaults when absent. The fixed paths file is
never created; its absence is normal.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterator, List, Optional, Set, Tuple

from depexclude.defaults import (
    FIXED_PATHS_FILE,
    SENTINELS_FILE,
    SKIP_PATHS_FILE,
    default_sentinels_text,
    default_skip_paths_text,
)
from depexclude.exceptions import ConfigError
from depexclude.rules.fixed_rules import normalize_relative_path
from depexclude.rules.sentinel_rules import SentinelRule
from depexclude.types import PathType


@dataclass
class RuleConfig:
    """The rules for one run, resolved against a traversal root.

    Attributes:
        root: The traversal root (normally the home directory).
        skip_paths: Absolute paths that are never traversed.
        sentinel_rules: Sentinel rules in file order, without duplicates.
        fixed_paths: Root-relative paths that always match.
    """

    root: Path
    skip_paths: Set[Path] = field(default_factory=set)
    sentinel_rules: List[SentinelRule] = field(default_factory=list)
    fixed_paths: Set[str] = field(default_factory=set)


def _ensure_file(path: Path, default_text: Callable[[], str]) -> None:
    """Write ``path`` with default content unless it already exists."""
    if path.exists():
        return
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ConfigError(f"Cannot create configuration directory: {e}", path=path.parent)
    try:
        with open(path, "x", encoding="utf-8") as f:
            f.write(default_text())
    except FileExistsError:
        # Created concurrently by another run; reading it below is all we need
        pass
    except OSError as e:
        raise ConfigError(f"Cannot write default configuration file: {e}", path=path)


def _read_entries(path: Path) -> Iterator[Tuple[int, str]]:
    """Yield ``(line_number, stripped_line)`` for every non-blank, non-comment line."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            lines = f.read().splitlines()
    except OSError as e:
        raise ConfigError(f"Cannot read configuration file: {e}", path=path)
    except UnicodeDecodeError as e:
        raise ConfigError(f"Configuration file is not valid UTF-8: {e}", path=path)

    for line_number, line in enumerate(lines, start=1):
        entry = line.strip()
        if not entry or entry.startswith("#"):
            continue
        yield line_number, entry


def resolve_skip_path(entry: str, root: PathType) -> Path:
    """Resolve a skip path entry against the traversal root.

    Args:
        entry: A line from the skip paths file, e.g. ``"Library"`` or ``"~/.Trash"``.
        root: The traversal root.

    Returns:
        The absolute, normalized path. Absolute entries are kept as they are.

    Example:
        >>> resolve_skip_path("Library", "/home/u").as_posix()
        '/home/u/Library'
        >>> resolve_skip_path("~/.Trash/", "/home/u").as_posix()
        '/home/u/.Trash'
        >>> resolve_skip_path("/Volumes/Backup", "/home/u").as_posix()
        '/Volumes/Backup'
    """
    if entry == "~" or entry.startswith("~/"):
        entry = entry[2:]
    path = Path(entry)
    if not path.is_absolute():
        path = Path(root) / path
    return Path(os.path.normpath(path))


def load_or_init_skip_paths(config_dir: PathType, root: PathType) -> Set[Path]:
    """Load the skip paths, creating the file with defaults on first run.

    Args:
        config_dir: The configuration directory.
        root: The traversal root entries are resolved against.

    Returns:
        The set of absolute skip paths.

    Raises:
        ConfigError: If the file cannot be created or read.
    """
    path = Path(config_dir) / SKIP_PATHS_FILE
    _ensure_file(path, default_skip_paths_text)
    return {resolve_skip_path(entry, root) for _, entry in _read_entries(path)}


def parse_sentinel_line(line: str) -> Optional[SentinelRule]:
    """Parse one line of the sentinels file.

    Args:
        line: A line of the form ``<directory name> <marker name> [# comment]``.

    Returns:
        The parsed rule, or None for blank and comment-only lines.

    Raises:
        ValueError: If the line does not name both a directory and a marker.

    Example:
        >>> parse_sentinel_line("node_modules package.json # npm")
        SentinelRule(directory_name='node_modules', marker_name='package.json')
        >>> parse_sentinel_line("   ") is None
        True
    """
    tokens = line.split()
    if not tokens or tokens[0].startswith("#"):
        return None
    if len(tokens) < 2 or tokens[1].startswith("#"):
        raise ValueError(f"Expected '<directory name> <marker name>', got {line.strip()!r}")
    return SentinelRule(tokens[0], tokens[1])


def load_or_init_sentinel_rules(config_dir: PathType) -> List[SentinelRule]:
    """Load the sentinel rules, creating the file with defaults on first run.

    Args:
        config_dir: The configuration directory.

    Returns:
        Sentinel rules in file order with duplicates removed.

    Raises:
        ConfigError: If the file cannot be created or read, or a line is malformed.
    """
    path = Path(config_dir) / SENTINELS_FILE
    _ensure_file(path, default_sentinels_text)

    rules: List[SentinelRule] = []
    for line_number, entry in _read_entries(path):
        try:
            rule = parse_sentinel_line(entry)
        except ValueError as e:
            raise ConfigError(f"Malformed sentinel rule: {e}", path=path, line_number=line_number)
        if rule is not None and rule not in rules:
            rules.append(rule)
    return rules


def load_fixed_paths(config_dir: PathType) -> Set[str]:
    """Load the fixed paths. The file is optional and never created.

    Args:
        config_dir: The configuration directory.

    Returns:
        Normalized root-relative paths, empty if the file does not exist.

    Raises:
        ConfigError: If the file exists but cannot be read.
    """
    path = Path(config_dir) / FIXED_PATHS_FILE
    if not path.exists():
        return set()
    entries = {normalize_relative_path(entry) for _, entry in _read_entries(path)}
    entries.discard("")
    return entries


def load_config(config_dir: PathType, root: PathType) -> RuleConfig:
    """Load all rule files for a run.

    Args:
        config_dir: The configuration directory. Created on first run.
        root: The traversal root.

    Returns:
        The loaded configuration.

    Raises:
        ConfigError: If any rule file cannot be created or read.
    """
    config_path = Path(config_dir)
    if config_path.exists() and not config_path.is_dir():
        raise ConfigError("Configuration path is not a directory", path=config_path)

    return RuleConfig(
        root=Path(root),
        skip_paths=load_or_init_skip_paths(config_path, root),
        sentinel_rules=load_or_init_sentinel_rules(config_path),
        fixed_paths=load_fixed_paths(config_path),
    )
