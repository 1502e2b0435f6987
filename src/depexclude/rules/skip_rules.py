"""Skip rules that prune whole subtrees from the walk."""

import os
from pathlib import Path
from typing import Iterable, List, Optional

from pathspec import PathSpec
from pathspec.patterns.gitwildmatch import GitWildMatchPattern

from depexclude.types import PathType

from .base_rules import BaseWalkRule, RuleAction, WalkCandidate


class SkipRules(BaseWalkRule):
    """Skip rules anchored at the traversal root, matched with .gitignore pattern syntax.

    Each entry names a path relative to the root. A directory is skipped when it equals
    an entry or lies underneath one; skip rules take precedence over every match rule.
    Entries are compiled into a single ``pathspec`` matcher, each anchored with a leading
    slash, so ``Library`` skips ``<root>/Library`` but not ``<root>/src/Library``.
    Wildcards are honored the way Git honors them (``Library/Containers/*/Data``), but an
    entry is always tried as a literal path first, so ``Photos [2019]`` skips exactly that
    directory.

    Absolute paths given to :meth:`add_path` are made relative to the root first. Paths
    outside the root can never be reached by the walk and are dropped.

    Attributes:
        root (Path): The traversal root entries are anchored at.
        spec (PathSpec): Compiled matcher for all entries.

    Example:
        >>> rules = SkipRules("/home/u", ["/home/u/Library", "/home/u/.Trash"])
        >>> rules.applies(WalkCandidate(Path("/home/u/Library"), "Library", set()))
        True
        >>> rules.applies(WalkCandidate(Path("/home/u/Library/Caches"), "Library/Caches", set()))
        True
        >>> rules.applies(WalkCandidate(Path("/home/u/src/Library"), "src/Library", set()))
        False
        >>> rules.add_path("/opt/elsewhere")
        False
    """

    action = RuleAction.SKIP

    def __init__(self, root: PathType, skip_paths: Optional[Iterable[PathType]] = None) -> None:
        """Initialize SkipRules for a traversal root.

        Args:
            root: The traversal root. Entries are resolved against it.
            skip_paths: Absolute paths (or root-relative entries) to skip. Defaults to None.
        """
        self.root = Path(os.path.abspath(os.fspath(root)))
        self._entries: List[str] = []
        self._skip_root = False
        self.spec = PathSpec([])

        if skip_paths is not None:
            for skip_path in skip_paths:
                self.add_path(skip_path)

    def add_rule(self, rule: str) -> None:
        """Add a single root-relative entry.

        Args:
            rule: Entry relative to the root, e.g. ``".Trash"`` or ``"Library/Caches"``.
                Leading and trailing slashes are ignored.
        """
        entry = rule.strip().strip("/")
        if not entry or entry in self._entries:
            return
        if entry == ".":
            self._skip_root = True
        self._entries.append(entry)
        self.spec = PathSpec(self._compile_patterns())

    def _compile_patterns(self) -> List[GitWildMatchPattern]:
        patterns: List[GitWildMatchPattern] = []
        for entry in self._entries:
            if entry == ".":
                continue
            try:
                patterns.append(GitWildMatchPattern(f"/{entry}"))
            except ValueError:
                # Not a valid pattern (e.g. a trailing backslash); the entry still matches literally
                continue
        return patterns

    def add_path(self, path: PathType) -> bool:
        """Add a skip path, absolute or relative to the root.

        Args:
            path: The path to skip.

        Returns:
            True if the path was added, False if it lies outside the root and was dropped.
        """
        candidate = Path(os.path.normpath(os.fspath(path)))
        if candidate.is_absolute():
            try:
                candidate = candidate.relative_to(self.root)
            except ValueError:
                return False
        self.add_rule(candidate.as_posix())
        return True

    def applies(self, candidate: WalkCandidate) -> bool:
        """Check whether a directory equals or lies under any skip entry."""
        if self._skip_root:
            return True
        relative_path = candidate.relative_path
        # An entry always skips the path it names literally, even with [, * or ? in it
        for entry in self._entries:
            if relative_path == entry or relative_path.startswith(entry + "/"):
                return True
        return bool(self.spec.match_file(relative_path))

    def has_rules(self) -> bool:
        """Check whether any skip entry is configured."""
        return bool(self._entries)

    @property
    def entries(self) -> List[str]:
        """Root-relative entries in insertion order."""
        return list(self._entries)

    def describe(self) -> str:
        return "skip"
