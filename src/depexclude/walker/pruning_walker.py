"""Single-pass directory walk that prunes skipped and matched directories.

This module provides the PruningWalker class, which traverses a directory tree once and
yields every directory matched by a sentinel or fixed path rule, never descending into
skipped or matched directories.
"""

import os
import threading
from pathlib import Path
from typing import Callable, Iterable, Iterator, List, Optional, Tuple

from depexclude.exceptions import EntryAccessError, WalkError
from depexclude.rules.base_rules import RuleAction, WalkCandidate
from depexclude.rules.rule_set import RuleSet
from depexclude.rules.sentinel_rules import SentinelRule
from depexclude.types import PathType
from depexclude.walker.match_result import MatchResult
from depexclude.walker.permission_action import PermissionAction

# (directory, path relative to the root, entries if already listed)
_PendingDirectory = Tuple[Path, str, Optional[List[os.DirEntry]]]


class PruningWalker:
    """A depth-first walk that classifies every directory against a RuleSet.

    For each directory below the root, before any of its children are visited, the rule
    set decides between three outcomes:

    - a skip rule applies: the directory is neither visited nor reported
    - a match rule applies: the directory is yielded as a MatchResult and not visited
    - no rule applies: the directory is visited and its subdirectories are classified

    The root itself is never classified. Files are never reported, but they are part of
    the parent listing sentinel rules look their markers up in.

    Symbolic Link Behavior:
        Symlinked directories are never descended into, which keeps the walk inside the
        root and free of cycles. A symlink that matches a rule is still reported.

    Permission Handling:
        A directory below the root that cannot be listed produces an EntryAccessError:
        - IGNORE (default): record it in ``errors``, pass it to ``on_error``, and treat the
          subtree as a dead end
        - RAISE: raise it immediately
        A root that does not exist, is not a directory, or cannot be listed always raises
        WalkError.

    Cancellation:
        When ``cancel_event`` is set, no further directories are visited. The directory
        being listed at that moment is finished, the sequence ends, and ``cancelled``
        becomes True.

    Attributes:
        root_path (Path): Absolute path to the traversal root.
        rule_set (RuleSet): Rules used to classify directories.
        permission_action (PermissionAction): How to handle unreadable directories.
        errors (List[EntryAccessError]): Unreadable directories found by the last walk.
        cancelled (bool): Whether the last walk was stopped by ``cancel_event``.
        visited_count (int): Number of directories listed by the last walk.
        match_count (int): Number of matches yielded by the last walk.

    Example:
        >>> rule_set = RuleSet.from_rules("/home/u", ["/home/u/Library"],  # doctest: +SKIP
        ...                               [SentinelRule("node_modules", "package.json")])
        >>> walker = PruningWalker("/home/u", rule_set)  # doctest: +SKIP
        >>> for match in walker.iterate_matches():  # doctest: +SKIP
        ...     print(match.relative_path)
        src/app/node_modules
    """

    def __init__(
        self,
        root_path: PathType,
        rule_set: RuleSet,
        permission_action: PermissionAction = PermissionAction.IGNORE,
        cancel_event: Optional[threading.Event] = None,
        on_error: Optional[Callable[[EntryAccessError], None]] = None,
    ) -> None:
        """Initialize a PruningWalker.

        Args:
            root_path: Path to the traversal root. Can be any path-like object.
            rule_set: Rules used to classify directories.
            permission_action: How to handle unreadable directories. Defaults to IGNORE.
            cancel_event: Event that stops the walk when set. Defaults to None.
            on_error: Called with each EntryAccessError under IGNORE. Defaults to None.
        """
        self.root_path = Path(os.path.abspath(os.fspath(root_path)))
        self.rule_set = rule_set
        self.permission_action = permission_action
        self.cancel_event = cancel_event
        self.on_error = on_error
        self._reset()

    def _reset(self) -> None:
        self.errors: List[EntryAccessError] = []
        self.cancelled = False
        self.visited_count = 0
        self.match_count = 0

    def iterate_matches(self) -> Iterator[MatchResult]:
        """Walk the tree and lazily yield every matched directory.

        The root is checked and listed immediately; everything below it is walked as the
        returned iterator is consumed. Each call starts a fresh traversal.

        Returns:
            An iterator over MatchResult objects, in discovery order.

        Raises:
            WalkError: If the root does not exist, is not a directory, or cannot be listed.
        """
        self._reset()
        root_entries = self._list_root()
        return self._walk(root_entries)

    def _list_root(self) -> List[os.DirEntry]:
        if not self.root_path.exists():
            raise WalkError(self.root_path, "Root path does not exist")
        if not self.root_path.is_dir():
            raise WalkError(self.root_path, "Root path is not a directory")
        try:
            return self._scan(self.root_path)
        except OSError as e:
            raise WalkError(self.root_path, f"Cannot read root directory ({e.strerror or e})")

    @staticmethod
    def _scan(directory: Path) -> List[os.DirEntry]:
        with os.scandir(directory) as it:
            return sorted(it, key=lambda entry: entry.name)

    def _list_directory(self, directory: Path) -> Optional[List[os.DirEntry]]:
        """List a directory below the root, handling errors per the permission action."""
        try:
            return self._scan(directory)
        except OSError as e:
            error = EntryAccessError(directory, e)
            if self.permission_action == PermissionAction.RAISE:
                raise error from e
            self.errors.append(error)
            if self.on_error is not None:
                self.on_error(error)
            return None

    @staticmethod
    def _is_directory(entry: os.DirEntry) -> bool:
        # Follows symlinks so a symlink to a directory can still be matched by name
        try:
            return entry.is_dir()
        except OSError:
            return False

    def _walk(self, root_entries: List[os.DirEntry]) -> Iterator[MatchResult]:
        pending: List[_PendingDirectory] = [(self.root_path, "", root_entries)]

        while pending:
            if self.cancel_event is not None and self.cancel_event.is_set():
                self.cancelled = True
                return

            directory, relative_path, entries = pending.pop()
            if entries is None:
                entries = self._list_directory(directory)
                if entries is None:
                    continue
            self.visited_count += 1

            sibling_names = frozenset(entry.name for entry in entries)
            descend: List[WalkCandidate] = []

            for entry in entries:
                if not self._is_directory(entry):
                    continue

                is_symlink = entry.is_symlink()
                candidate = WalkCandidate(
                    Path(entry.path),
                    f"{relative_path}/{entry.name}" if relative_path else entry.name,
                    sibling_names,
                    is_symlink=is_symlink,
                    name=entry.name,
                )

                rule = self.rule_set.classify(candidate)
                if rule is None:
                    if not is_symlink:
                        descend.append(candidate)
                elif rule.action == RuleAction.MATCH:
                    self.match_count += 1
                    yield MatchResult(candidate.path, candidate.relative_path, rule, is_symlink)

            # Reversed so that siblings are visited in name order
            for candidate in reversed(descend):
                pending.append((candidate.path, candidate.relative_path, None))


def walk(
    root: PathType,
    skip_paths: Iterable[PathType] = (),
    sentinel_rules: Iterable[SentinelRule] = (),
    fixed_paths: Iterable[str] = (),
    permission_action: PermissionAction = PermissionAction.IGNORE,
    cancel_event: Optional[threading.Event] = None,
    on_error: Optional[Callable[[EntryAccessError], None]] = None,
) -> Iterator[MatchResult]:
    """Walk ``root`` once and yield every directory matched by a sentinel or fixed path rule.

    This is a convenience wrapper around PruningWalker for callers that do not need the
    walker's error list, counters or cancellation flag afterwards.

    Args:
        root: The traversal root.
        skip_paths: Absolute paths (or root-relative entries) that are never traversed.
        sentinel_rules: Sentinel rules to match directories with.
        fixed_paths: Root-relative paths that always match.
        permission_action: How to handle unreadable directories. Defaults to IGNORE.
        cancel_event: Event that stops the walk when set. Defaults to None.
        on_error: Called with each EntryAccessError under IGNORE. Defaults to None.

    Returns:
        An iterator over MatchResult objects.

    Raises:
        WalkError: If the root does not exist, is not a directory, or cannot be listed.
    """
    rule_set = RuleSet.from_rules(root, skip_paths, sentinel_rules, fixed_paths)
    walker = PruningWalker(root, rule_set, permission_action, cancel_event, on_error)
    return walker.iterate_matches()
