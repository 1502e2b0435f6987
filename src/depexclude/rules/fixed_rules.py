"""Fixed path rules: root-relative directories that always match."""

import posixpath
from typing import Iterable, List, Optional

from .base_rules import BaseWalkRule, RuleAction, WalkCandidate


def normalize_relative_path(path: str) -> str:
    """Normalize a root-relative path to the form the walker reports.

    Args:
        path: A path such as ``"./.nvm/"``, ``"~/.nvm"`` or ``".nvm"``.

    Returns:
        The path without surrounding whitespace, ``~/`` or ``./`` prefixes and trailing
        slashes, using forward slashes. An empty string is returned for the root itself.

    Example:
        >>> normalize_relative_path("~/.nvm/")
        '.nvm'
        >>> normalize_relative_path("./go//pkg")
        'go/pkg'
    """
    entry = path.strip().replace("\\", "/")
    if entry.startswith("~/"):
        entry = entry[2:]
    if not entry:
        return ""
    entry = posixpath.normpath(entry)
    return "" if entry == "." else entry


class FixedPathRules(BaseWalkRule):
    """Match directories by their exact path relative to the traversal root.

    A fixed path matches regardless of any marker file. Entries that do not exist are
    never encountered by the walk and therefore simply produce no match.

    Example:
        >>> from pathlib import Path
        >>> rules = FixedPathRules([".nvm", "./go/pkg/"])
        >>> rules.applies(WalkCandidate(Path("/home/u/go/pkg"), "go/pkg", set()))
        True
        >>> rules.applies(WalkCandidate(Path("/home/u/src/.nvm"), "src/.nvm", set()))
        False
    """

    action = RuleAction.MATCH

    def __init__(self, paths: Optional[Iterable[str]] = None) -> None:
        self._paths: List[str] = []
        if paths is not None:
            for path in paths:
                self.add_rule(path)

    def add_rule(self, rule: str) -> None:
        """Add a single root-relative path. Empty entries and the root itself are ignored."""
        entry = normalize_relative_path(rule)
        if entry and entry not in self._paths:
            self._paths.append(entry)

    def applies(self, candidate: WalkCandidate) -> bool:
        return candidate.relative_path in self._paths

    def has_rules(self) -> bool:
        return bool(self._paths)

    @property
    def paths(self) -> List[str]:
        return list(self._paths)

    def describe(self) -> str:
        return "fixed path"
