"""Directories reported by the walker."""

from dataclasses import dataclass
from pathlib import Path

from depexclude.rules.base_rules import BaseWalkRule


@dataclass(frozen=True)
class MatchResult:
    """A directory that satisfied a sentinel or fixed path rule.

    The walker never descends into a match, so no two results of one walk are in an
    ancestor-descendant relationship.

    Attributes:
        path: Absolute path of the matched directory.
        relative_path: Path relative to the traversal root, with forward slashes.
        rule: The rule that produced the match.
        is_symlink: True if the match is a symbolic link that was not entered.
    """

    path: Path
    relative_path: str
    rule: BaseWalkRule
    is_symlink: bool = False

    def __str__(self) -> str:
        return str(self.path)
