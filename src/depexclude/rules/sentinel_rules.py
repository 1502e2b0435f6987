"""Sentinel rules: a directory name confirmed by a marker file beside it."""

from typing import Any

from .base_rules import BaseWalkRule, RuleAction, WalkCandidate


class SentinelRule(BaseWalkRule):
    """Match a directory by name when its parent also contains a marker entry.

    The marker is looked up next to the candidate directory, in the listing of the
    parent, never inside the candidate itself: ``node_modules`` is matched because a
    ``package.json`` sits beside it.

    Rules compare and hash by value so duplicate lines in a rule file collapse.

    Attributes:
        directory_name (str): Base name of the directories this rule matches.
        marker_name (str): Name of the file or directory that must exist beside it.

    Example:
        >>> from pathlib import Path
        >>> rule = SentinelRule("node_modules", "package.json")
        >>> rule.applies(WalkCandidate(Path("/p/node_modules"), "p/node_modules", {"package.json", "node_modules"}))
        True
        >>> rule.applies(WalkCandidate(Path("/p/node_modules"), "p/node_modules", {"node_modules"}))
        False
        >>> rule == SentinelRule("node_modules", "package.json")
        True
    """

    action = RuleAction.MATCH

    def __init__(self, directory_name: str, marker_name: str) -> None:
        """Initialize a SentinelRule.

        Args:
            directory_name: Base name of the directory to match.
            marker_name: Name of the marker entry expected beside the directory.

        Raises:
            ValueError: If either name is empty or contains a path separator.
        """
        for label, value in (("directory name", directory_name), ("marker name", marker_name)):
            if not value or "/" in value or value in (".", ".."):
                raise ValueError(f"Invalid sentinel {label}: {value!r}")
        self.directory_name = directory_name
        self.marker_name = marker_name

    def applies(self, candidate: WalkCandidate) -> bool:
        return candidate.name == self.directory_name and candidate.has_sibling(self.marker_name)

    def describe(self) -> str:
        return f"{self.directory_name} beside {self.marker_name}"

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, SentinelRule):
            return False
        return self.directory_name == other.directory_name and self.marker_name == other.marker_name

    def __hash__(self) -> int:
        return hash((self.directory_name, self.marker_name))

    def __repr__(self) -> str:
        return f"SentinelRule(directory_name={self.directory_name!r}, marker_name={self.marker_name!r})"
