from abc import ABC, abstractmethod
from enum import Enum
from pathlib import Path
from typing import AbstractSet, Optional


class RuleAction(str, Enum):
    """What the walker does with a directory once a rule applies to it.

    Values:
        SKIP: Prune the directory silently. It is neither visited nor reported.
        MATCH: Report the directory as a match and prune it.
    """

    SKIP = "skip"
    MATCH = "match"


class WalkCandidate:
    """A directory encountered during traversal, as seen by the rules.

    The walker builds one candidate per subdirectory entry while listing the parent,
    so rules can inspect the parent's listing without touching the filesystem again.

    Attributes:
        path (Path): Absolute path of the directory.
        relative_path (str): Path relative to the traversal root, with forward slashes.
        name (str): Base name of the directory.
        sibling_names (AbstractSet[str]): Names of all entries in the parent directory.
        is_symlink (bool): True if the entry is a symbolic link to a directory.

    Example:
        >>> candidate = WalkCandidate(Path("/home/u/app/node_modules"), "app/node_modules",
        ...                           {"node_modules", "package.json"})
        >>> candidate.name
        'node_modules'
        >>> candidate.has_sibling("package.json")
        True
    """

    def __init__(
        self,
        path: Path,
        relative_path: str,
        sibling_names: AbstractSet[str],
        is_symlink: bool = False,
        name: Optional[str] = None,
    ) -> None:
        self.path = path
        self.relative_path = relative_path
        self.name = name if name is not None else path.name
        self.sibling_names = sibling_names
        self.is_symlink = is_symlink

    def has_sibling(self, name: str) -> bool:
        """Check whether an entry called ``name`` exists next to this directory."""
        return name in self.sibling_names

    def __repr__(self) -> str:
        return f"WalkCandidate(relative_path={self.relative_path!r}, is_symlink={self.is_symlink})"


class BaseWalkRule(ABC):
    """
    Abstract base class for the predicates evaluated against each directory during a walk.

    Every rule is tagged with a :class:`RuleAction`. Skip rules prune a directory without
    reporting it; match rules report it and prune it. The walker never descends into a
    directory for which any rule applies.

    Example:
        >>> class NamedRule(BaseWalkRule):
        ...     action = RuleAction.MATCH
        ...     def applies(self, candidate):
        ...         return candidate.name == "build"
        >>> rule = NamedRule()
        >>> rule.applies(WalkCandidate(Path("/r/build"), "build", set()))
        True
        >>> rule.describe()
        'NamedRule'
    """

    action: RuleAction

    @abstractmethod
    def applies(self, candidate: WalkCandidate) -> bool:
        """
        Determine whether this rule applies to a directory candidate.

        Args:
            candidate (WalkCandidate): The directory being classified.

        Returns:
            bool: True if the rule applies and the walker should act on ``action``.
        """
        pass

    def describe(self) -> str:
        """Return a short human-readable description of the rule, used in reports."""
        return self.__class__.__name__
