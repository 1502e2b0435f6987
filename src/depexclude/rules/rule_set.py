"""Ordered combination of skip and match rules evaluated per directory."""

from collections import defaultdict
from typing import TYPE_CHECKING, Dict, Iterable, List, Optional

from depexclude.types import PathType

from .base_rules import BaseWalkRule, WalkCandidate
from .fixed_rules import FixedPathRules
from .sentinel_rules import SentinelRule
from .skip_rules import SkipRules

if TYPE_CHECKING:
    from depexclude.rule_store import RuleConfig


class RuleSet:
    """The complete, ordered set of rules the walker classifies directories with.

    Rules are evaluated in a fixed order and the first applicable rule wins:

    1. skip rules (prune silently, take precedence over everything else)
    2. sentinel rules (match a directory name with a marker beside it)
    3. fixed path rules (match an exact root-relative path)

    Sentinel rules are indexed by directory name, so classifying a directory costs one
    dictionary lookup plus a marker test for each rule sharing that name.

    Attributes:
        skip_rules (SkipRules): Paths that are never traversed.
        sentinel_rules (List[SentinelRule]): Sentinel rules in insertion order.
        fixed_path_rules (FixedPathRules): Root-relative paths that always match.

    Example:
        >>> from pathlib import Path
        >>> rule_set = RuleSet(
        ...     SkipRules("/home/u", ["/home/u/Library"]),
        ...     [SentinelRule("node_modules", "package.json")],
        ...     FixedPathRules([".nvm"]),
        ... )
        >>> rule = rule_set.classify(WalkCandidate(Path("/home/u/.nvm"), ".nvm", set()))
        >>> rule.describe()
        'fixed path'
        >>> rule_set.classify(WalkCandidate(Path("/home/u/src"), "src", set())) is None
        True
    """

    def __init__(
        self,
        skip_rules: SkipRules,
        sentinel_rules: Iterable[SentinelRule] = (),
        fixed_path_rules: Optional[FixedPathRules] = None,
    ) -> None:
        self.skip_rules = skip_rules
        self.sentinel_rules: List[SentinelRule] = []
        self.fixed_path_rules = fixed_path_rules if fixed_path_rules is not None else FixedPathRules()
        self._sentinels_by_name: Dict[str, List[SentinelRule]] = defaultdict(list)

        for rule in sentinel_rules:
            self.add_sentinel_rule(rule)

    @classmethod
    def from_config(cls, config: "RuleConfig") -> "RuleSet":
        """Build a RuleSet from a loaded rule configuration.

        Args:
            config: The configuration produced by :func:`depexclude.rule_store.load_config`.

        Returns:
            A RuleSet anchored at the configuration's root.
        """
        return cls.from_rules(config.root, config.skip_paths, config.sentinel_rules, config.fixed_paths)

    @classmethod
    def from_rules(
        cls,
        root: PathType,
        skip_paths: Iterable[PathType] = (),
        sentinel_rules: Iterable[SentinelRule] = (),
        fixed_paths: Iterable[str] = (),
    ) -> "RuleSet":
        """Build a RuleSet from plain rule collections."""
        return cls(SkipRules(root, skip_paths), sentinel_rules, FixedPathRules(fixed_paths))

    def add_sentinel_rule(self, rule: SentinelRule) -> None:
        """Add a sentinel rule. Rules equal to an existing one are ignored.

        Raises:
            TypeError: If rule is not a SentinelRule.
        """
        if not isinstance(rule, SentinelRule):
            raise TypeError(f"Rule must be a SentinelRule, got {type(rule)}")
        if rule in self._sentinels_by_name[rule.directory_name]:
            return
        self.sentinel_rules.append(rule)
        self._sentinels_by_name[rule.directory_name].append(rule)

    def classify(self, candidate: WalkCandidate) -> Optional[BaseWalkRule]:
        """Return the first rule that applies to a directory, or None to descend into it.

        Args:
            candidate: The directory being classified.

        Returns:
            The applicable rule. Its ``action`` tells the walker whether to skip the
            directory or report it; in both cases the walker does not descend.
        """
        if self.skip_rules.applies(candidate):
            return self.skip_rules

        for rule in self._sentinels_by_name.get(candidate.name, ()):
            if rule.applies(candidate):
                return rule

        if self.fixed_path_rules.applies(candidate):
            return self.fixed_path_rules

        return None

    def has_match_rules(self) -> bool:
        """Check whether any rule could ever produce a match."""
        return bool(self.sentinel_rules) or self.fixed_path_rules.has_rules()
