"""Rules for classifying directories during a walk."""

from .base_rules import BaseWalkRule, RuleAction, WalkCandidate
from .fixed_rules import FixedPathRules
from .rule_set import RuleSet
from .sentinel_rules import SentinelRule
from .skip_rules import SkipRules

__all__ = [
    "BaseWalkRule",
    "FixedPathRules",
    "RuleAction",
    "RuleSet",
    "SentinelRule",
    "SkipRules",
    "WalkCandidate",
]
