"""Pruning directory walk producing the directories to exclude from backups."""

from .match_result import MatchResult
from .permission_action import PermissionAction
from .pruning_walker import PruningWalker, walk

__all__ = [
    "MatchResult",
    "PermissionAction",
    "PruningWalker",
    "walk",
]
