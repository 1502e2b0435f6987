"""Permission action enum for handling unreadable directories during a walk."""

from enum import Enum


class PermissionAction(str, Enum):
    """Action to take when a directory below the root cannot be listed.

    Values:
        IGNORE: Record the error, treat the subtree as a dead end and continue (default behavior)
        RAISE: Raise an EntryAccessError immediately
    """

    IGNORE = "ignore"
    RAISE = "raise"
