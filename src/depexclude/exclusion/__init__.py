"""Backup exclusion backends and the applier that drives them."""

from .applier import ExclusionApplier, ExclusionOutcome, ExclusionStatus
from .backends import BaseExclusionBackend, TimeMachineBackend
from .disk_usage import disk_usage, format_size

__all__ = [
    "BaseExclusionBackend",
    "ExclusionApplier",
    "ExclusionOutcome",
    "ExclusionStatus",
    "TimeMachineBackend",
    "disk_usage",
    "format_size",
]
