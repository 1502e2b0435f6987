"""Applying backup exclusions to matched directories."""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Optional

from depexclude.exceptions import ExclusionApplyError
from depexclude.exclusion.backends import BaseExclusionBackend
from depexclude.exclusion.disk_usage import disk_usage
from depexclude.types import PathType


class ExclusionStatus(str, Enum):
    """Outcome of applying an exclusion to one path.

    Values:
        ALREADY_EXCLUDED: The path was excluded before this run; nothing was changed
        EXCLUDED: The exclusion was added by this run
        WOULD_EXCLUDE: Dry run only; the exclusion would have been added
        FAILED: Querying or adding the exclusion failed
    """

    ALREADY_EXCLUDED = "already_excluded"
    EXCLUDED = "excluded"
    WOULD_EXCLUDE = "would_exclude"
    FAILED = "failed"


@dataclass(frozen=True)
class ExclusionOutcome:
    """Result of ExclusionApplier.apply for a single path.

    Attributes:
        path: The path the exclusion was applied to.
        status: What happened.
        size_bytes: Disk usage of the path when it was (or would be) excluded and
            measuring is enabled, otherwise None.
        reason: Failure reason when ``status`` is FAILED, otherwise None.
    """

    path: Path
    status: ExclusionStatus
    size_bytes: Optional[int] = None
    reason: Optional[str] = None

    @property
    def failed(self) -> bool:
        return self.status == ExclusionStatus.FAILED


class ExclusionApplier:
    """Applies backup exclusions to paths one at a time, never raising for a single path.

    For each path the applier queries the current exclusion state, adds the exclusion if
    it is not set yet, and measures the size that will no longer be backed up. Backend
    failures are turned into FAILED outcomes so that the remaining paths are still
    processed.

    Calls are made serially; the applier is meant to be driven by a single consumer.

    Attributes:
        backend (BaseExclusionBackend): The backup mechanism to query and change.
        dry_run (bool): Only query, never add exclusions.
        measure_size (bool): Whether to measure disk usage of newly excluded paths.

    Example:
        >>> class MemoryBackend(BaseExclusionBackend):
        ...     def __init__(self):
        ...         self.excluded = set()
        ...     def is_excluded(self, path):
        ...         return str(path) in self.excluded
        ...     def add_exclusion(self, path):
        ...         self.excluded.add(str(path))
        >>> applier = ExclusionApplier(MemoryBackend(), measure_size=False)
        >>> applier.apply("/home/u/app/node_modules").status.value
        'excluded'
        >>> applier.apply("/home/u/app/node_modules").status.value
        'already_excluded'
    """

    def __init__(
        self,
        backend: BaseExclusionBackend,
        dry_run: bool = False,
        measure_size: bool = True,
        size_function: Optional[Callable[[PathType], int]] = None,
    ) -> None:
        """Initialize an ExclusionApplier.

        Args:
            backend: The backup mechanism to query and change.
            dry_run: Only report what would be excluded. Defaults to False.
            measure_size: Measure disk usage of newly excluded paths. Defaults to True.
            size_function: Function measuring a path in bytes. Defaults to disk_usage.
        """
        self.backend = backend
        self.dry_run = dry_run
        self.measure_size = measure_size
        self.size_function = size_function if size_function is not None else disk_usage

    def apply(self, path: PathType) -> ExclusionOutcome:
        """Exclude a path from backups unless it is already excluded.

        Args:
            path: Absolute path of a matched directory.

        Returns:
            The outcome. Backend failures are reported as FAILED, not raised.
        """
        target = Path(path)
        try:
            if self.backend.is_excluded(target):
                return ExclusionOutcome(target, ExclusionStatus.ALREADY_EXCLUDED)
            if not self.dry_run:
                self.backend.add_exclusion(target)
        except ExclusionApplyError as e:
            return ExclusionOutcome(target, ExclusionStatus.FAILED, reason=e.reason)

        size_bytes = self.size_function(target) if self.measure_size else None
        status = ExclusionStatus.WOULD_EXCLUDE if self.dry_run else ExclusionStatus.EXCLUDED
        return ExclusionOutcome(target, status, size_bytes=size_bytes)
