"""Backends that query and change the backup exclusion state of a path."""

import shutil
import subprocess
from abc import ABC, abstractmethod
from typing import List, Optional

from depexclude.exceptions import ExclusionApplyError
from depexclude.types import PathType


class BaseExclusionBackend(ABC):
    """
    Abstract interface to a backup mechanism's per-path exclusion flag.

    Implementations must be idempotent: adding an exclusion to a path that is already
    excluded must not fail. Failures are reported by raising ExclusionApplyError.

    Example:
        >>> class MemoryBackend(BaseExclusionBackend):
        ...     name = "memory"
        ...     def __init__(self):
        ...         self.excluded = set()
        ...     def is_excluded(self, path):
        ...         return str(path) in self.excluded
        ...     def add_exclusion(self, path):
        ...         self.excluded.add(str(path))
        >>> backend = MemoryBackend()
        >>> backend.add_exclusion("/home/u/app/node_modules")
        >>> backend.is_excluded("/home/u/app/node_modules")
        True
    """

    name: str = "backup"

    @abstractmethod
    def is_excluded(self, path: PathType) -> bool:
        """
        Check whether a path is currently excluded from backups.

        Args:
            path (PathType): Absolute path to check.

        Returns:
            bool: True if the path is excluded.

        Raises:
            ExclusionApplyError: If the exclusion state cannot be queried.
        """
        pass

    @abstractmethod
    def add_exclusion(self, path: PathType) -> None:
        """
        Exclude a path from future backups.

        Args:
            path (PathType): Absolute path to exclude.

        Raises:
            ExclusionApplyError: If the exclusion cannot be set.
        """
        pass


class TimeMachineBackend(BaseExclusionBackend):
    """Exclusion backend for macOS Time Machine, driven through ``tmutil``.

    ``tmutil addexclusion`` without ``-p`` sets a sticky exclusion stored with the item
    itself, so it follows the directory if it is moved and needs no administrator rights.
    ``tmutil isexcluded`` prints ``[Excluded]`` or ``[Included]`` before the path.

    Attributes:
        executable (str): The tmutil command to run.
        timeout (float): Seconds to wait for each tmutil invocation.
    """

    name = "Time Machine"

    EXCLUDED_MARKER = "[Excluded]"

    def __init__(self, executable: str = "tmutil", timeout: float = 30.0) -> None:
        self.executable = executable
        self.timeout = timeout

    @staticmethod
    def is_available(executable: str = "tmutil") -> bool:
        """Check whether the tmutil executable can be found on PATH."""
        return shutil.which(executable) is not None

    def _run(self, args: List[str], path: PathType) -> str:
        command = [self.executable, *args, str(path)]
        try:
            result = subprocess.run(command, capture_output=True, text=True, timeout=self.timeout, check=False)
        except FileNotFoundError:
            raise ExclusionApplyError(path, f"{self.executable} not found")
        except subprocess.TimeoutExpired:
            raise ExclusionApplyError(path, f"{self.executable} {args[0]} timed out after {self.timeout:g}s")
        except OSError as e:
            raise ExclusionApplyError(path, f"cannot run {self.executable}: {e}")

        if result.returncode != 0:
            detail: Optional[str] = (result.stderr or result.stdout).strip() or None
            reason = f"{self.executable} {args[0]} exited with status {result.returncode}"
            raise ExclusionApplyError(path, f"{reason}: {detail}" if detail else reason)
        return result.stdout

    def is_excluded(self, path: PathType) -> bool:
        return self.EXCLUDED_MARKER in self._run(["isexcluded"], path)

    def add_exclusion(self, path: PathType) -> None:
        self._run(["addexclusion"], path)
