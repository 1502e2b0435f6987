from typing import Optional

from depexclude.types import PathType


class DepExcludeError(Exception):
    """Base class for all errors raised by depexclude."""

    pass


class ConfigError(DepExcludeError):
    """
    Exception raised when the rule configuration cannot be created or read.

    This is a fatal error: it is raised before any traversal takes place, either because
    the configuration directory or one of its default files could not be written, because a
    rule file could not be read, or because a rule file contains a malformed line.

    Attributes:
        path (Optional[str]): The configuration file or directory involved, if known.
        line_number (Optional[int]): 1-based line number of a malformed entry, if applicable.

    Example:
        >>> error = ConfigError("Malformed sentinel rule", path="/cfg/sentinels", line_number=3)
        >>> str(error)
        'Malformed sentinel rule (/cfg/sentinels:3)'
    """

    def __init__(self, message: str, path: Optional[PathType] = None, line_number: Optional[int] = None) -> None:
        """
        Initialize the exception.

        Args:
            message (str): Description of what went wrong.
            path (Optional[PathType]): The file or directory involved. Defaults to None.
            line_number (Optional[int]): Line number within ``path``. Defaults to None.
        """
        self.path = str(path) if path is not None else None
        self.line_number = line_number
        location = ""
        if self.path is not None:
            location = f" ({self.path}:{line_number})" if line_number is not None else f" ({self.path})"
        super().__init__(f"{message}{location}")


class WalkError(DepExcludeError):
    """
    Exception raised when the traversal root is nonexistent, not a directory, or unreadable.

    Attributes:
        root (str): The traversal root that could not be walked.

    Example:
        >>> error = WalkError("/no/such/home", "Root path does not exist")
        >>> str(error)
        'Root path does not exist: /no/such/home'
    """

    def __init__(self, root: PathType, reason: str) -> None:
        self.root = str(root)
        super().__init__(f"{reason}: {self.root}")


class EntryAccessError(DepExcludeError):
    """
    Exception describing a directory below the root that could not be listed.

    Instances are normally collected by the walker and reported, not raised: the
    affected subtree is treated as a dead end and the walk continues.

    Attributes:
        path (str): The directory that could not be read.
        cause (Optional[OSError]): The underlying operating system error.

    Example:
        >>> error = EntryAccessError("/home/u/private", PermissionError(13, "Permission denied"))
        >>> str(error)
        'Cannot read directory /home/u/private: [Errno 13] Permission denied'
    """

    def __init__(self, path: PathType, cause: Optional[OSError] = None) -> None:
        self.path = str(path)
        self.cause = cause
        message = f"Cannot read directory {self.path}"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)


class ExclusionApplyError(DepExcludeError):
    """
    Exception raised when the backup tool fails to query or set an exclusion for a path.

    Attributes:
        path (str): The path whose exclusion state could not be queried or changed.
        reason (str): Human-readable failure reason.

    Example:
        >>> error = ExclusionApplyError("/home/u/app/node_modules", "tmutil exited with status 1")
        >>> error.reason
        'tmutil exited with status 1'
    """

    def __init__(self, path: PathType, reason: str) -> None:
        self.path = str(path)
        self.reason = reason
        super().__init__(f"Failed to exclude {self.path}: {reason}")
