from typing import Optional


class TreeBuildError(Exception):
    """
    Exception raised when the directory walk cannot complete.

    Resolving a path to its canonical form or enumerating a directory is a structural
    step: if it fails anywhere, the whole tree is invalid and no partial result is
    produced. The underlying ``OSError`` is kept as ``__cause__`` when the error is
    raised with ``raise ... from``.

    Attributes:
        path (str): The path whose resolution or enumeration failed.
        reason (str): Short description of the failure.

    Example:
        >>> error = TreeBuildError("/srv/data", "Permission denied")
        >>> str(error)
        "Failed to build tree at '/srv/data': Permission denied"
    """

    def __init__(self, path: str, reason: Optional[str] = None) -> None:
        """
        Initialize the exception with the failing path.

        Args:
            path (str): The path that could not be resolved or listed.
            reason (str, optional): Description of the failure. Defaults to "unknown error".
        """
        self.path = path
        self.reason = reason or "unknown error"
        super().__init__(f"Failed to build tree at '{path}': {self.reason}")

    @property
    def is_permission_error(self) -> bool:
        """Whether the failure was caused by denied access."""
        return isinstance(self.__cause__, PermissionError)
