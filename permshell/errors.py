"""
Shell errors - Recoverable failures raised by command handlers.

Every error carries the message shown to the user and the color it is
rendered in. They are caught at the command boundary in `Shell.execute`;
none of them ends the session.
"""


class ShellError(Exception):
    """Base class for command failures.

    Attributes:
        message: User-facing text
        color: Display color name ("red", "yellow", ...)
    """

    color = "red"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(ShellError):
    """Target path does not exist."""


class NotDirectoryError(ShellError):
    """Target exists but is not a directory."""


class NotEmptyError(ShellError):
    """Directory still has entries."""

    color = "yellow"


class PermissionDeniedError(ShellError):
    """The authorization gate rejected the operation."""


class InvalidInputError(ShellError):
    """Malformed arguments (bad permission code, missing operands, ...)."""

    color = "yellow"


class OperationFailedError(ShellError):
    """The underlying filesystem call failed."""
