"""Build-fatal exceptions raised by the weaving context."""

from pathlib import Path
from typing import Optional


class WeaveError(Exception):
    """
    Base class for every failure that aborts a weaving run.

    None of these are retried: weaving is deterministic for the same inputs.
    """


class InvocationError(WeaveError):
    """
    Exception raised when the AspectJ compiler cannot be started or fails while running.

    Attributes:
        message: Error description
        original_error: The exception raised by the process layer
    """

    def __init__(self, message: str, original_error: Optional[Exception] = None):
        self.message = message
        self.original_error = original_error

        parts = [message]
        if original_error:
            parts.append(f"Original error: {original_error}")

        super().__init__("\n".join(parts))


class StagingIOError(WeaveError):
    """
    Exception raised when the staging directory cannot be created, copied or cleaned.

    Attributes:
        message: Error description
        path: Directory the failing operation was working on
        original_error: The underlying OSError
    """

    def __init__(
        self,
        message: str,
        path: Optional[Path] = None,
        original_error: Optional[Exception] = None,
    ):
        self.message = message
        self.path = path
        self.original_error = original_error

        parts = [message]
        if path:
            parts.append(f"Path: {path}")
        if original_error:
            parts.append(f"Original error: {original_error}")

        super().__init__("\n".join(parts))


class CompilationFailed(WeaveError):
    """
    Exception raised when ajc ran to completion but recorded error diagnostics.

    Attributes:
        message: Error description
        result: The WeaveResult of the failed run
    """

    def __init__(self, message: str, result=None):
        self.message = message
        self.result = result
        super().__init__(message)
