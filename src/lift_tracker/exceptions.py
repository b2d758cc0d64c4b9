"""
Custom exceptions for the Lift Tracker.

Every error carries a message, an ErrorCode and optional details. The
persistence coordinator absorbs all of them: loading degrades through
remote, local and seed data, and saving reports remote failures in its
result instead of raising.
"""

from typing import Any, Dict, Optional
from enum import Enum


class ErrorCode(str, Enum):
    """Error codes for consistent error reporting."""

    INTERNAL_ERROR = "INTERNAL_ERROR"

    # Remote store errors
    REMOTE_ERROR = "REMOTE_ERROR"
    REMOTE_NOT_FOUND = "REMOTE_NOT_FOUND"

    # Data errors
    DECODE_ERROR = "DECODE_ERROR"


class LiftTrackerError(Exception):
    """
    Base exception for all Lift Tracker errors.

    Attributes:
        message: Human-readable error message
        code: Error code from ErrorCode enum
        details: Optional dictionary with additional error details
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to a dictionary for diagnostics."""
        result: Dict[str, Any] = {
            "error": {
                "code": self.code.value,
                "message": self.message,
            }
        }
        if self.details:
            result["error"]["details"] = self.details
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code.value}, message={self.message!r})"


class RemoteError(LiftTrackerError):
    """Raised on a non-2xx response or transport failure from the remote API."""

    def __init__(
        self,
        message: str,
        status: Optional[int] = None,
        body: str = "",
        code: ErrorCode = ErrorCode.REMOTE_ERROR,
    ) -> None:
        self.status = status
        self.body = body
        details: Dict[str, Any] = {}
        if status is not None:
            details["status"] = status
        if body:
            details["body"] = body
        super().__init__(message=message, code=code, details=details)


class NotFoundError(RemoteError):
    """Raised when the remote file does not exist (HTTP 404)."""

    def __init__(self, path: str, body: str = "") -> None:
        self.path = path
        super().__init__(
            message=f"Remote file not found: {path}",
            status=404,
            body=body,
            code=ErrorCode.REMOTE_NOT_FOUND,
        )


class DecodeError(LiftTrackerError):
    """Raised when stored content is not valid base64, UTF-8 or JSON."""

    def __init__(self, message: str, source: Optional[str] = None) -> None:
        details = {"source": source} if source else None
        super().__init__(message=message, code=ErrorCode.DECODE_ERROR, details=details)
        self.source = source
