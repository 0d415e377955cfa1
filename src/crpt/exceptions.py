"""Custom exceptions for the CRPT client."""

from enum import Enum


class ErrorKind(Enum):
    """Closed set of failure categories raised by the client."""

    INVALID_ARGUMENT = "invalid_argument"
    CANCELLED = "cancelled"
    HTTP = "http"
    PROTOCOL = "protocol"
    CONFIGURATION = "configuration"


class CrptError(Exception):
    """Base exception for CRPT client errors."""

    kind: ErrorKind


class InvalidArgumentError(CrptError, ValueError):
    """Raised on construction-time misuse or a violated precondition."""

    kind = ErrorKind.INVALID_ARGUMENT


class AcquireCancelledError(CrptError):
    """Raised when a wait for a rate-limiter slot was cancelled."""

    kind = ErrorKind.CANCELLED

    def __init__(self, message: str = "Rate limiter acquire was cancelled") -> None:
        super().__init__(message)


class HttpError(CrptError):
    """Raised when the remote API answers with a non-2xx status."""

    kind = ErrorKind.HTTP

    def __init__(self, status_code: int, body: str) -> None:
        self.status_code = status_code
        self.body = body
        msg = f"HTTP {status_code}"
        if body:
            msg += f": {body}"
        super().__init__(msg)


class ProtocolError(CrptError):
    """Raised when a 2xx response does not carry a usable document id."""

    kind = ErrorKind.PROTOCOL

    def __init__(self, message: str, body: str | None = None) -> None:
        self.body = body
        super().__init__(message)


class ConfigurationError(CrptError):
    """Raised when configuration is invalid or missing."""

    kind = ErrorKind.CONFIGURATION
