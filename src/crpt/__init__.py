"""crpt - rate-limited client for the CRPT document registration API."""

from crpt.api import (
    CrptApi,
    DocumentSubmitter,
    EnvTokenProvider,
    RequestsTransport,
    TimeUnit,
    TransportResponse,
)
from crpt.exceptions import (
    AcquireCancelledError,
    ConfigurationError,
    CrptError,
    ErrorKind,
    HttpError,
    InvalidArgumentError,
    ProtocolError,
)
from crpt.models import Document, DocumentId, Product
from crpt.utils import CancellationToken, ManualClock, MonotonicClock, SlidingWindowLimiter

__all__ = [
    "CrptApi",
    "DocumentSubmitter",
    "EnvTokenProvider",
    "RequestsTransport",
    "TimeUnit",
    "TransportResponse",
    "AcquireCancelledError",
    "ConfigurationError",
    "CrptError",
    "ErrorKind",
    "HttpError",
    "InvalidArgumentError",
    "ProtocolError",
    "Document",
    "DocumentId",
    "Product",
    "CancellationToken",
    "ManualClock",
    "MonotonicClock",
    "SlidingWindowLimiter",
]
