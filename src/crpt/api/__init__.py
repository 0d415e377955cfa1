"""CRPT API client - rate-limited document registration."""

from crpt.api.client import CREATE_DOCUMENT_PATH, CrptApi, TimeUnit
from crpt.api.submitter import DocumentSubmitter, build_envelope, parse_document_id
from crpt.api.tokens import EnvTokenProvider, TokenProvider
from crpt.api.transport import RequestsTransport, Transport, TransportResponse

__all__ = [
    "CREATE_DOCUMENT_PATH",
    "CrptApi",
    "TimeUnit",
    "DocumentSubmitter",
    "build_envelope",
    "parse_document_id",
    "EnvTokenProvider",
    "TokenProvider",
    "RequestsTransport",
    "Transport",
    "TransportResponse",
]
