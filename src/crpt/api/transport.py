"""HTTP transport used to reach the registration API."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Protocol

import requests


@dataclass(frozen=True)
class TransportResponse:
    status_code: int
    body: str


class Transport(Protocol):
    """Synchronous POST capability.

    Network failures are raised as the implementation's own exceptions,
    separate from HTTP status handling.
    """

    def post(self, url: str, headers: Mapping[str, str], body: str) -> TransportResponse:
        ...


class RequestsTransport:
    """Transport backed by a `requests.Session`.

    Example:
        ```python
        with RequestsTransport(timeout=(5.0, 30.0)) as transport:
            resp = transport.post(url, {"Content-Type": "application/json"}, "{}")
        ```
    """

    def __init__(
        self,
        timeout: float | tuple[float, float] = (5.0, 30.0),
        session: requests.Session | None = None,
    ) -> None:
        self.timeout = timeout
        self._owns_session = session is None
        self.session = session or requests.Session()

    def post(self, url: str, headers: Mapping[str, str], body: str) -> TransportResponse:
        response = self.session.post(
            url,
            data=body.encode("utf-8"),
            headers=dict(headers),
            timeout=self.timeout,
        )
        return TransportResponse(status_code=response.status_code, body=response.text)

    def close(self) -> None:
        """Close the session if this transport created it."""
        if self._owns_session:
            self.session.close()

    def __enter__(self) -> RequestsTransport:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
