"""CrptApi - entry point for registering documents with the CRPT API."""

from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING

from crpt.api.submitter import DocumentSubmitter
from crpt.api.transport import RequestsTransport
from crpt.exceptions import ConfigurationError, InvalidArgumentError
from crpt.utils.clock import MonotonicClock
from crpt.utils.config import DEFAULT_BASE_URL, ClientConfig
from crpt.utils.logger import LoggerFactory
from crpt.utils.rate_limiter import SlidingWindowLimiter

if TYPE_CHECKING:
    from crpt.api.tokens import TokenProvider
    from crpt.api.transport import Transport
    from crpt.models import Document, DocumentId
    from crpt.utils.cancellation import CancellationToken
    from crpt.utils.clock import Clock

CREATE_DOCUMENT_PATH = "/lk/documents/create"


class TimeUnit(Enum):
    SECOND = 1.0
    MINUTE = 60.0
    HOUR = 3600.0
    DAY = 86400.0

    @property
    def seconds(self) -> float:
        return self.value

    @classmethod
    def parse(cls, name: str) -> TimeUnit:
        try:
            return cls[name.strip().upper()]
        except KeyError:
            raise ConfigurationError(
                f"Unknown time unit: '{name}'. Valid units: {[u.name.lower() for u in cls]}"
            ) from None


class CrptApi:
    """Thread-safe client allowing at most `request_limit` calls per `time_unit`.

    Example:
        ```python
        api = CrptApi(TimeUnit.SECOND, 10, EnvTokenProvider())
        doc_id = api.create_introduce_goods(document, signature, "milk")
        ```
    """

    def __init__(
        self,
        time_unit: TimeUnit,
        request_limit: int,
        token_provider: TokenProvider,
        base_url: str = DEFAULT_BASE_URL,
        transport: Transport | None = None,
        clock: Clock | None = None,
        logger: logging.Logger | None = None,
        timeout: tuple[float, float] = (5.0, 30.0),
    ) -> None:
        if time_unit is None:
            raise InvalidArgumentError("time_unit is required")
        if not base_url:
            raise InvalidArgumentError("base_url is required")
        if token_provider is None:
            raise InvalidArgumentError("token_provider is required")

        self.logger = logger or logging.getLogger(__name__)
        self.base_url = base_url.rstrip("/")
        # Limiter validates request_limit; it must fail before a session is opened
        self.limiter = SlidingWindowLimiter(
            window=time_unit.seconds,
            limit=request_limit,
            clock=clock or MonotonicClock(),
            logger=self.logger,
        )
        self._owns_transport = transport is None
        self.transport = transport or RequestsTransport(timeout=timeout)
        self.submitter = DocumentSubmitter(
            limiter=self.limiter,
            token_provider=token_provider,
            transport=self.transport,
            url=self.base_url + CREATE_DOCUMENT_PATH,
            logger=self.logger,
        )

    @classmethod
    def from_config(
        cls,
        token_provider: TokenProvider,
        config: ClientConfig | None = None,
        transport: Transport | None = None,
    ) -> CrptApi:
        """Build a client from configs/crpt.yaml (plus env overrides).

        Args:
            token_provider: Source of bearer tokens
            config: Loaded configuration (default: ClientConfig())
            transport: Optional transport; a RequestsTransport with the
                configured timeouts is created otherwise
        """
        config = config or ClientConfig()
        log_cfg = config.logging
        logger = LoggerFactory(
            log_dir=log_cfg["log_dir"],
            level=log_cfg["level"],
            console_output=bool(log_cfg["console_output"]),
        ).get_logger("crpt.api")

        api = cls(
            time_unit=TimeUnit.parse(config.time_unit),
            request_limit=config.request_limit,
            token_provider=token_provider,
            base_url=config.base_url,
            transport=transport,
            logger=logger,
            timeout=config.timeout,
        )
        logger.info(
            f"CRPT client ready: {api.base_url} "
            f"({api.limiter.limit} requests per {config.time_unit})"
        )
        return api

    def create_introduce_goods(
        self,
        document: Document,
        signature: str,
        product_group: str,
        cancel_token: CancellationToken | None = None,
    ) -> DocumentId:
        """Register goods introduced into circulation.

        Blocks while the rate limit is exhausted. See DocumentSubmitter.submit
        for the errors raised.
        """
        return self.submitter.submit(document, signature, product_group, cancel_token)

    def close(self) -> None:
        if self._owns_transport:
            self.transport.close()

    def __enter__(self) -> CrptApi:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
