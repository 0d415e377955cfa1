"""
Document submission orchestration.

Gates every call to the registration endpoint through a shared
SlidingWindowLimiter, then posts the signed document and parses the id.
"""

from __future__ import annotations

import base64
import json
import logging
from typing import Optional
from urllib.parse import urlencode

from crpt.api.tokens import TokenProvider
from crpt.api.transport import Transport, TransportResponse
from crpt.exceptions import HttpError, InvalidArgumentError, ProtocolError
from crpt.models import Document, DocumentId
from crpt.utils.cancellation import CancellationToken
from crpt.utils.rate_limiter import SlidingWindowLimiter

DOCUMENT_FORMAT = "MANUAL"
INTRODUCE_GOODS_TYPE = "LP_INTRODUCE_GOODS"


def build_envelope(document: Document, signature: str, product_group: str) -> dict:
    """
    Wrap a serialized document into the request body of the create endpoint.

    :param document: Document to register
    :param signature: Detached signature of the document, passed through as-is
    :param product_group: Product group tag (e.g. 'milk')
    :return: JSON-ready request body
    """
    document_json = json.dumps(document.to_wire(), ensure_ascii=False, separators=(",", ":"))
    return {
        "document_format": DOCUMENT_FORMAT,
        "product_document": base64.b64encode(document_json.encode("utf-8")).decode("ascii"),
        "product_group": product_group,
        "signature": signature,
        "type": INTRODUCE_GOODS_TYPE,
    }


def parse_document_id(response: TransportResponse) -> DocumentId:
    """
    Interpret a transport response.

    :raises HttpError: Non-2xx status
    :raises ProtocolError: 2xx body without a non-empty string 'value'
    """
    if not 200 <= response.status_code < 300:
        raise HttpError(response.status_code, response.body)

    try:
        payload = json.loads(response.body)
    except (TypeError, ValueError) as e:
        raise ProtocolError(f"Response body is not valid JSON: {e}", body=response.body) from e

    if not isinstance(payload, dict):
        raise ProtocolError("Response body is not a JSON object", body=response.body)

    value = payload.get("value")
    if not isinstance(value, str) or not value:
        raise ProtocolError("Response body has no document id in 'value'", body=response.body)
    return DocumentId(value)


class DocumentSubmitter:
    """
    Submits documents to the registration API under a shared rate limit.

    Each submit() makes exactly one token lookup and one transport call after
    admission. Nothing is retried here; callers decide whether to resubmit.
    """

    def __init__(
        self,
        limiter: SlidingWindowLimiter,
        token_provider: TokenProvider,
        transport: Transport,
        url: str,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        if limiter is None:
            raise InvalidArgumentError("limiter is required")
        if token_provider is None:
            raise InvalidArgumentError("token_provider is required")
        if transport is None:
            raise InvalidArgumentError("transport is required")
        if not url:
            raise InvalidArgumentError("url is required")

        self.limiter = limiter
        self.token_provider = token_provider
        self.transport = transport
        self.url = url
        self.logger = logger or logging.getLogger(__name__)

    def submit(
        self,
        document: Document,
        signature: str,
        product_group: str,
        cancel_token: Optional[CancellationToken] = None,
    ) -> DocumentId:
        """Register a document and return its id.

        Args:
            document: Document with at least one product
            signature: Non-empty signature string
            product_group: Non-empty product group tag
            cancel_token: Optional token that aborts the wait for a rate-limit slot

        Returns:
            DocumentId assigned by the remote service

        Raises:
            InvalidArgumentError: A precondition failed; no slot is consumed
            AcquireCancelledError: The wait for a slot was cancelled
            HttpError: The API answered with a non-2xx status
            ProtocolError: A 2xx answer carried no usable id
        """
        self._validate(document, signature, product_group)

        self.limiter.acquire(cancel_token)
        self.logger.debug(f"Admitted submission for product group '{product_group}'")

        body = json.dumps(build_envelope(document, signature, product_group), ensure_ascii=False)
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
            "Authorization": f"Bearer {self.token_provider.get_token()}",
        }
        url = f"{self.url}?{urlencode({'pg': product_group})}"

        response = self.transport.post(url, headers, body)
        try:
            doc_id = parse_document_id(response)
        except HttpError as e:
            self.logger.warning(f"Document submission failed [{e.status_code}]: {e.body}")
            raise
        except ProtocolError as e:
            self.logger.warning(f"Unexpected response for product group '{product_group}': {e}")
            raise

        self.logger.info(f"Registered document {doc_id} (product group '{product_group}')")
        return doc_id

    @staticmethod
    def _validate(document: Document, signature: str, product_group: str) -> None:
        if document is None:
            raise InvalidArgumentError("document is required")
        if not document.products:
            raise InvalidArgumentError("document must contain at least one product")
        if not signature:
            raise InvalidArgumentError("signature must be a non-empty string")
        if not product_group:
            raise InvalidArgumentError("product_group must be a non-empty string")
