"""Shared fixtures for CRPT client tests."""

from unittest.mock import Mock

import pytest

from crpt.api.transport import TransportResponse
from crpt.models import Document, Product

DOC_ID = "11111111-2222-3333-4444-555555555555"


@pytest.fixture
def minimal_document():
    """Document with a single product and all required fields populated."""
    product = Product(
        owner_inn="1234567890",
        producer_inn="1234567890",
        production_date="2025-08-25",
        tnved_code="00000000",
        uit_code="0" * 50,
    )
    return Document(
        participant_inn="1234567890",
        producer_inn="1234567890",
        production_date="2025-08-25",
        production_type="OWN_PRODUCTION",
        products=[product],
    )


@pytest.fixture
def token_provider():
    """Token provider stub returning a fixed token."""
    provider = Mock()
    provider.get_token.return_value = "token"
    return provider


@pytest.fixture
def ok_transport():
    """Transport stub answering 200 with a document id."""
    transport = Mock()
    transport.post.return_value = TransportResponse(200, f'{{"value":"{DOC_ID}"}}')
    return transport
