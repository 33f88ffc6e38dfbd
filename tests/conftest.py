"""Pytest configuration and shared fixtures."""

from collections.abc import AsyncGenerator

import httpx
import pytest

from qdrant_docstore.config import QdrantSettings
from qdrant_docstore.vectorstore.store import QdrantDocumentStore
from tests.fakes import BASE_URL, FakeEmbedder, FakeQdrant


@pytest.fixture
def fake_qdrant() -> FakeQdrant:
    """In-memory Qdrant server."""
    return FakeQdrant()


@pytest.fixture
async def http_client(fake_qdrant: FakeQdrant) -> AsyncGenerator[httpx.AsyncClient, None]:
    """HTTP client routed to the fake Qdrant server.

    Yields:
        AsyncClient configured for testing.
    """
    transport = httpx.MockTransport(fake_qdrant.handler)
    async with httpx.AsyncClient(transport=transport) as client:
        yield client


@pytest.fixture
def embedder() -> FakeEmbedder:
    return FakeEmbedder()


@pytest.fixture
def qdrant_settings() -> QdrantSettings:
    return QdrantSettings(
        base_url=BASE_URL,
        collection_name="cities",
        index_keys=["metadata.country"],
    )


@pytest.fixture
def store(
    embedder: FakeEmbedder,
    qdrant_settings: QdrantSettings,
    http_client: httpx.AsyncClient,
) -> QdrantDocumentStore:
    return QdrantDocumentStore(embedder, qdrant_settings, client=http_client)
