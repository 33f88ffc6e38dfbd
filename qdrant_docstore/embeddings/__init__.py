"""Embedding providers consumed by the document store."""

from qdrant_docstore.embeddings.models import EmbeddingResult
from qdrant_docstore.embeddings.service import (
    EmbeddingService,
    HTTPEmbeddingService,
    NilEmbedder,
)

__all__ = [
    "EmbeddingResult",
    "EmbeddingService",
    "HTTPEmbeddingService",
    "NilEmbedder",
]
