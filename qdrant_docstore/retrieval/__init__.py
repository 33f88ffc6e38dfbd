"""Retrieval module."""

from qdrant_docstore.retrieval.retriever import VectorStoreRetriever

__all__ = [
    "VectorStoreRetriever",
]
