"""Qdrant-backed vector store module."""

from qdrant_docstore.vectorstore.client import QdrantRestClient
from qdrant_docstore.vectorstore.codec import POINT_ID_FIELD, PayloadCodec
from qdrant_docstore.vectorstore.filters import (
    FilterMatch,
    SearchOptions,
    apply_score_threshold,
    build_must_match_filter,
    resolve_options,
)
from qdrant_docstore.vectorstore.models import (
    DEFAULT_COLLECTION_CONFIG,
    CollectionConfig,
    Point,
    ScoredPoint,
    ScrollPage,
)
from qdrant_docstore.vectorstore.store import QdrantDocumentStore

__all__ = [
    "DEFAULT_COLLECTION_CONFIG",
    "POINT_ID_FIELD",
    "CollectionConfig",
    "FilterMatch",
    "PayloadCodec",
    "Point",
    "QdrantDocumentStore",
    "QdrantRestClient",
    "ScoredPoint",
    "ScrollPage",
    "SearchOptions",
    "apply_score_threshold",
    "build_must_match_filter",
    "resolve_options",
]
