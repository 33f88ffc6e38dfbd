"""Document store adapter for the Qdrant REST API."""

__version__ = "0.1.0"

from qdrant_docstore.documents.models import Document
from qdrant_docstore.vectorstore.filters import FilterMatch, SearchOptions
from qdrant_docstore.vectorstore.store import QdrantDocumentStore

__all__ = [
    "Document",
    "FilterMatch",
    "QdrantDocumentStore",
    "SearchOptions",
    "__version__",
]
