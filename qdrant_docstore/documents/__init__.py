"""Document model."""

from qdrant_docstore.documents.models import Document, Metadata

__all__ = [
    "Document",
    "Metadata",
]
