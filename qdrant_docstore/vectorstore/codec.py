"""Mapping between documents and Qdrant point payloads."""

from collections.abc import Mapping, Sequence
from uuid import uuid4

from qdrant_docstore.config import PayloadScheme
from qdrant_docstore.documents.models import Document
from qdrant_docstore.exceptions import InvalidPayloadError, MissingContentKeyError
from qdrant_docstore.vectorstore.models import Point

# Metadata field whose value is reused as the point id on upsert
POINT_ID_FIELD = "__point_id"


class PayloadCodec:
    """Encodes documents into points and decodes points back.

    Only the nested-v1 layout is produced and understood::

        {"<content_key>": "text", "<metadata_key>": {...}}
    """

    def __init__(
        self,
        content_key: str = "page_content",
        metadata_key: str = "metadata",
        scheme: PayloadScheme = PayloadScheme.NESTED_V1,
    ) -> None:
        if scheme is not PayloadScheme.NESTED_V1:
            raise ValueError(f"Unsupported payload scheme: {scheme}")
        self.content_key = content_key
        self.metadata_key = metadata_key
        self.scheme = scheme

    def metadata_field(self, key: str) -> str:
        """Qualified payload path of a metadata field, as used in filters."""
        return f"{self.metadata_key}.{key}"

    def point_id(self, document: Document, point_id: str | None = None) -> str:
        """Pick the id for a document: explicit, then metadata, then fresh."""
        if point_id:
            return point_id
        reused = document.metadata.get(POINT_ID_FIELD)
        if reused is not None:
            return str(reused)
        return str(uuid4())

    def encode(
        self,
        document: Document,
        vector: Sequence[float],
        point_id: str | None = None,
    ) -> Point:
        """Build the point that stores ``document`` with ``vector``."""
        return Point(
            id=self.point_id(document, point_id),
            vector=list(vector),
            payload={
                self.content_key: document.content,
                self.metadata_key: dict(document.metadata),
            },
        )

    def decode(self, point: Point, score: float = 0.0) -> Document:
        """Rebuild the document stored in ``point``.

        Raises:
            MissingContentKeyError: The content key is absent or not a string.
            InvalidPayloadError: The metadata value is not a mapping.
        """
        content = point.payload.get(self.content_key)
        if not isinstance(content, str):
            raise MissingContentKeyError(self.content_key, point.id)

        metadata = point.payload.get(self.metadata_key)
        if metadata is None:
            metadata = {}
        elif not isinstance(metadata, Mapping):
            raise InvalidPayloadError(
                "metadata payload is not a mapping",
                details={"metadata_key": self.metadata_key, "point_id": point.id},
            )

        return Document(content=content, metadata=dict(metadata), score=score)
