"""Document data models."""

from typing import Any

from pydantic import BaseModel, Field, JsonValue

Metadata = dict[str, JsonValue]


class Document(BaseModel):
    """A text document with arbitrary structured metadata.

    Attributes:
        content: The text content of the document.
        metadata: Caller metadata. Values are JSON values (null, bool,
            number, string, list or mapping) so they survive the trip
            through the Qdrant payload unchanged.
        score: Similarity score, only set on documents returned by a search.
    """

    content: str = Field(description="Text content of the document")
    metadata: Metadata = Field(
        default_factory=dict,
        description="Document metadata",
    )
    score: float = Field(default=0.0, description="Similarity score")

    @classmethod
    def from_text(cls, content: str, **metadata: Any) -> "Document":
        """Create a document from text and keyword metadata.

        Args:
            content: The text content.
            **metadata: Metadata fields.

        Returns:
            New Document instance.
        """
        return cls(content=content, metadata=metadata)
