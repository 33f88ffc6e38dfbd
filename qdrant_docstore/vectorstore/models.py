"""Wire-level data models for the Qdrant REST API."""

from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    JsonValue,
    field_serializer,
    field_validator,
)

from qdrant_docstore.documents.models import Document


class Point(BaseModel):
    """A point as stored in a collection.

    Attributes:
        id: Point identifier. Qdrant accepts UUID strings and unsigned
            integers; integer ids are held as digit strings and sent back
            as integers.
        vector: Embedding vector, or a mapping of named vectors for
            collections configured with several. Absent when fetched
            payload-only.
        payload: Stored payload fields.
    """

    id: str = Field(description="Point identifier")
    vector: list[float] | dict[str, list[float]] | None = Field(
        default=None,
        description="Embedding vector",
    )
    payload: dict[str, JsonValue] = Field(
        default_factory=dict,
        description="Point payload",
    )

    @field_validator("id", mode="before")
    @classmethod
    def _stringify_id(cls, value: Any) -> Any:
        if isinstance(value, int):
            return str(value)
        return value

    @field_serializer("id")
    def _wire_id(self, value: str) -> str | int:
        return int(value) if value.isascii() and value.isdigit() else value

    @field_validator("payload", mode="before")
    @classmethod
    def _null_payload(cls, value: Any) -> Any:
        return {} if value is None else value


class ScoredPoint(Point):
    """A point returned by a similarity search."""

    score: float = Field(description="Similarity score")
    version: int = Field(default=0, description="Point version")


class SearchResponse(BaseModel):
    """Body of a points/search response."""

    time: float = 0.0
    status: str = ""
    result: list[ScoredPoint] = Field(default_factory=list)


class ScrollResult(BaseModel):
    """Page of points returned by points/scroll."""

    points: list[Point] = Field(default_factory=list)
    next_page_offset: str | int | None = None


class ScrollResponse(BaseModel):
    """Body of a points/scroll response."""

    time: float = 0.0
    status: str = ""
    result: ScrollResult = Field(default_factory=ScrollResult)


class ScrollPage(BaseModel):
    """Decoded page of documents from a scroll.

    Attributes:
        documents: Documents on this page, in collection order.
        next_offset: Cursor for the next page; empty string when exhausted.
    """

    documents: list[Document] = Field(default_factory=list)
    next_offset: str = ""

    @property
    def is_last(self) -> bool:
        return self.next_offset == ""


class VectorParams(BaseModel):
    """Vector dimensionality and distance metric."""

    model_config = ConfigDict(frozen=True, extra="allow")

    size: int = 1536
    distance: str = "Cosine"


class OptimizersConfig(BaseModel):
    """Storage tuning parameters."""

    model_config = ConfigDict(frozen=True, extra="allow")

    memmap_threshold: int = 10000


class CollectionConfig(BaseModel):
    """Desired collection parameters sent on creation.

    Instances are immutable; use ``merged`` to derive a variant.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    vectors: VectorParams = Field(default_factory=VectorParams)
    optimizers_config: OptimizersConfig = Field(default_factory=OptimizersConfig)
    on_disk_payload: bool = True
    # Leave unset: m=0 with many points makes searches come back empty
    hnsw_config: dict[str, JsonValue] | None = None

    def merged(self, overrides: dict[str, Any] | None) -> "CollectionConfig":
        """Return a new config with ``overrides`` deep-merged over this one."""
        if not overrides:
            return self
        return CollectionConfig.model_validate(
            _deep_merge(self.model_dump(exclude_none=True), overrides)
        )

    def to_request(self, name: str) -> dict[str, Any]:
        """Serialize as a create-collection request body."""
        body = self.model_dump(exclude_none=True)
        body["name"] = name
        return body


DEFAULT_COLLECTION_CONFIG = CollectionConfig()


def _deep_merge(base: dict[str, Any], overrides: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged
