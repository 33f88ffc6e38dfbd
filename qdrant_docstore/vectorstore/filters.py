"""Per-call search options, payload filters and score thresholds."""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, JsonValue

from qdrant_docstore.documents.models import Document
from qdrant_docstore.embeddings.service import EmbeddingService
from qdrant_docstore.exceptions import InvalidScoreThresholdError, MissingEmbedderError
from qdrant_docstore.vectorstore.codec import PayloadCodec


class SearchOptions(BaseModel):
    """Options accepted by store operations.

    Attributes:
        embedder: Overrides the store's embedder for this call.
        filter: Qdrant filter expression, passed through verbatim.
        score_threshold: Minimum score in [0, 1]; 0 disables filtering.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    embedder: EmbeddingService | None = None
    filter: dict[str, Any] | None = None
    score_threshold: float = 0.0


@dataclass(frozen=True)
class ResolvedOptions:
    """Options after validation and fallback to store defaults."""

    embedder: EmbeddingService
    filter: dict[str, Any] | None
    score_threshold: float


def resolve_options(
    options: SearchOptions | None,
    default_embedder: EmbeddingService | None,
) -> ResolvedOptions:
    """Validate call options against the store defaults.

    Raises:
        InvalidScoreThresholdError: Threshold outside of [0, 1].
        MissingEmbedderError: No embedder on the call or the store.
    """
    options = options or SearchOptions()

    threshold = options.score_threshold
    if not 0 <= threshold <= 1:
        raise InvalidScoreThresholdError(threshold)

    embedder = options.embedder if options.embedder is not None else default_embedder
    if embedder is None:
        raise MissingEmbedderError()

    return ResolvedOptions(
        embedder=embedder,
        filter=options.filter,
        score_threshold=threshold,
    )


def passes_threshold(score: float, score_threshold: float) -> bool:
    """Whether a result with ``score`` survives ``score_threshold``."""
    return score_threshold == 0 or score >= score_threshold


def apply_score_threshold(
    documents: Iterable[Document],
    score_threshold: float,
) -> list[Document]:
    """Drop documents scoring below a non-zero threshold, keeping order."""
    return [doc for doc in documents if passes_threshold(doc.score, score_threshold)]


class FilterMatch(BaseModel):
    """A "metadata field is one of these values" clause."""

    model_config = ConfigDict(frozen=True)

    key: str = Field(description="Metadata field name")
    values: list[JsonValue] = Field(description="Acceptable values")


def build_must_match_filter(
    codec: PayloadCodec,
    matches: Sequence[FilterMatch],
) -> dict[str, Any]:
    """Conjunction of ``match.any`` clauses over metadata fields."""
    return {
        "must": [
            {
                "key": codec.metadata_field(match.key),
                "match": {"any": list(match.values)},
            }
            for match in matches
        ]
    }
