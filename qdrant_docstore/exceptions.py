"""Document store exception hierarchy.

All custom exceptions inherit from DocStoreError.
Each exception has an error code for structured error handling.
"""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Error codes for structured error handling."""

    # General errors (1xxx)
    INTERNAL_ERROR = "QDS-1000"
    CONFIGURATION_ERROR = "QDS-1001"
    VALIDATION_ERROR = "QDS-1002"
    MISSING_EMBEDDER = "QDS-1003"
    INVALID_SCORE_THRESHOLD = "QDS-1004"

    # Embedding errors (2xxx)
    EMBEDDING_SERVICE_ERROR = "QDS-2000"
    EMBEDDER_VECTOR_COUNT_MISMATCH = "QDS-2001"

    # Payload errors (3xxx)
    MISSING_CONTENT_KEY = "QDS-3000"
    INVALID_PAYLOAD = "QDS-3001"

    # Vector store errors (4xxx)
    VECTOR_STORE_ERROR = "QDS-4000"
    API_ERROR = "QDS-4001"
    EMPTY_RESPONSE = "QDS-4002"


class DocStoreError(Exception):
    """Base exception for all document store errors.

    Attributes:
        message: Human-readable error message.
        code: Structured error code.
        details: Additional error context.
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a serializable dictionary."""
        return {
            "error": {
                "code": self.code.value,
                "message": self.message,
                "details": self.details,
            }
        }


class ConfigurationError(DocStoreError):
    """Configuration or environment error."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.CONFIGURATION_ERROR,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class MissingEmbedderError(ConfigurationError):
    """Neither the store nor the call supplied an embedder."""

    def __init__(self, message: str = "missing embedder") -> None:
        super().__init__(message, ErrorCode.MISSING_EMBEDDER)


class ValidationError(DocStoreError):
    """Input validation error."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.VALIDATION_ERROR,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class InvalidScoreThresholdError(ValidationError):
    """Score threshold outside of [0, 1]."""

    def __init__(self, score_threshold: float) -> None:
        super().__init__(
            "score threshold must be between 0 and 1",
            ErrorCode.INVALID_SCORE_THRESHOLD,
            {"score_threshold": score_threshold},
        )


class EmbeddingError(DocStoreError):
    """Embedding service error."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.EMBEDDING_SERVICE_ERROR,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class EmbedderVectorCountMismatchError(EmbeddingError):
    """Embedder returned a different number of vectors than texts given."""

    def __init__(self, expected: int, received: int) -> None:
        super().__init__(
            "number of vectors from embedder does not match number of documents",
            ErrorCode.EMBEDDER_VECTOR_COUNT_MISMATCH,
            {"expected": expected, "received": received},
        )


class PayloadError(DocStoreError):
    """A stored point could not be mapped back to a document."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.INVALID_PAYLOAD,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class MissingContentKeyError(PayloadError):
    """Point payload lacks a string value under the content key."""

    def __init__(self, content_key: str, point_id: str | None = None) -> None:
        super().__init__(
            "missing text key in vector metadata",
            ErrorCode.MISSING_CONTENT_KEY,
            {"content_key": content_key, "point_id": point_id},
        )


class InvalidPayloadError(PayloadError):
    """Point payload holds a malformed metadata value."""


class VectorStoreError(DocStoreError):
    """Vector store operation error."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.VECTOR_STORE_ERROR,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class APIError(VectorStoreError):
    """Qdrant answered with a non-200 status.

    Attributes:
        task: Operation that was being performed.
        body: Raw response body text.
        status_code: HTTP status returned by the server.
    """

    def __init__(self, task: str, body: str, status_code: int | None = None) -> None:
        self.task = task
        self.body = body
        self.status_code = status_code
        super().__init__(
            f"{task}: {body}",
            ErrorCode.API_ERROR,
            {"task": task, "status_code": status_code},
        )


class EmptyResponseError(VectorStoreError):
    """Similarity search returned no points at all."""

    def __init__(self, collection: str) -> None:
        super().__init__(
            "empty response",
            ErrorCode.EMPTY_RESPONSE,
            {"collection": collection},
        )
