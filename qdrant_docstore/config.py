"""Configuration using Pydantic Settings.

Values can be passed explicitly or loaded from environment variables.
No secrets are hardcoded.
"""

from enum import Enum
from functools import lru_cache

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    """Deployment environment."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


class PayloadScheme(str, Enum):
    """Layout of document fields inside a point payload.

    nested-v1 stores the text under the content key and the whole metadata
    mapping under the metadata key.
    """

    NESTED_V1 = "nested-v1"


class EmbeddingSettings(BaseSettings):
    """Embedding service configuration."""

    model_config = SettingsConfigDict(env_prefix="EMBEDDING_")

    base_url: str = Field(
        default="http://localhost:8080",
        description="Embedding service base URL",
    )
    model: str = Field(
        default="text-embedding-3-small",
        description="Embedding model name",
    )
    api_key: SecretStr | None = Field(
        default=None,
        description="Bearer token for hosted embedding APIs",
    )
    batch_size: int = Field(
        default=32,
        description="Batch size for embedding requests",
    )


class QdrantSettings(BaseSettings):
    """Qdrant connection and document layout configuration."""

    model_config = SettingsConfigDict(env_prefix="QDRANT_")

    base_url: str | None = Field(
        default=None,
        description="Qdrant REST base URL (QDRANT_BASE_URL)",
    )
    api_key: SecretStr | None = Field(
        default=None,
        description="Qdrant API key (QDRANT_API_KEY), required for cloud",
    )
    use_cloud: bool = Field(
        default=False,
        description="Target a managed Qdrant Cloud deployment",
    )
    collection_name: str | None = Field(
        default=None,
        description="Collection documents are stored in",
    )
    content_key: str = Field(
        default="page_content",
        description="Payload key holding the document text",
    )
    metadata_key: str = Field(
        default="metadata",
        description="Payload key holding the document metadata",
    )
    payload_scheme: PayloadScheme = Field(
        default=PayloadScheme.NESTED_V1,
        description="Payload layout version",
    )
    index_keys: list[str] = Field(
        default_factory=list,
        description="Payload fields to declare as keyword indexes",
    )
    timeout: float = Field(
        default=30.0,
        description="Request timeout in seconds",
    )


class Settings(BaseSettings):
    """Top-level settings.

    Aggregates all configuration sections.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Deployment environment",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )

    # Nested settings
    embedding: EmbeddingSettings = Field(default_factory=EmbeddingSettings)
    qdrant: QdrantSettings = Field(default_factory=QdrantSettings)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings.

    Returns:
        Settings instance loaded from environment.
    """
    return Settings()
