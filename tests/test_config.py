"""Tests for configuration."""

import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from qdrant_docstore.config import (
    EmbeddingSettings,
    Environment,
    PayloadScheme,
    QdrantSettings,
    Settings,
    get_settings,
)


class TestEmbeddingSettings:
    """Tests for embedding configuration."""

    def test_default_values(self) -> None:
        settings = EmbeddingSettings()
        assert settings.base_url == "http://localhost:8080"
        assert settings.model == "text-embedding-3-small"
        assert settings.batch_size == 32

    def test_env_override(self) -> None:
        """Environment variables override defaults."""
        with patch.dict(os.environ, {"EMBEDDING_BATCH_SIZE": "64"}):
            assert EmbeddingSettings().batch_size == 64


class TestQdrantSettings:
    """Tests for Qdrant configuration."""

    def test_default_values(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Key names default to page_content and metadata."""
        for name in ("QDRANT_BASE_URL", "QDRANT_API_KEY", "QDRANT_COLLECTION_NAME"):
            monkeypatch.delenv(name, raising=False)

        settings = QdrantSettings()

        assert settings.base_url is None
        assert settings.api_key is None
        assert settings.collection_name is None
        assert settings.content_key == "page_content"
        assert settings.metadata_key == "metadata"
        assert settings.payload_scheme == PayloadScheme.NESTED_V1
        assert settings.index_keys == []
        assert settings.use_cloud is False

    def test_env_fallback(self) -> None:
        """Base URL and key come from QDRANT_BASE_URL and QDRANT_API_KEY."""
        env = {
            "QDRANT_BASE_URL": "https://cluster.cloud.qdrant.io:6333",
            "QDRANT_API_KEY": "secret-key",
        }
        with patch.dict(os.environ, env):
            settings = QdrantSettings()

        assert settings.base_url == "https://cluster.cloud.qdrant.io:6333"
        assert settings.api_key is not None
        assert "secret-key" not in str(settings.api_key)
        assert settings.api_key.get_secret_value() == "secret-key"

    def test_index_keys_from_env(self) -> None:
        with patch.dict(os.environ, {"QDRANT_INDEX_KEYS": '["metadata.country"]'}):
            assert QdrantSettings().index_keys == ["metadata.country"]

    def test_unknown_payload_scheme_rejected(self) -> None:
        """Only versioned layouts are accepted."""
        with pytest.raises(ValidationError):
            QdrantSettings(payload_scheme="flat")


class TestSettings:
    """Tests for top-level settings."""

    def test_default_environment(self) -> None:
        assert Settings().environment == Environment.DEVELOPMENT

    def test_nested_settings_loaded(self) -> None:
        settings = Settings()
        assert isinstance(settings.embedding, EmbeddingSettings)
        assert isinstance(settings.qdrant, QdrantSettings)

    def test_environment_enum(self) -> None:
        """Environment can be set via string."""
        with patch.dict(os.environ, {"ENVIRONMENT": "production"}):
            assert Settings().environment == Environment.PRODUCTION


class TestGetSettings:
    """Tests for settings singleton."""

    def test_caching(self) -> None:
        """Settings are cached."""
        get_settings.cache_clear()
        settings1 = get_settings()
        settings2 = get_settings()
        assert isinstance(settings1, Settings)
        assert settings1 is settings2
