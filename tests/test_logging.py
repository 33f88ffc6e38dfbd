"""Tests for logging configuration and the records operations emit."""

import json
import logging
from unittest.mock import patch

import pytest

from qdrant_docstore.config import Environment, Settings
from qdrant_docstore.documents.models import Document
from qdrant_docstore.exceptions import APIError
from qdrant_docstore.logging_config import DevFormatter, JSONFormatter, setup_logging
from qdrant_docstore.vectorstore.store import QdrantDocumentStore
from tests.fakes import FakeQdrant


def _record(**extra: object) -> logging.LogRecord:
    record = logging.LogRecord(
        name="qdrant_docstore.vectorstore.client",
        level=logging.DEBUG,
        pathname="client.py",
        lineno=1,
        msg="Upserted %d points",
        args=(2,),
        exc_info=None,
    )
    record.__dict__.update(extra)
    return record


class TestJSONFormatter:
    """Tests for structured output."""

    def test_extra_fields_are_grouped(self) -> None:
        """Fields passed through `extra` end up under one key."""
        data = json.loads(JSONFormatter().format(_record(collection="cities", task="x")))

        assert data["message"] == "Upserted 2 points"
        assert data["extra"] == {"collection": "cities", "task": "x"}

    def test_standard_attributes_not_treated_as_extra(self) -> None:
        """Plain records carry no extra section."""
        data = json.loads(JSONFormatter().format(_record()))

        assert "extra" not in data
        assert data["file"] == "client.py:1"

    def test_unserializable_extra_uses_str(self) -> None:
        data = json.loads(JSONFormatter().format(_record(ids={"a"})))

        assert data["extra"]["ids"] == "{'a'}"


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_transport_loggers_quietened(self) -> None:
        """httpx request lines are kept out of debug output."""
        setup_logging(level="DEBUG", json_output=False)

        assert logging.getLogger().level == logging.DEBUG
        assert logging.getLogger("httpx").level == logging.WARNING
        assert logging.getLogger("httpcore").level == logging.WARNING

    @pytest.mark.parametrize(
        ("environment", "formatter"),
        [
            (Environment.PRODUCTION, JSONFormatter),
            (Environment.STAGING, JSONFormatter),
            (Environment.DEVELOPMENT, DevFormatter),
        ],
    )
    def test_formatter_follows_environment(
        self, environment: Environment, formatter: type[logging.Formatter]
    ) -> None:
        settings = Settings(environment=environment)

        with patch("qdrant_docstore.logging_config.get_settings", return_value=settings):
            root = setup_logging()

        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, formatter)


class TestOperationRecords:
    """Tests for the records store and client operations emit."""

    @pytest.mark.asyncio
    async def test_add_documents_logs_collection(
        self, store: QdrantDocumentStore, caplog: pytest.LogCaptureFixture
    ) -> None:
        caplog.set_level(logging.DEBUG, logger="qdrant_docstore")

        await store.add_documents([Document(content="Tokyo")])

        upserted = [r for r in caplog.records if r.getMessage() == "Upserted 1 points"]
        added = [r for r in caplog.records if r.getMessage() == "Added 1 documents"]
        assert upserted and upserted[0].collection == "cities"
        assert added and added[0].collection == "cities"

    @pytest.mark.asyncio
    async def test_failed_request_logs_task(
        self,
        store: QdrantDocumentStore,
        fake_qdrant: FakeQdrant,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        """A rejected request is logged with the operation name and status."""
        caplog.set_level(logging.DEBUG, logger="qdrant_docstore")
        fake_qdrant.fail("PUT", "/collections/cities", 409, "exists")

        with pytest.raises(APIError):
            await store.provision()

        warning = next(r for r in caplog.records if r.levelno == logging.WARNING)
        assert warning.task == "creating collection"
        assert warning.status == 409
