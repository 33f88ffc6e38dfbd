"""JSON-over-HTTP client for the Qdrant REST API."""

from collections.abc import Sequence
from types import TracebackType
from typing import Any

import httpx

from qdrant_docstore.exceptions import APIError, EmptyResponseError
from qdrant_docstore.logging_config import get_logger
from qdrant_docstore.vectorstore.models import (
    CollectionConfig,
    Point,
    ScoredPoint,
    ScrollResponse,
    SearchResponse,
)

logger = get_logger(__name__)


class QdrantRestClient:
    """Thin typed wrapper over the Qdrant collection endpoints.

    Every operation is a single request. A 200 status is success; any other
    status raises APIError carrying the operation name and the raw body.
    Transport failures and undecodable bodies propagate unchanged.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str | None = None,
        client: httpx.AsyncClient | None = None,
        timeout: float = 30.0,
    ) -> None:
        """Initialize the REST client.

        Args:
            base_url: Qdrant REST base URL.
            api_key: Value of the Api-Key header.
            client: Existing HTTP client (for testing or sharing).
            timeout: Request timeout used when creating our own client.
        """
        self._base_url = base_url.rstrip("/")
        self._api_key = api_key or ""
        self._timeout = timeout
        self._client = client
        self._owns_client = client is None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout)
        return self._client

    async def close(self) -> None:
        """Close the HTTP client if we own it."""
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "QdrantRestClient":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()

    def endpoint(self, collection: str, path: str = "") -> str:
        """URL of ``path`` below the collection resource."""
        if path and not path.startswith("/"):
            path = f"/{path}"
        return f"{self._base_url}/collections/{collection}{path}"

    async def _request(
        self,
        method: str,
        url: str,
        payload: Any,
        task: str,
    ) -> httpx.Response:
        response = await self._get_client().request(
            method,
            url,
            json=payload,
            headers={
                "Content-Type": "application/json",
                "Accept": "application/json",
                "Api-Key": self._api_key,
            },
        )
        if response.status_code != httpx.codes.OK:
            logger.warning(
                f"Qdrant request failed while {task}",
                extra={"url": url, "task": task, "status": response.status_code},
            )
            raise APIError(task, response.text, response.status_code)
        return response

    async def create_collection(self, name: str, config: CollectionConfig) -> None:
        """Create (or re-declare) a collection."""
        await self._request(
            "PUT",
            self.endpoint(name),
            config.to_request(name),
            "creating collection",
        )
        logger.info(
            f"Created collection: {name}",
            extra={"dimensions": config.vectors.size},
        )

    async def index_metadata_key(self, collection: str, key: str) -> None:
        """Declare ``key`` as a keyword payload index."""
        await self._request(
            "PUT",
            self.endpoint(collection, "/index"),
            {"field_name": key, "field_schema": "keyword"},
            "indexing metadata key",
        )
        logger.debug(f"Indexed payload field: {key}", extra={"collection": collection})

    async def upsert(self, collection: str, points: Sequence[Point]) -> None:
        """Insert or overwrite a batch of points."""
        body = {"points": [point.model_dump() for point in points]}
        await self._request(
            "PUT",
            self.endpoint(collection, "/points"),
            body,
            "upserting vectors",
        )
        logger.debug(
            f"Upserted {len(points)} points",
            extra={"collection": collection},
        )

    async def search(
        self,
        collection: str,
        vector: Sequence[float],
        limit: int,
        filter: dict[str, Any] | None = None,
        score_threshold: float = 0.0,
    ) -> list[ScoredPoint]:
        """Similarity search returning scored points with vectors and payloads.

        A zero threshold is not forwarded, so the server applies no cutoff.

        Raises:
            EmptyResponseError: The server returned no points at all.
        """
        body = {
            "vector": list(vector),
            "limit": limit,
            "filter": filter,
            "with_vector": True,
            "with_payload": True,
            "score_threshold": score_threshold or None,
        }
        response = await self._request(
            "POST",
            self.endpoint(collection, "/points/search"),
            body,
            "querying index",
        )
        result = SearchResponse.model_validate(response.json()).result
        if not result:
            raise EmptyResponseError(collection)

        logger.debug(
            f"Search returned {len(result)} points",
            extra={"collection": collection, "limit": limit},
        )
        return result

    async def scroll(
        self,
        collection: str,
        offset: str = "",
        limit: int = 100,
        filter: dict[str, Any] | None = None,
        with_vector: bool = False,
    ) -> tuple[list[Point], str]:
        """Fetch one page of points in collection order.

        Returns:
            The points and the next page offset ("" when exhausted).
        """
        body: dict[str, Any] = {
            "limit": limit,
            "filter": filter,
            "with_payload": True,
            "with_vector": with_vector,
        }
        if offset:
            # Numeric point ids come back stringified
            body["offset"] = int(offset) if offset.isascii() and offset.isdigit() else offset

        response = await self._request(
            "POST",
            self.endpoint(collection, "/points/scroll"),
            body,
            "scrolling points",
        )
        result = ScrollResponse.model_validate(response.json()).result

        next_offset = result.next_page_offset
        return result.points, "" if next_offset is None else str(next_offset)

    async def delete_points(self, collection: str, filter: dict[str, Any]) -> None:
        """Delete every point matching ``filter``."""
        await self._request(
            "POST",
            self.endpoint(collection, "/points/delete"),
            {"filter": filter},
            "deleting points",
        )
        logger.debug("Deleted points by filter", extra={"collection": collection})
