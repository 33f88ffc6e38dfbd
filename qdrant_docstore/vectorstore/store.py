"""Document store backed by a Qdrant collection."""

from collections.abc import AsyncIterator, Sequence
from types import TracebackType
from typing import TYPE_CHECKING, Any

import httpx

from qdrant_docstore.config import QdrantSettings, get_settings
from qdrant_docstore.documents.models import Document
from qdrant_docstore.embeddings.service import EmbeddingService
from qdrant_docstore.exceptions import (
    ConfigurationError,
    EmbedderVectorCountMismatchError,
    MissingEmbedderError,
    ValidationError,
)
from qdrant_docstore.logging_config import get_logger
from qdrant_docstore.vectorstore.client import QdrantRestClient
from qdrant_docstore.vectorstore.codec import PayloadCodec
from qdrant_docstore.vectorstore.filters import (
    FilterMatch,
    SearchOptions,
    apply_score_threshold,
    build_must_match_filter,
    resolve_options,
)
from qdrant_docstore.vectorstore.models import (
    DEFAULT_COLLECTION_CONFIG,
    CollectionConfig,
    ScrollPage,
)

if TYPE_CHECKING:
    from qdrant_docstore.retrieval.retriever import VectorStoreRetriever

logger = get_logger(__name__)


class QdrantDocumentStore:
    """Persist documents in Qdrant and search them by similarity.

    Construction only validates configuration and never touches the
    network. Call ``provision`` (or build with ``create``) to make sure the
    collection and its payload indexes exist.
    """

    def __init__(
        self,
        embedder: EmbeddingService | None,
        settings: QdrantSettings | None = None,
        *,
        collection_name: str | None = None,
        base_url: str | None = None,
        api_key: str | None = None,
        collection_config: CollectionConfig | dict[str, Any] | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the store.

        Explicit arguments win over ``settings``, which default to the
        ``QDRANT_*`` environment variables.

        Args:
            embedder: Embedding service used unless a call overrides it.
            settings: Qdrant configuration.
            collection_name: Collection to read and write.
            base_url: Qdrant REST base URL.
            api_key: Qdrant API key.
            collection_config: Overrides merged over the default
                collection parameters.
            client: Existing HTTP client (for testing or sharing).

        Raises:
            MissingEmbedderError: No embedder given.
            ConfigurationError: Base URL, collection name or a required
                API key is missing.
        """
        if embedder is None:
            raise MissingEmbedderError()

        settings = settings or get_settings().qdrant
        base_url = base_url or settings.base_url
        collection_name = collection_name or settings.collection_name
        if api_key is None and settings.api_key is not None:
            api_key = settings.api_key.get_secret_value()

        if settings.use_cloud and not api_key:
            raise ConfigurationError(
                "missing api key. Pass it as an option or set the "
                "QDRANT_API_KEY environment variable",
            )
        if not base_url:
            raise ConfigurationError(
                "missing api url. Pass it as an option or set the "
                "QDRANT_BASE_URL environment variable",
            )
        if not collection_name:
            raise ConfigurationError("missing collection name")

        if isinstance(collection_config, CollectionConfig):
            self._collection_config = collection_config
        else:
            self._collection_config = DEFAULT_COLLECTION_CONFIG.merged(collection_config)

        self._embedder = embedder
        self._collection = collection_name
        self._index_keys = tuple(settings.index_keys)
        self._codec = PayloadCodec(
            content_key=settings.content_key,
            metadata_key=settings.metadata_key,
            scheme=settings.payload_scheme,
        )
        self._rest = QdrantRestClient(
            base_url,
            api_key=api_key,
            client=client,
            timeout=settings.timeout,
        )

    @classmethod
    async def create(
        cls,
        embedder: EmbeddingService | None,
        settings: QdrantSettings | None = None,
        **kwargs: Any,
    ) -> "QdrantDocumentStore":
        """Build a store and provision its collection."""
        store = cls(embedder, settings, **kwargs)
        await store.provision()
        return store

    @property
    def collection_name(self) -> str:
        return self._collection

    @property
    def collection_config(self) -> CollectionConfig:
        return self._collection_config

    @property
    def codec(self) -> PayloadCodec:
        return self._codec

    async def provision(self) -> None:
        """Create the collection and declare the configured payload indexes.

        Raises:
            APIError: If Qdrant rejects any of the requests.
        """
        await self._rest.create_collection(self._collection, self._collection_config)
        for key in self._index_keys:
            await self._rest.index_metadata_key(self._collection, key)

    async def add_documents(
        self,
        documents: Sequence[Document],
        options: SearchOptions | None = None,
        ids: Sequence[str] | None = None,
    ) -> list[str]:
        """Embed documents and upsert them as one batch.

        Args:
            documents: Documents to store.
            options: Per-call options; only the embedder is used.
            ids: Explicit point ids, one per document.

        Returns:
            The point ids written, in document order.

        Raises:
            EmbedderVectorCountMismatchError: The embedder did not return
                exactly one vector per document.
        """
        if ids is not None and len(ids) != len(documents):
            raise ValidationError(
                "number of ids does not match number of documents",
                details={"ids": len(ids), "documents": len(documents)},
            )
        if ids is not None and not all(ids):
            raise ValidationError("point ids must not be empty", details={"ids": list(ids)})
        if not documents:
            return []

        embedder = resolve_options(options, self._embedder).embedder

        texts = [doc.content for doc in documents]
        results = await embedder.embed_batch(texts)
        if len(results) != len(documents):
            raise EmbedderVectorCountMismatchError(len(documents), len(results))

        points = [
            self._codec.encode(doc, result.embedding, ids[i] if ids else None)
            for i, (doc, result) in enumerate(zip(documents, results))
        ]
        await self._rest.upsert(self._collection, points)

        logger.info(
            f"Added {len(points)} documents",
            extra={"collection": self._collection},
        )
        return [point.id for point in points]

    async def similarity_search(
        self,
        query: str,
        num_documents: int,
        options: SearchOptions | None = None,
    ) -> list[Document]:
        """Return up to ``num_documents`` documents most similar to ``query``.

        Raises:
            InvalidScoreThresholdError: Before any request is made.
            EmptyResponseError: Qdrant found no points at all.
        """
        resolved = resolve_options(options, self._embedder)

        embedding = await resolved.embedder.embed(query)
        points = await self._rest.search(
            self._collection,
            embedding.embedding,
            limit=num_documents,
            filter=resolved.filter,
            score_threshold=resolved.score_threshold,
        )

        documents = [self._codec.decode(point, point.score) for point in points]
        return apply_score_threshold(documents, resolved.score_threshold)

    async def scroll(
        self,
        offset: str = "",
        limit: int = 100,
        filter: dict[str, Any] | None = None,
    ) -> ScrollPage:
        """Fetch one page of stored documents, not ranked by similarity."""
        points, next_offset = await self._rest.scroll(
            self._collection,
            offset=offset,
            limit=limit,
            filter=filter,
        )
        return ScrollPage(
            documents=[self._codec.decode(point) for point in points],
            next_offset=next_offset,
        )

    async def iter_documents(
        self,
        page_size: int = 100,
        filter: dict[str, Any] | None = None,
    ) -> AsyncIterator[Document]:
        """Yield every stored document, following scroll cursors to the end."""
        offset = ""
        while True:
            page = await self.scroll(offset=offset, limit=page_size, filter=filter)
            for document in page.documents:
                yield document
            if page.is_last:
                return
            offset = page.next_offset

    async def delete_documents(self, filter: dict[str, Any]) -> None:
        """Delete every document matching ``filter``."""
        await self._rest.delete_points(self._collection, filter)

    def new_must_match_filter(self, *matches: FilterMatch) -> dict[str, Any]:
        """Filter requiring each metadata field to equal one of its values."""
        return build_must_match_filter(self._codec, matches)

    def as_retriever(
        self,
        num_documents: int = 4,
        options: SearchOptions | None = None,
    ) -> "VectorStoreRetriever":
        """Wrap the store in a retriever with fixed search parameters."""
        from qdrant_docstore.retrieval.retriever import VectorStoreRetriever

        return VectorStoreRetriever(self, num_documents=num_documents, options=options)

    async def close(self) -> None:
        """Release the HTTP client if the store created it."""
        await self._rest.close()

    async def __aenter__(self) -> "QdrantDocumentStore":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()
