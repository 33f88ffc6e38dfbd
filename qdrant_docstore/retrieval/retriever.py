"""Retriever over a document store."""

from typing import TYPE_CHECKING

from qdrant_docstore.documents.models import Document
from qdrant_docstore.logging_config import get_logger
from qdrant_docstore.vectorstore.filters import SearchOptions

if TYPE_CHECKING:
    from qdrant_docstore.vectorstore.store import QdrantDocumentStore

logger = get_logger(__name__)


class VectorStoreRetriever:
    """Fetches documents relevant to a query with fixed search parameters.

    Errors from the store propagate unchanged.
    """

    def __init__(
        self,
        store: "QdrantDocumentStore",
        num_documents: int = 4,
        options: SearchOptions | None = None,
    ) -> None:
        """Initialize the retriever.

        Args:
            store: Store to search.
            num_documents: Number of documents requested per query.
            options: Options applied to every search.
        """
        self._store = store
        self._num_documents = num_documents
        self._options = options

    async def get_relevant_documents(self, query: str) -> list[Document]:
        """Return the documents most similar to ``query``."""
        logger.debug(
            "Retrieval started",
            extra={"query_length": len(query), "top_k": self._num_documents},
        )

        documents = await self._store.similarity_search(
            query,
            self._num_documents,
            options=self._options,
        )

        logger.debug(
            f"Retrieved {len(documents)} documents",
            extra={"results_count": len(documents)},
        )
        return documents
