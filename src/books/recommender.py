"""Book recommender orchestrating loading, indexing, and similarity queries.

The recommender is the primary entry point. It:
1. Loads books, attaching an embedding of each description, and stores them
2. Creates the vector index if it is missing
3. Finds similar books by KNN or by distance range from a stored book

Every request is fetch → encode → build command → search → decode.
A book is never excluded from its own results.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from src.books.config import BookSearchConfig
from src.books.embeddings import EmbeddingProvider, create_embedding_provider
from src.books.errors import BookSearchError
from src.books.loader import load_books
from src.books.models import Book, Recommendations
from src.books.result import Err, Ok, Result
from src.search.codec import encode_vector
from src.search.query import build_knn_query, build_range_query
from src.search.store import RedisBookStore

logger = logging.getLogger(__name__)


class BookRecommender:
    """Similarity search over stored books.

    Usage:
        recommender = BookRecommender(BookSearchConfig())
        recommender.load_directory("data/books")
        recommender.ensure_index()
        result = recommender.recommend("26415")
    """

    def __init__(
        self,
        config: Optional[BookSearchConfig] = None,
        store: Optional[RedisBookStore] = None,
        embedding_provider: Optional[EmbeddingProvider] = None,
    ) -> None:
        self._config = config or BookSearchConfig()
        self._store = store or RedisBookStore(self._config)
        self._embeddings = embedding_provider or create_embedding_provider(self._config)

    def load(self, books: list[Book]) -> Result[int, Exception]:
        """Embed each book's description and store it.

        Returns:
            Result with the number of books stored.
        """
        if not books:
            return Ok(0)

        embed_result = self._embeddings.embed_texts([book.description for book in books])
        if embed_result.is_err():
            return embed_result  # type: ignore[return-value]

        for book, embedding in zip(books, embed_result.unwrap(), strict=True):
            put_result = self._store.put_book(book.with_embedding(embedding))
            if put_result.is_err():
                return put_result  # type: ignore[return-value]

        logger.info("Stored %d books", len(books))
        return Ok(len(books))

    def load_directory(self, directory: str | Path) -> Result[int, Exception]:
        """Load every JSON book record in a directory."""
        try:
            books = load_books(directory)
        except (BookSearchError, OSError) as exc:
            return Err(exc)
        return self.load(books)

    def ensure_index(self) -> Result[bool, Exception]:
        """Create the vector index if it does not exist yet."""
        return self._store.create_index()

    def recommend(self, book_id: str, k: Optional[int] = None) -> Result[Recommendations, Exception]:
        """Find the ``k`` nearest books to a stored book."""
        vector = self._encoded_embedding(book_id)
        if vector.is_err():
            return vector  # type: ignore[return-value]

        command = build_knn_query(
            self._config.index_name,
            vector.unwrap(),
            k=self._config.top_k if k is None else k,
            limit=self._config.result_limit,
            dialect=self._config.dialect,
        )
        return self._store.search(command)

    def recommend_by_range(
        self, book_id: str, radius: Optional[float] = None
    ) -> Result[Recommendations, Exception]:
        """Find books within ``radius`` cosine distance of a stored book."""
        vector = self._encoded_embedding(book_id)
        if vector.is_err():
            return vector  # type: ignore[return-value]

        command = build_range_query(
            self._config.index_name,
            vector.unwrap(),
            radius=self._config.radius if radius is None else radius,
            limit=self._config.result_limit,
            dialect=self._config.dialect,
        )
        return self._store.search(command)

    def _encoded_embedding(self, book_id: str) -> Result[bytes, Exception]:
        book_result = self._store.get_book(book_id)
        if book_result.is_err():
            return book_result  # type: ignore[return-value]

        try:
            embedding = book_result.unwrap().query_vector(self._config.embedding_dimensions)
        except BookSearchError as exc:
            return Err(exc)
        return Ok(encode_vector(embedding))
