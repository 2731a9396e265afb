"""Redis-backed book store.

Books are stored as JSON documents under ``<prefix><id>`` and searched
through a vector index over their ``embedding`` field. Every command is
sent through ``execute_command`` so replies arrive in their raw RESP2
form for the reply decoder.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import redis

from src.books.config import BookSearchConfig
from src.books.errors import BookSearchError
from src.books.models import Book, Recommendations, decode_book
from src.books.result import Err, Ok, Result
from src.search.query import SearchCommand, book_key, build_create_index
from src.search.reply import as_sequence, as_str, decode_recommendations, from_raw

logger = logging.getLogger(__name__)


class RedisBookStore:
    """Book documents and their search index in a Redis Stack instance.

    Args:
        config: Client configuration (URL, index name, key prefix, dimensions).
        client: An existing redis client. Created from ``config.redis_url``
            when omitted.
    """

    def __init__(
        self,
        config: BookSearchConfig,
        client: Optional[Any] = None,
    ) -> None:
        self._config = config
        self._client = client if client is not None else redis.Redis.from_url(config.redis_url)

    @property
    def index_name(self) -> str:
        return self._config.index_name

    def key_for(self, book_id: str) -> str:
        return book_key(self._config.key_prefix, book_id)

    def _execute(self, command: SearchCommand) -> Any:
        logger.debug("Sending %s %s", command.name, command.args[0] if command.args else "")
        return self._client.execute_command(*command.as_args())

    def put_book(self, book: Book) -> Result[str, Exception]:
        """Store a book document, replacing any existing one. Returns the key."""
        key = self.key_for(book.id)
        try:
            self._execute(SearchCommand("JSON.SET", (key, "$", book.to_json())))
        except redis.RedisError as exc:
            return Err(exc)
        return Ok(key)

    def get_book(self, book_id: str) -> Result[Book, Exception]:
        """Fetch and decode a stored book."""
        key = self.key_for(book_id)
        try:
            raw = self._execute(SearchCommand("JSON.GET", (key, "$")))
            return Ok(decode_book(raw))
        except BookSearchError as exc:
            logger.debug("Could not decode %s: %s", key, exc)
            return Err(exc)
        except redis.RedisError as exc:
            return Err(exc)

    def index_exists(self) -> Result[bool, Exception]:
        """Check whether the configured index is already defined."""
        try:
            reply = from_raw(self._execute(SearchCommand("FT._LIST", ())))
            names = {as_str(item) for item in as_sequence(reply)}
        except (BookSearchError, redis.RedisError) as exc:
            return Err(exc)
        return Ok(self.index_name in names)

    def create_index(self) -> Result[bool, Exception]:
        """Create the index unless it exists. Returns whether it was created."""
        exists = self.index_exists()
        if exists.is_err():
            return exists
        if exists.unwrap():
            logger.info("Index %s already exists", self.index_name)
            return Ok(False)

        command = build_create_index(
            self.index_name,
            self._config.key_prefix,
            dimensions=self._config.embedding_dimensions,
            distance_metric=self._config.distance_metric,
        )
        try:
            self._execute(command)
        except redis.RedisError as exc:
            return Err(exc)
        logger.info("Created index %s over prefix %s", self.index_name, self._config.key_prefix)
        return Ok(True)

    def search(self, command: SearchCommand) -> Result[Recommendations, Exception]:
        """Run a search command and decode its reply."""
        try:
            return Ok(decode_recommendations(self._execute(command)))
        except (BookSearchError, redis.RedisError) as exc:
            return Err(exc)
