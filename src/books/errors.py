"""Error types raised by the book search codec layer.

None of these subclass ValueError: pydantic only wraps ValueError and
AssertionError raised inside validators, so these propagate unchanged
out of model validation.
"""

from __future__ import annotations


class BookSearchError(Exception):
    """Base class for all book search errors."""


class DecodeError(BookSearchError):
    """A reply or stored record does not match the expected structure."""


class UnknownVariant(BookSearchError):
    """An enum-valued text field matched none of the known spellings."""

    def __init__(self, kind: str, token: str) -> None:
        super().__init__(f"Unknown {kind}: {token!r}")
        self.kind = kind
        self.token = token


class MissingEmbedding(BookSearchError):
    """A similarity query was requested for a book with no stored vector."""

    def __init__(self, book_id: str) -> None:
        super().__init__(f"No embedding found for book {book_id}")
        self.book_id = book_id


class DimensionMismatch(BookSearchError):
    """A book's embedding does not have the index dimensionality."""

    def __init__(self, book_id: str, expected: int, actual: int) -> None:
        super().__init__(
            f"Embedding for book {book_id} has {actual} dimensions, expected {expected}"
        )
        self.book_id = book_id
        self.expected = expected
        self.actual = actual
