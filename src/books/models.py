"""Book and recommendation models.

Books are decoded from stored JSON documents and validated with pydantic.
Recommendations are decoded from search replies and are plain frozen
dataclasses.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Annotated, Any, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, ValidationError

from src.books.errors import DecodeError, DimensionMismatch, MissingEmbedding, UnknownVariant

U16_MAX = 2**16 - 1
U32_MAX = 2**32 - 1
U64_MAX = 2**64 - 1


class Edition(str, Enum):
    """Language edition of a book. Values are the stored spellings."""

    ENGLISH = "English"
    SPANISH = "Spanish"
    FRENCH = "French"


class InventoryStatus(str, Enum):
    """Circulation status of a single stock item."""

    ON_LOAN = "OnLoan"
    AVAILABLE = "Available"
    MAINTENANCE = "Maintenance"


_EDITIONS: dict[str, Edition] = {
    "english": Edition.ENGLISH,
    "spanish": Edition.SPANISH,
    "french": Edition.FRENCH,
}

_INVENTORY_STATUSES: dict[str, InventoryStatus] = {
    "on_loan": InventoryStatus.ON_LOAN,
    # documents written back from storage carry the variant name
    "onloan": InventoryStatus.ON_LOAN,
    "available": InventoryStatus.AVAILABLE,
    "maintenance": InventoryStatus.MAINTENANCE,
}


def parse_edition(text: str) -> Edition:
    """Parse an edition name, ignoring case.

    Raises:
        UnknownVariant: If the text is not a known edition.
    """
    try:
        return _EDITIONS[text.lower()]
    except KeyError:
        raise UnknownVariant("edition", text) from None


def parse_inventory_status(text: str) -> InventoryStatus:
    """Parse an inventory status, ignoring case.

    Both ``on_loan`` and ``onloan`` map to ``InventoryStatus.ON_LOAN``.

    Raises:
        UnknownVariant: If the text is not a known status.
    """
    try:
        return _INVENTORY_STATUSES[text.lower()]
    except KeyError:
        raise UnknownVariant("inventory status", text) from None


def _coerce_edition(value: Any) -> Edition:
    if isinstance(value, Edition):
        return value
    if not isinstance(value, str):
        raise DecodeError(f"Edition must be a string, got {type(value).__name__}")
    return parse_edition(value)


def _coerce_inventory_status(value: Any) -> InventoryStatus:
    if isinstance(value, InventoryStatus):
        return value
    if not isinstance(value, str):
        raise DecodeError(f"Inventory status must be a string, got {type(value).__name__}")
    return parse_inventory_status(value)


EditionField = Annotated[Edition, BeforeValidator(_coerce_edition)]
InventoryStatusField = Annotated[InventoryStatus, BeforeValidator(_coerce_inventory_status)]


class Inventory(BaseModel):
    """A single stock item of a book."""

    model_config = ConfigDict(frozen=True)

    status: InventoryStatusField
    stock_id: str


class Metrics(BaseModel):
    """Reader rating summary."""

    model_config = ConfigDict(frozen=True)

    rating_votes: int = Field(ge=0, le=U32_MAX)
    score: float


class Book(BaseModel):
    """A book document as stored in the engine.

    ``embedding`` is absent on source records and attached before the
    book is stored; only books with an embedding can be queried.
    """

    model_config = ConfigDict(frozen=True)

    author: str
    id: str
    description: str
    embedding: Optional[list[float]] = None
    editions: list[EditionField]
    genres: list[str]
    inventory: list[Inventory]
    metrics: Metrics
    pages: int = Field(ge=0, le=U32_MAX)
    title: str
    url: str
    year_published: int = Field(ge=0, le=U16_MAX)

    def with_embedding(self, embedding: list[float]) -> Book:
        """Return a copy of this book carrying the given embedding."""
        return self.model_copy(update={"embedding": [float(x) for x in embedding]})

    def query_vector(self, dimensions: int) -> list[float]:
        """Return the stored embedding, checked against the index dimensionality.

        Raises:
            MissingEmbedding: If the book has no embedding.
            DimensionMismatch: If the embedding has the wrong length.
        """
        if self.embedding is None:
            raise MissingEmbedding(self.id)
        if len(self.embedding) != dimensions:
            raise DimensionMismatch(self.id, dimensions, len(self.embedding))
        return self.embedding

    def to_json(self) -> str:
        """Serialize to the stored document form."""
        return self.model_dump_json()


def decode_book(raw: Any) -> Book:
    """Decode a stored book record.

    A ``$`` path query returns the record wrapped in a one-element list,
    so both a bare object and a single-item list are accepted. JSON text
    is parsed first.

    Raises:
        DecodeError: If the record is missing, ambiguous, or malformed.
        UnknownVariant: If an edition or inventory status is not recognized.
    """
    if isinstance(raw, (str, bytes, bytearray)):
        try:
            raw = json.loads(raw)
        except ValueError as exc:
            raise DecodeError(f"Stored record is not valid JSON: {exc}") from exc

    if raw is None:
        raise DecodeError("record not found")
    if isinstance(raw, list):
        if not raw:
            raise DecodeError("record not found")
        if len(raw) > 1:
            raise DecodeError(f"ambiguous result: expected one record, got {len(raw)}")
        raw = raw[0]
    if not isinstance(raw, dict):
        raise DecodeError(f"Expected a record object, got {type(raw).__name__}")

    try:
        return Book.model_validate(raw)
    except ValidationError as exc:
        raise DecodeError(f"Invalid book record: {exc}") from exc


@dataclass(frozen=True, slots=True)
class Recommendation:
    """A single search hit."""

    id: str
    title: str
    score: float


@dataclass(frozen=True, slots=True)
class Recommendations:
    """Decoded search reply.

    ``count`` is the total number of matches reported by the engine and
    may exceed ``len(recommendations)``, which only holds the returned window.
    """

    count: int
    recommendations: list[Recommendation] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not 0 <= self.count <= U64_MAX:
            raise DecodeError(f"Count must fit in an unsigned 64-bit integer, got {self.count}")
