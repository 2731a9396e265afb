"""Book models, configuration, and the recommender service."""

from src.books.config import BookSearchConfig, RunMode
from src.books.errors import (
    BookSearchError,
    DecodeError,
    DimensionMismatch,
    MissingEmbedding,
    UnknownVariant,
)
from src.books.models import Book, Edition, InventoryStatus, Recommendation, Recommendations
from src.books.result import Err, Ok, Result

__all__ = [
    "Book",
    "BookSearchConfig",
    "BookSearchError",
    "DecodeError",
    "DimensionMismatch",
    "Edition",
    "Err",
    "InventoryStatus",
    "MissingEmbedding",
    "Ok",
    "Recommendation",
    "Recommendations",
    "Result",
    "RunMode",
    "UnknownVariant",
]
