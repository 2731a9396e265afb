"""Loading of source book records from a directory of JSON files."""

from __future__ import annotations

import logging
from pathlib import Path

from src.books.models import Book, decode_book

logger = logging.getLogger(__name__)


def load_book_file(path: str | Path) -> Book:
    """Load a single book record.

    Raises:
        FileNotFoundError: If the file does not exist.
        DecodeError: If the file does not hold a valid book record.
        UnknownVariant: If an enum field has an unknown spelling.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")
    return decode_book(path.read_bytes())


def load_books(directory: str | Path) -> list[Book]:
    """Load every ``*.json`` book record in ``directory``, sorted by file name.

    Raises:
        FileNotFoundError: If the directory does not exist.
    """
    directory = Path(directory)
    if not directory.is_dir():
        raise FileNotFoundError(f"Book directory not found: {directory}")

    books = [load_book_file(path) for path in sorted(directory.glob("*.json"))]
    if not books:
        logger.warning("No book records found in %s", directory)
    else:
        logger.info("Loaded %d book records from %s", len(books), directory)
    return books
