"""Search engine command construction.

Builds the FT.CREATE and FT.SEARCH commands used for book similarity
search. Both query modes share the RETURN/SORTBY/LIMIT/DIALECT tail so
replies have the same shape regardless of mode.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

Arg = Union[str, int, float, bytes]

VECTOR_FIELD = "embedding"
SCORE_ALIAS = "score"
RETURN_FIELDS = ("title", SCORE_ALIAS)

# (JSON path, alias) of the full-text fields in the index schema
TEXT_FIELDS = (
    ("$.author", "author"),
    ("$.title", "title"),
    ("$.description", "description"),
)


@dataclass(frozen=True, slots=True)
class SearchCommand:
    """A protocol command: name plus ordered arguments."""

    name: str
    args: tuple[Arg, ...]

    def as_args(self) -> tuple[Arg, ...]:
        """Flatten into the positional form passed to ``execute_command``."""
        return (self.name, *self.args)

    def params(self) -> dict[str, Arg]:
        """Return the bound query parameters, if any."""
        if "PARAMS" not in self.args:
            return {}
        start = self.args.index("PARAMS")
        count = int(self.args[start + 1])
        values = self.args[start + 2 : start + 2 + count]
        return {str(values[i]): values[i + 1] for i in range(0, count, 2)}


def book_key(prefix: str, book_id: str) -> str:
    """Storage key of a book document."""
    return f"{prefix}{book_id}"


def _check_vector(vector_bytes: bytes) -> None:
    if not vector_bytes:
        raise ValueError("Query vector cannot be empty")


def _result_window(limit: int, dialect: int) -> tuple[Arg, ...]:
    if limit < 1:
        raise ValueError(f"limit must be positive, got {limit}")
    return (
        "RETURN",
        len(RETURN_FIELDS),
        *RETURN_FIELDS,
        "SORTBY",
        SCORE_ALIAS,
        "LIMIT",
        0,
        limit,
        "DIALECT",
        dialect,
    )


def build_knn_query(
    index_name: str,
    vector_bytes: bytes,
    k: int = 5,
    limit: int = 5,
    dialect: int = 2,
) -> SearchCommand:
    """Build a top-K nearest neighbour query over the whole index.

    The query record itself is not excluded and may appear in its own results.

    Raises:
        ValueError: If the vector is empty or k / limit is not positive.
    """
    _check_vector(vector_bytes)
    if k < 1:
        raise ValueError(f"k must be positive, got {k}")

    query = f"*=>[KNN {k} @{VECTOR_FIELD} $vec AS {SCORE_ALIAS}]"
    return SearchCommand(
        name="FT.SEARCH",
        args=(
            index_name,
            query,
            "PARAMS",
            2,
            "vec",
            vector_bytes,
            *_result_window(limit, dialect),
        ),
    )


def build_range_query(
    index_name: str,
    vector_bytes: bytes,
    radius: float = 3,
    limit: int = 5,
    dialect: int = 2,
) -> SearchCommand:
    """Build a range query returning every record within ``radius``.

    Raises:
        ValueError: If the vector is empty or limit is not positive.
    """
    _check_vector(vector_bytes)

    query = (
        f"@{VECTOR_FIELD}:[VECTOR_RANGE $radius $vec]"
        f"=>{{$YIELD_DISTANCE_AS: {SCORE_ALIAS}}}"
    )
    return SearchCommand(
        name="FT.SEARCH",
        args=(
            index_name,
            query,
            "PARAMS",
            4,
            "radius",
            radius,
            "vec",
            vector_bytes,
            *_result_window(limit, dialect),
        ),
    )


def build_create_index(
    index_name: str,
    prefix: str,
    dimensions: int = 384,
    distance_metric: str = "COSINE",
) -> SearchCommand:
    """Build the FT.CREATE command for the book index.

    Indexes JSON documents under ``prefix`` with three full-text fields
    and one HNSW vector field.
    """
    schema: list[Arg] = []
    for path, alias in TEXT_FIELDS:
        schema.extend((path, "AS", alias, "TEXT"))

    vector_attributes: tuple[Arg, ...] = (
        "TYPE",
        "FLOAT32",
        "DIM",
        dimensions,
        "DISTANCE_METRIC",
        distance_metric,
    )
    schema.extend(
        (
            f"$.{VECTOR_FIELD}",
            "AS",
            VECTOR_FIELD,
            "VECTOR",
            "HNSW",
            len(vector_attributes),
            *vector_attributes,
        )
    )

    return SearchCommand(
        name="FT.CREATE",
        args=(index_name, "ON", "JSON", "PREFIX", 1, prefix, "SCHEMA", *schema),
    )
