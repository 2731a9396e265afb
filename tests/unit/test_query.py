"""Tests for search command construction."""

import pytest

from src.search.codec import encode_vector
from src.search.query import (
    SearchCommand,
    book_key,
    build_create_index,
    build_knn_query,
    build_range_query,
)

INDEX = "idx:test-books"
VECTOR = encode_vector([0.01] * 384)


def window(command: SearchCommand) -> tuple:
    start = command.args.index("RETURN")
    return command.args[start:]


class TestKnnQuery:
    def test_full_command(self) -> None:
        command = build_knn_query(INDEX, VECTOR, k=5)
        assert command.as_args() == (
            "FT.SEARCH",
            INDEX,
            "*=>[KNN 5 @embedding $vec AS score]",
            "PARAMS",
            2,
            "vec",
            VECTOR,
            "RETURN",
            2,
            "title",
            "score",
            "SORTBY",
            "score",
            "LIMIT",
            0,
            5,
            "DIALECT",
            2,
        )

    def test_single_bound_parameter(self) -> None:
        assert build_knn_query(INDEX, VECTOR).params() == {"vec": VECTOR}

    def test_k_in_query_string(self) -> None:
        command = build_knn_query(INDEX, VECTOR, k=12)
        assert command.args[1] == "*=>[KNN 12 @embedding $vec AS score]"
        # the LIMIT window stays independent of k
        assert window(command)[-5:] == ("LIMIT", 0, 5, "DIALECT", 2)

    def test_index_name_is_explicit(self) -> None:
        assert build_knn_query("idx:other", VECTOR).args[0] == "idx:other"

    def test_empty_vector(self) -> None:
        with pytest.raises(ValueError, match="empty"):
            build_knn_query(INDEX, b"")

    def test_non_positive_k(self) -> None:
        with pytest.raises(ValueError):
            build_knn_query(INDEX, VECTOR, k=0)


class TestRangeQuery:
    def test_query_string(self) -> None:
        command = build_range_query(INDEX, VECTOR, radius=3)
        assert command.args[1] == (
            "@embedding:[VECTOR_RANGE $radius $vec]=>{$YIELD_DISTANCE_AS: score}"
        )

    def test_two_bound_parameters(self) -> None:
        command = build_range_query(INDEX, VECTOR, radius=3)
        assert command.args[2:8] == ("PARAMS", 4, "radius", 3, "vec", VECTOR)
        assert command.params() == {"radius": 3, "vec": VECTOR}

    def test_same_tail_as_knn(self) -> None:
        assert window(build_range_query(INDEX, VECTOR)) == window(build_knn_query(INDEX, VECTOR))

    def test_empty_vector(self) -> None:
        with pytest.raises(ValueError, match="empty"):
            build_range_query(INDEX, b"")

    def test_non_positive_limit(self) -> None:
        with pytest.raises(ValueError, match="limit"):
            build_range_query(INDEX, VECTOR, limit=0)


class TestCreateIndex:
    def test_full_command(self) -> None:
        command = build_create_index("idx:books", "book:")
        assert command.as_args() == (
            "FT.CREATE",
            "idx:books",
            "ON",
            "JSON",
            "PREFIX",
            1,
            "book:",
            "SCHEMA",
            "$.author",
            "AS",
            "author",
            "TEXT",
            "$.title",
            "AS",
            "title",
            "TEXT",
            "$.description",
            "AS",
            "description",
            "TEXT",
            "$.embedding",
            "AS",
            "embedding",
            "VECTOR",
            "HNSW",
            6,
            "TYPE",
            "FLOAT32",
            "DIM",
            384,
            "DISTANCE_METRIC",
            "COSINE",
        )

    def test_dimensions_and_metric(self) -> None:
        args = build_create_index("idx:small", "doc:", dimensions=8, distance_metric="L2").args
        assert args[args.index("DIM") + 1] == 8
        assert args[args.index("DISTANCE_METRIC") + 1] == "L2"
        assert build_create_index("idx:small", "doc:").params() == {}


def test_book_key() -> None:
    assert book_key("book:", "26415") == "book:26415"
