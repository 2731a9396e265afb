"""Tests for the Result type."""

import pytest
from hypothesis import given, strategies as st

from src.books.errors import MissingEmbedding
from src.books.result import Err, Ok


class TestOk:
    def test_is_ok(self) -> None:
        result = Ok(42)
        assert result.is_ok() is True
        assert result.is_err() is False

    def test_map(self) -> None:
        assert Ok(5).map(lambda x: x * 2).unwrap() == 10

    @given(st.integers())
    def test_ok_preserves_value(self, value: int) -> None:
        assert Ok(value).unwrap() == value


class TestErr:
    def test_is_err(self) -> None:
        result = Err("something failed")
        assert result.is_err() is True
        assert result.is_ok() is False

    def test_unwrap_reraises_exception(self) -> None:
        error = MissingEmbedding("9")
        with pytest.raises(MissingEmbedding) as excinfo:
            Err(error).unwrap()
        assert excinfo.value is error

    def test_unwrap_plain_error(self) -> None:
        with pytest.raises(ValueError, match="fail"):
            Err("fail").unwrap()

    def test_map_noop(self) -> None:
        mapped = Err("fail").map(lambda x: x * 2)
        assert mapped.is_err()
        assert mapped.error == "fail"
