"""Search reply values and the recommendations decoder.

Replies carry no schema: FT.SEARCH answers with a flat sequence
``[count, id_1, fields_1, id_2, fields_2, ...]`` where each ``fields_n``
is itself a flat ``[key, value, key, value, ...]`` sequence. The raw
client reply is first lifted into a small tagged union so the decoder
checks shapes explicitly instead of relying on implicit coercion.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

import numpy as np

from src.books.errors import DecodeError
from src.books.models import U64_MAX, Recommendation, Recommendations


@dataclass(frozen=True, slots=True)
class Integer:
    value: int


@dataclass(frozen=True, slots=True)
class Bulk:
    value: bytes


@dataclass(frozen=True, slots=True)
class Double:
    value: float


@dataclass(frozen=True, slots=True)
class Nested:
    items: tuple[ReplyValue, ...]


ReplyValue = Union[Integer, Bulk, Double, Nested]


def from_raw(raw: Any) -> ReplyValue:
    """Lift a native redis-py reply into a :data:`ReplyValue`."""
    # bool is an int subclass; RESP3 booleans have no place in a search reply
    if isinstance(raw, bool):
        raise DecodeError("Unexpected boolean in reply")
    if isinstance(raw, int):
        return Integer(raw)
    if isinstance(raw, (bytes, bytearray)):
        return Bulk(bytes(raw))
    if isinstance(raw, str):
        return Bulk(raw.encode("utf-8"))
    if isinstance(raw, float):
        return Double(raw)
    if isinstance(raw, (list, tuple)):
        return Nested(tuple(from_raw(item) for item in raw))
    raise DecodeError(f"Unsupported reply element of type {type(raw).__name__}")


def _shape(value: ReplyValue) -> str:
    return type(value).__name__.lower()


def as_u64(value: ReplyValue) -> int:
    if isinstance(value, Integer):
        number = value.value
    elif isinstance(value, Bulk):
        # plain ASCII digits only: no sign, whitespace or underscores
        if not value.value.isdigit():
            raise DecodeError(f"Expected an integer, got {value.value!r}")
        number = int(value.value)
    else:
        raise DecodeError(f"Expected an integer, got {_shape(value)}")
    if not 0 <= number <= U64_MAX:
        raise DecodeError(f"Integer {number} does not fit in an unsigned 64-bit value")
    return number


def as_str(value: ReplyValue) -> str:
    if isinstance(value, Bulk):
        try:
            return value.value.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise DecodeError(f"Expected UTF-8 text, got {value.value!r}") from exc
    if isinstance(value, Integer):
        return str(value.value)
    raise DecodeError(f"Expected a string, got {_shape(value)}")


def as_f32(value: ReplyValue) -> float:
    if isinstance(value, Bulk):
        try:
            number = float(value.value.decode("ascii"))
        except (UnicodeDecodeError, ValueError):
            raise DecodeError(f"Expected a float, got {value.value!r}") from None
    elif isinstance(value, (Integer, Double)):
        number = float(value.value)
    else:
        raise DecodeError(f"Expected a float, got {_shape(value)}")
    return float(np.float32(number))


def as_sequence(value: ReplyValue) -> tuple[ReplyValue, ...]:
    if not isinstance(value, Nested):
        raise DecodeError(f"Expected a nested sequence, got {_shape(value)}")
    return value.items


def _decode_fields(doc_id: str, fields: tuple[ReplyValue, ...]) -> Recommendation:
    if len(fields) % 2:
        raise DecodeError(
            f"Field list for {doc_id} has {len(fields)} elements; key without value"
        )

    title = ""
    score = 0.0
    for i in range(0, len(fields), 2):
        key = as_str(fields[i])
        if key == "title":
            title = as_str(fields[i + 1])
        elif key == "score":
            score = as_f32(fields[i + 1])
        # other returned fields are ignored

    return Recommendation(id=doc_id, title=title, score=score)


def decode_recommendations(reply: ReplyValue | Any) -> Recommendations:
    """Decode an FT.SEARCH reply into :class:`Recommendations`.

    Accepts either a :data:`ReplyValue` or a native client reply. Order
    of the hits is preserved. ``count`` is taken as reported and is not
    checked against the number of hits.

    Raises:
        DecodeError: If the reply does not have the expected shape.
    """
    if not isinstance(reply, (Integer, Bulk, Double, Nested)):
        reply = from_raw(reply)

    items = as_sequence(reply)
    if not items:
        raise DecodeError("Empty reply; expected a result count")

    count = as_u64(items[0])
    rest = items[1:]
    if len(rest) % 2:
        raise DecodeError(f"Reply ends with identifier {rest[-1]!r} and no field list")

    recommendations = [
        _decode_fields(as_str(rest[i]), as_sequence(rest[i + 1]))
        for i in range(0, len(rest), 2)
    ]
    return Recommendations(count=count, recommendations=recommendations)
