"""Vector codec for the engine's FLOAT32 vector fields.

Vectors travel as packed little-endian IEEE-754 single-precision floats,
four bytes per element with no header or padding.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

from src.books.errors import DecodeError

FLOAT32_LE = np.dtype("<f4")


def encode_vector(vector: Sequence[float] | np.ndarray) -> bytes:
    """Pack a vector into the binary blob used for query parameters.

    The output is always ``4 * len(vector)`` bytes. Non-finite values
    are passed through unchanged.
    """
    return np.asarray(vector, dtype=FLOAT32_LE).tobytes()


def decode_vector(data: bytes) -> list[float]:
    """Unpack a blob produced by :func:`encode_vector`."""
    if len(data) % FLOAT32_LE.itemsize:
        raise DecodeError(
            f"Vector blob length {len(data)} is not a multiple of {FLOAT32_LE.itemsize}"
        )
    return np.frombuffer(data, dtype=FLOAT32_LE).tolist()
