"""Shared fixtures: sample book records and an in-memory stand-in for Redis Stack."""

from __future__ import annotations

import copy
import json
import re
from typing import Any

import numpy as np
import pytest

from src.search.codec import decode_vector

SAMPLE_RECORDS: list[dict[str, Any]] = [
    {
        "author": "Frank Herbert",
        "id": "9",
        "description": "A desert planet, a noble family and a fight over the spice melange.",
        "editions": ["english", "spanish"],
        "genres": ["Science Fiction", "Classics"],
        "inventory": [
            {"status": "on_loan", "stock_id": "9_1"},
            {"status": "available", "stock_id": "9_2"},
        ],
        "metrics": {"rating_votes": 1260000, "score": 4.25},
        "pages": 604,
        "title": "Dune",
        "url": "https://www.goodreads.com/book/show/44767458-dune",
        "year_published": 1965,
    },
    {
        "author": "Isaac Asimov",
        "id": "26415",
        "description": "A mathematician predicts the fall of a galactic empire and plans a foundation.",
        "editions": ["English", "French"],
        "genres": ["Science Fiction"],
        "inventory": [{"status": "maintenance", "stock_id": "26415_1"}],
        "metrics": {"rating_votes": 480000, "score": 4.17},
        "pages": 255,
        "title": "Foundation",
        "url": "https://www.goodreads.com/book/show/29579.Foundation",
        "year_published": 1951,
    },
    {
        "author": "Julia Child",
        "id": "112",
        "description": "Recipes for french cooking in an american kitchen, from sauces to pastry.",
        "editions": ["ENGLISH"],
        "genres": ["Cooking"],
        "inventory": [],
        "metrics": {"rating_votes": 30000, "score": 4.3},
        "pages": 752,
        "title": "Mastering the Art of French Cooking",
        "url": "https://www.goodreads.com/book/show/38431.Mastering_the_Art_of_French_Cooking",
        "year_published": 1961,
    },
]


@pytest.fixture
def book_record() -> dict[str, Any]:
    return copy.deepcopy(SAMPLE_RECORDS[0])


@pytest.fixture
def book_dir(tmp_path):
    for record in SAMPLE_RECORDS:
        (tmp_path / f"{record['id']}.json").write_text(json.dumps(record))
    return tmp_path


class FakeRedis:
    """Answers the handful of RedisJSON / RediSearch commands the store sends.

    Search replies use RESP2 shapes with cosine distance as ``score``.
    """

    def __init__(self) -> None:
        self.documents: dict[str, str] = {}
        self.indexes: dict[str, str] = {}
        self.calls: list[tuple[Any, ...]] = []

    def execute_command(self, *args: Any) -> Any:
        self.calls.append(args)
        name = args[0]
        if name == "JSON.SET":
            self.documents[args[1]] = args[3]
            return b"OK"
        if name == "JSON.GET":
            doc = self.documents.get(args[1])
            return None if doc is None else f"[{doc}]".encode()
        if name == "FT._LIST":
            return [index.encode() for index in self.indexes]
        if name == "FT.CREATE":
            self.indexes[args[1]] = args[args.index("PREFIX") + 2]
            return b"OK"
        if name == "FT.SEARCH":
            return self._search(args)
        raise AssertionError(f"unexpected command {name}")

    def commands(self, name: str) -> list[tuple[Any, ...]]:
        return [call for call in self.calls if call[0] == name]

    def _search(self, args: tuple[Any, ...]) -> list[Any]:
        prefix = self.indexes[args[1]]
        query = args[2]
        start = args.index("PARAMS")
        raw_params = args[start + 2 : start + 2 + int(args[start + 1])]
        params = dict(zip(raw_params[::2], raw_params[1::2]))
        offset, limit = args[args.index("LIMIT") + 1], args[args.index("LIMIT") + 2]

        target = np.array(decode_vector(params["vec"]))
        hits = []
        for key, doc in self.documents.items():
            if not key.startswith(prefix):
                continue
            record = json.loads(doc)
            if record.get("embedding") is None:
                continue
            vector = np.array(record["embedding"])
            distance = 1.0 - float(
                np.dot(vector, target) / (np.linalg.norm(vector) * np.linalg.norm(target))
            )
            hits.append((distance, key, record["title"]))
        hits.sort()

        knn = re.match(r"\*=>\[KNN (\d+) ", query)
        if knn:
            hits = hits[: int(knn.group(1))]
        else:
            hits = [hit for hit in hits if hit[0] <= float(params["radius"])]

        reply: list[Any] = [len(hits)]
        for distance, key, title in hits[offset : offset + limit]:
            reply.append(key.encode())
            reply.append([b"title", title.encode(), b"score", repr(distance).encode()])
        return reply


@pytest.fixture
def fake_redis() -> FakeRedis:
    return FakeRedis()
