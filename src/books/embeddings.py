"""Embedding providers for book descriptions.

Supports:
- sentence-transformers models (production, all-MiniLM-L6-v2 by default)
- Mock embeddings (demo/testing - deterministic, no model download)
"""

from __future__ import annotations

import hashlib
from abc import ABC, abstractmethod
from typing import Any, Optional

import numpy as np

from src.books.config import BookSearchConfig, RunMode
from src.books.result import Err, Ok, Result


class EmbeddingProvider(ABC):
    """Abstract embedding provider interface."""

    @abstractmethod
    def embed_texts(self, texts: list[str]) -> Result[list[list[float]], Exception]:
        """Generate embeddings for a list of texts."""
        ...

    @property
    @abstractmethod
    def dimensions(self) -> int:
        """Return the embedding dimensions."""
        ...

    def embed_text(self, text: str) -> Result[list[float], Exception]:
        """Generate the embedding of a single text."""
        return self.embed_texts([text]).map(lambda vectors: vectors[0])


class MockEmbeddingProvider(EmbeddingProvider):
    """Deterministic mock embeddings for testing and demos.

    Texts sharing words produce vectors with higher cosine similarity.
    """

    def __init__(self, dimensions: int = 384) -> None:
        self._dimensions = dimensions

    @property
    def dimensions(self) -> int:
        return self._dimensions

    def embed_texts(self, texts: list[str]) -> Result[list[list[float]], Exception]:
        return Ok([self._generate_embedding(text) for text in texts])

    def _generate_embedding(self, text: str) -> list[float]:
        text_hash = hashlib.sha256(text.encode()).hexdigest()
        rng = np.random.RandomState(int(text_hash[:8], 16))
        base = rng.randn(self._dimensions)

        for word in set(text.lower().split()):
            word_hash = hashlib.md5(word.encode()).hexdigest()
            word_rng = np.random.RandomState(int(word_hash[:8], 16))
            base += word_rng.randn(self._dimensions) * 0.3

        norm = np.linalg.norm(base)
        if norm > 0:
            base = base / norm

        return base.astype(np.float32).tolist()


class SentenceTransformerProvider(EmbeddingProvider):
    """Local sentence-transformers model, loaded on first use."""

    def __init__(self, config: BookSearchConfig, model: Optional[Any] = None) -> None:
        self._config = config
        self._dimensions = config.embedding_dimensions
        self._model = model

    @property
    def dimensions(self) -> int:
        return self._dimensions

    def _load_model(self) -> Any:
        if self._model is None:
            try:
                from sentence_transformers import SentenceTransformer
            except ImportError as exc:
                raise ImportError(
                    "sentence-transformers is required for production embeddings. "
                    "Install it with: pip install 'book-recommender[embeddings]'"
                ) from exc
            self._model = SentenceTransformer(self._config.embedding_model)
        return self._model

    def embed_texts(self, texts: list[str]) -> Result[list[list[float]], Exception]:
        if not texts:
            return Ok([])
        try:
            model = self._load_model()
            vectors = np.asarray(model.encode(texts), dtype=np.float32)
        except Exception as e:
            return Err(e)

        if vectors.shape[-1] != self._dimensions:
            return Err(
                ValueError(
                    f"Model produced {vectors.shape[-1]}-dimensional vectors, "
                    f"expected {self._dimensions}"
                )
            )
        return Ok(vectors.tolist())


def create_embedding_provider(config: BookSearchConfig) -> EmbeddingProvider:
    """Factory function to create the appropriate embedding provider."""
    if config.mode == RunMode.MOCK:
        return MockEmbeddingProvider(dimensions=config.embedding_dimensions)
    return SentenceTransformerProvider(config)
