"""Configuration for the book recommendation client.

Supports two modes:
- Production: sentence-transformers model for embeddings
- Mock: deterministic hashed embeddings for demos and testing
"""

from __future__ import annotations

from enum import Enum

from pydantic import Field
from pydantic_settings import BaseSettings


class RunMode(str, Enum):
    """Embedding provider selection."""

    PRODUCTION = "production"
    MOCK = "mock"


class BookSearchConfig(BaseSettings):
    """Main configuration.

    All settings can be overridden via environment variables with the BOOKS_ prefix.
    Example: BOOKS_REDIS_URL=redis://cache:6379, BOOKS_MODE=production
    """

    model_config = {"env_prefix": "BOOKS_"}

    mode: RunMode = Field(default=RunMode.MOCK, description="Embedding provider mode")

    # Engine connection and index layout
    redis_url: str = Field(default="redis://127.0.0.1:6379", description="Redis URL")
    index_name: str = Field(default="idx:books", description="Search index name")
    key_prefix: str = Field(default="book:", description="Key prefix for book documents")

    # Embedding settings
    embedding_model: str = Field(
        default="sentence-transformers/all-MiniLM-L6-v2", description="Embedding model name"
    )
    embedding_dimensions: int = Field(default=384, description="Embedding vector dimensions")
    distance_metric: str = Field(default="COSINE", description="Vector distance metric")

    # Query settings
    top_k: int = Field(default=5, ge=1, description="Neighbours for KNN queries")
    radius: float = Field(default=3.0, gt=0, description="Radius for range queries")
    result_limit: int = Field(default=5, ge=1, description="LIMIT window size")
    dialect: int = Field(default=2, description="Query dialect version")

    # Source records and logging
    data_dir: str = Field(default="data/books", description="Directory of book JSON files")
    log_level: str = Field(default="INFO", description="Logging level")

