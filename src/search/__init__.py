"""Wire-level codec for the search engine: vectors, commands, and replies."""

from src.search.codec import decode_vector, encode_vector
from src.search.query import SearchCommand, book_key, build_create_index, build_knn_query, build_range_query
from src.search.reply import decode_recommendations, from_raw

__all__ = [
    "SearchCommand",
    "book_key",
    "build_create_index",
    "build_knn_query",
    "build_range_query",
    "decode_recommendations",
    "decode_vector",
    "encode_vector",
    "from_raw",
]
