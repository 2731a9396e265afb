"""Offline walkthrough of the search codec.

Shows the commands sent for both query modes and how a raw search
reply is decoded. No Redis server or model download required.

Usage:
    python examples/offline_codec.py
"""

from src.books.config import BookSearchConfig
from src.books.embeddings import MockEmbeddingProvider
from src.search.codec import encode_vector
from src.search.query import build_create_index, build_knn_query, build_range_query
from src.search.reply import decode_recommendations


def describe(args: tuple) -> str:
    return " ".join(f"<{len(a)} bytes>" if isinstance(a, bytes) else str(a) for a in args)


def main() -> None:
    config = BookSearchConfig()
    provider = MockEmbeddingProvider(config.embedding_dimensions)

    # 1. Embed a description and pack it for the query parameter
    embedding = provider.embed_text("A desert planet and the spice melange").unwrap()
    blob = encode_vector(embedding)
    print(f"Encoded {len(embedding)} floats into {len(blob)} bytes")

    # 2. Commands for index creation and both query modes
    print(describe(build_create_index(config.index_name, config.key_prefix).as_args()))
    print(describe(build_knn_query(config.index_name, blob, k=config.top_k).as_args()))
    print(describe(build_range_query(config.index_name, blob, radius=config.radius).as_args()))

    # 3. Decode a reply in the shape the engine returns
    reply = [
        2,
        b"book:9",
        [b"title", b"Dune", b"score", b"0"],
        b"book:26415",
        [b"title", b"Foundation", b"score", b"0.412"],
    ]
    recommendations = decode_recommendations(reply)
    print(f"\n{recommendations.count} matches")
    for r in recommendations.recommendations:
        print(f"  {r.id:<12} {r.score:.3f}  {r.title}")


if __name__ == "__main__":
    main()
