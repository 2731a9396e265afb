"""CLI interface for book recommendations.

Optionally (re)loads the source records and (re)creates the index, then
prints KNN and range recommendations for one book, or for two built-in
demo books when no id is given.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional

from src.books.config import BookSearchConfig, RunMode
from src.books.models import Recommendations
from src.books.recommender import BookRecommender
from src.books.result import Result

DEMO_BOOK_IDS = ("26415", "9")


def build_parser(config: BookSearchConfig) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Book recommendations from a Redis vector index"
    )
    parser.add_argument("-r", "--redis-url", default=config.redis_url, help="The redis url")
    parser.add_argument(
        "--id",
        default="",
        help="The id of the book to get recommendations for (demo books if omitted)",
    )
    parser.add_argument(
        "-i", "--index", action="store_true", help="Create the index if it does not exist"
    )
    parser.add_argument(
        "-l", "--load", action="store_true", help="Load the book records before querying"
    )
    parser.add_argument(
        "--data-dir", default=config.data_dir, help="Directory of book JSON records"
    )
    parser.add_argument(
        "--mode",
        choices=[mode.value for mode in RunMode],
        default=RunMode.PRODUCTION.value,
        help=(
            "Embedding provider used by --load: production embeds descriptions with "
            "the sentence-transformers model, mock uses hashed vectors for demos"
        ),
    )
    return parser


def print_recommendations(recommendations: Recommendations) -> None:
    for r in recommendations.recommendations:
        print(f"\tid: {r.id}\n\ttitle: {r.title}\n\tscore: {r.score}\n\n")


def _report(heading: str, result: Result[Recommendations, Exception]) -> bool:
    print(heading)
    if result.is_err():
        print(f"ERROR: {result.error}", file=sys.stderr)  # type: ignore[union-attr]
        return False
    print_recommendations(result.unwrap())
    return True


def run_recommendations(recommender: BookRecommender, book_ids: tuple[str, ...]) -> bool:
    """Print KNN then range recommendations for each id. Returns overall success."""
    ok = True
    for book_id in book_ids:
        ok &= _report(f"Recommendations for book:{book_id}", recommender.recommend(book_id))
    for book_id in book_ids:
        ok &= _report(
            f"Recommendations by range for book:{book_id}",
            recommender.recommend_by_range(book_id),
        )
    return ok


def main(argv: Optional[list[str]] = None, recommender: Optional[BookRecommender] = None) -> None:
    """CLI entry point."""
    config = BookSearchConfig()
    args = build_parser(config).parse_args(argv)

    logging.basicConfig(
        level=config.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    config = config.model_copy(
        update={
            "redis_url": args.redis_url,
            "data_dir": args.data_dir,
            "mode": RunMode(args.mode),
        }
    )
    recommender = recommender or BookRecommender(config)

    if args.load:
        result = recommender.load_directory(args.data_dir)
        if result.is_err():
            print(f"ERROR: loading books failed: {result.error}", file=sys.stderr)  # type: ignore[union-attr]
            sys.exit(1)

    if args.index:
        result = recommender.ensure_index()
        if result.is_err():
            print(f"ERROR: creating index failed: {result.error}", file=sys.stderr)  # type: ignore[union-attr]
            sys.exit(1)

    book_ids = (args.id,) if args.id else DEMO_BOOK_IDS
    if not run_recommendations(recommender, book_ids):
        sys.exit(1)


if __name__ == "__main__":
    main()
