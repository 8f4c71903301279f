"""Command-line helper that runs one TruthLens aggregation cycle."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
from typing import Sequence

from truthlens.config import load_config
from truthlens.service import NewsAggregator


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Fetch and print the current news feed")
    parser.add_argument(
        "--max-age-hours",
        type=float,
        default=None,
        help="Override NEWS_MAX_AGE_HOURS for this run.",
    )
    parser.add_argument(
        "--limit",
        type=int,
        default=None,
        help="Print at most this many articles.",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    config = load_config()
    if args.max_age_hours is not None:
        config.max_age_hours = args.max_age_hours

    articles = asyncio.run(NewsAggregator(config).fetch_articles())
    if args.limit is not None:
        articles = articles[: args.limit]
    print(json.dumps([article.to_dict() for article in articles], ensure_ascii=False, indent=2))


if __name__ == "__main__":  # pragma: no cover
    main()
