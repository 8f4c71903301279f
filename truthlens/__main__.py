"""Entrypoint for running the TruthLens API server."""

from __future__ import annotations

import logging

import uvicorn

from .config import load_config
from .server import create_app
from .service import NewsAggregator


def main() -> None:
    config = load_config()
    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    if not config.source.api_key:
        logging.warning("No NewsData API key provided - /api/news will serve mock data")
    if not config.analysis.configured:
        logging.warning("No OpenAI API key provided - /api/analyze will serve demo analyses")
    logging.info("Maximum article age: %s hours", config.max_age_hours)

    aggregator = NewsAggregator(config)
    app = create_app(aggregator, static_dir=config.static_dir)

    logging.info("Starting API server on %s:%s", config.api_host, config.api_port)
    uvicorn.run(app, host=config.api_host, port=config.api_port)


if __name__ == "__main__":  # pragma: no cover
    main()
