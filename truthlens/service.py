"""Core news aggregation and analysis service."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import List, Optional

from .analysis import coerce_analysis, extract_analysis_json, synthesize_analysis
from .config import AppConfig
from .fetching import NewsFetcher, SourceUnavailableError
from .freshness import filter_fresh
from .mock_data import mock_articles
from .model_client import AnalysisTimeoutError, ModelClient
from .models import Article
from .normalizer import normalize_records
from .schemas import AnalysisResult, AnalyzeRequest

LOGGER = logging.getLogger(__name__)


class NewsAggregator:
    """Fetch, normalize, filter and analyze news articles."""

    def __init__(
        self,
        config: AppConfig,
        fetcher: Optional[NewsFetcher] = None,
        model_client: Optional[ModelClient] = None,
    ) -> None:
        self.config = config
        self.fetcher = fetcher or NewsFetcher(config.source)
        self.model_client = model_client or ModelClient(config.analysis)

    async def fetch_articles(self) -> List[Article]:
        """Run one fetch cycle; degrades to the mock set instead of failing."""

        try:
            records = await self.fetcher.fetch()
        except SourceUnavailableError as exc:
            LOGGER.warning("News source unavailable, serving mock data: %s", exc)
            return mock_articles()

        now = datetime.now(timezone.utc)
        articles = normalize_records(records, now=now)
        if not articles:
            LOGGER.warning(
                "News source returned no usable articles (%d records), serving mock data",
                len(records),
            )
            return mock_articles()

        fresh = filter_fresh(articles, self.config.max_age, now=now)
        LOGGER.info(
            "Serving %d of %d normalized articles (%d raw records)",
            len(fresh),
            len(articles),
            len(records),
        )
        return fresh

    async def analyze(self, article: AnalyzeRequest) -> AnalysisResult:
        """
        Analyze one article.

        Without an analysis credential the demo analysis is returned and no
        call is made. Unparseable model output and provider timeouts fall
        back to a synthesized analysis; any other provider failure propagates
        as :class:`~truthlens.model_client.AnalysisProviderError`.
        """
        if not self.config.analysis.configured:
            LOGGER.info("Analysis provider not configured, returning demo analysis")
            return synthesize_analysis(article)

        try:
            text = await self.model_client.analyze(article)
        except AnalysisTimeoutError as exc:
            LOGGER.warning("Analysis provider timed out for %r: %s", article.title, exc)
            return synthesize_analysis(article, reason="the analysis provider timed out")

        data = extract_analysis_json(text)
        if data is None:
            LOGGER.warning("Could not extract JSON from model output for %r", article.title)
            return synthesize_analysis(
                article,
                reason="the model response could not be parsed",
                excerpt=text,
            )
        return coerce_analysis(data)


__all__ = ["NewsAggregator"]
