"""Shared test fixtures."""

from __future__ import annotations

import json
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, List

import httpx
import pytest

from truthlens.config import AnalysisConfig, AppConfig, NewsSourceConfig
from truthlens.fetching import NewsFetcher
from truthlens.model_client import ModelClient
from truthlens.service import NewsAggregator

Handler = Callable[[httpx.Request], httpx.Response]


def newsdata_time(dt: datetime) -> str:
    """Format a timestamp the way NewsData does (UTC, no offset)."""
    return dt.astimezone(timezone.utc).strftime("%Y-%m-%d %H:%M:%S")


def hours_ago(hours: float) -> str:
    return newsdata_time(datetime.now(timezone.utc) - timedelta(hours=hours))


def chat_completion(content: str) -> Dict[str, Any]:
    return {"choices": [{"index": 0, "message": {"role": "assistant", "content": content}}]}


@pytest.fixture
def raw_records() -> List[Dict[str, Any]]:
    return [
        {
            "title": "Fresh story",
            "link": "https://news.example/fresh",
            "description": "Fresh description",
            "content": "Fresh content",
            "image_url": "https://news.example/fresh.jpg",
            "source_name": "Example Times",
            "category": ["politics", "world"],
            "pubDate": hours_ago(1),
        },
        {
            "title": "Stale story",
            "link": "https://news.example/stale",
            "source_id": "example_wire",
            "pubDate": hours_ago(30),
        },
        {"title": "No link at all", "pubDate": hours_ago(1)},
    ]


@pytest.fixture
def make_config() -> Callable[..., AppConfig]:
    def _make(news_key: str | None = "news-key", openai_key: str | None = "openai-key") -> AppConfig:
        return AppConfig(
            source=NewsSourceConfig(api_key=news_key, url="https://newsdata.test/api/1/latest"),
            analysis=AnalysisConfig(api_key=openai_key, url="https://llm.test/v1/chat/completions"),
        )

    return _make


@pytest.fixture
def make_aggregator(make_config) -> Callable[..., NewsAggregator]:
    """Build an aggregator whose upstream calls go to the given handlers."""

    def _make(
        news_handler: Handler | None = None,
        llm_handler: Handler | None = None,
        news_key: str | None = "news-key",
        openai_key: str | None = "openai-key",
    ) -> NewsAggregator:
        config = make_config(news_key=news_key, openai_key=openai_key)

        def _unexpected(request: httpx.Request) -> httpx.Response:
            raise AssertionError(f"unexpected upstream call to {request.url}")

        fetcher = NewsFetcher(config.source, transport=httpx.MockTransport(news_handler or _unexpected))
        client = ModelClient(config.analysis, transport=httpx.MockTransport(llm_handler or _unexpected))
        return NewsAggregator(config, fetcher=fetcher, model_client=client)

    return _make


def json_response(payload: Any, status_code: int = 200) -> Handler:
    def _handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, content=json.dumps(payload).encode("utf-8"))

    return _handler
