"""Built-in article set served when the article source is unavailable."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import List, Optional

from .models import Article, to_iso


def mock_articles(now: Optional[datetime] = None) -> List[Article]:
    """Return a fresh copy of the deterministic demo articles."""

    if now is None:
        now = datetime.now(timezone.utc)
    return [
        Article(
            id="mock-1",
            title="Demo: TruthLens sample news",
            summary="Mock article - news source unavailable",
            content="Mock content",
            image_url=None,
            source_name="Demo",
            category="general",
            pub_date=to_iso(now),
            link="https://example.com/mock-1",
        ),
        Article(
            id="mock-2",
            title="Demo: Second story",
            summary="Another mock article",
            content="More mock",
            image_url=None,
            source_name="Demo",
            category="tech",
            pub_date=to_iso(now - timedelta(hours=1)),
            link="https://example.com/mock-2",
        ),
    ]


__all__ = ["mock_articles"]
