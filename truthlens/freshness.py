"""Freshness filtering for canonical articles."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import List, Optional, Sequence

from dateutil import parser as dtparse

from .models import Article

LOGGER = logging.getLogger(__name__)

DEFAULT_MAX_AGE = timedelta(hours=4)


def _published_at(article: Article) -> Optional[datetime]:
    try:
        dt = dtparse.isoparse(article.pub_date)
    except (TypeError, ValueError, OverflowError):
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def filter_fresh(
    articles: Sequence[Article],
    max_age: timedelta = DEFAULT_MAX_AGE,
    now: Optional[datetime] = None,
) -> List[Article]:
    """
    Return the articles published within ``max_age`` of ``now``.

    Articles with an unparseable ``pub_date`` are always kept. When every
    article is stale the full input is returned instead of an empty list,
    since stale news is preferable to none.
    """
    if now is None:
        now = datetime.now(timezone.utc)
    cutoff = now - max_age

    fresh: List[Article] = []
    for article in articles:
        published = _published_at(article)
        if published is None or published >= cutoff:
            fresh.append(article)

    if not fresh and articles:
        LOGGER.info(
            "All %d articles are older than %s; serving unfiltered list",
            len(articles),
            max_age,
        )
        return list(articles)
    return fresh


__all__ = ["DEFAULT_MAX_AGE", "filter_fresh"]
