"""Normalization of raw provider records into canonical articles."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from dateutil import parser as dtparse

from .models import Article, to_iso

LOGGER = logging.getLogger(__name__)

UNTITLED = "Untitled"
UNKNOWN_SOURCE = "Unknown"
DEFAULT_CATEGORY = "general"

# Ordered candidate keys per canonical field. The first key holding a
# defined, non-empty value wins; fields missing here fall back to a default.
FIELD_CANDIDATES: Dict[str, Tuple[str, ...]] = {
    "id": ("link", "title"),
    "title": ("title",),
    "summary": ("description", "content"),
    "content": ("content",),
    "image_url": ("image_url",),
    "source_name": ("source_name", "source_id"),
    "category": ("category",),
    "link": ("link",),
}


def _usable(value: Any) -> Optional[Any]:
    """Return a value worth keeping, or None for null/blank/empty/non-scalar values."""

    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        return value if value.strip() else None
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, (list, tuple)):
        return value if value else None
    return None


def first_present(record: Mapping[str, Any], keys: Sequence[str]) -> Optional[Any]:
    for key in keys:
        value = _usable(record.get(key))
        if value is not None:
            return value
    return None


def _as_text(value: Any, default: str = "") -> str:
    if value is None or isinstance(value, (list, tuple)):
        return default
    return str(value)


def _category(record: Mapping[str, Any]) -> str:
    value = first_present(record, FIELD_CANDIDATES["category"])
    if isinstance(value, (list, tuple)):
        value = _usable(value[0])
    return _as_text(value, DEFAULT_CATEGORY)


def parse_pub_date(value: Any, now: datetime) -> str:
    """Parse a provider publish date, substituting ``now`` when it is unusable."""

    if isinstance(value, datetime):
        return to_iso(value)
    if isinstance(value, str) and value.strip():
        try:
            return to_iso(dtparse.parse(value))
        except (ValueError, OverflowError):
            LOGGER.debug("Unparseable pubDate %r, using ingestion time", value)
    return to_iso(now)


def normalize_record(
    record: Mapping[str, Any],
    index: int,
    now: Optional[datetime] = None,
) -> Optional[Article]:
    """Map one raw provider record to an :class:`Article`, or None if non-viable."""

    if not isinstance(record, Mapping):
        return None
    if now is None:
        now = datetime.now(timezone.utc)

    link = _as_text(first_present(record, FIELD_CANDIDATES["link"]))
    title = _as_text(first_present(record, FIELD_CANDIDATES["title"]), UNTITLED)
    if not title or not link:
        return None

    fallback_id = f"news-{int(now.timestamp() * 1000)}-{index}"
    image_url = first_present(record, FIELD_CANDIDATES["image_url"])

    return Article(
        id=_as_text(first_present(record, FIELD_CANDIDATES["id"]), fallback_id),
        title=title,
        summary=_as_text(first_present(record, FIELD_CANDIDATES["summary"])),
        content=_as_text(first_present(record, FIELD_CANDIDATES["content"])),
        image_url=_as_text(image_url) if image_url is not None else None,
        source_name=_as_text(
            first_present(record, FIELD_CANDIDATES["source_name"]), UNKNOWN_SOURCE
        ),
        category=_category(record),
        pub_date=parse_pub_date(record.get("pubDate"), now),
        link=link,
    )


def normalize_records(
    records: Iterable[Mapping[str, Any]],
    now: Optional[datetime] = None,
) -> List[Article]:
    """Normalize a batch of records, dropping the non-viable ones."""

    if now is None:
        now = datetime.now(timezone.utc)
    articles: List[Article] = []
    dropped = 0
    for idx, record in enumerate(records):
        article = normalize_record(record, idx, now)
        if article is None:
            dropped += 1
            continue
        articles.append(article)
    if dropped:
        LOGGER.debug("Dropped %d non-viable records", dropped)
    return articles


__all__ = [
    "DEFAULT_CATEGORY",
    "FIELD_CANDIDATES",
    "UNKNOWN_SOURCE",
    "UNTITLED",
    "first_present",
    "normalize_record",
    "normalize_records",
    "parse_pub_date",
]
