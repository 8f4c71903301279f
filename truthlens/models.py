"""Core data models for the news service."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Optional


def to_iso(dt: datetime) -> str:
    """Format a datetime as an ISO-8601 UTC instant with millisecond precision."""

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass
class Article:
    """Canonical article shape served to clients."""

    id: str
    title: str
    summary: str
    content: str
    image_url: Optional[str]
    source_name: str
    category: str
    pub_date: str
    link: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "summary": self.summary,
            "content": self.content,
            "imageUrl": self.image_url,
            "sourceName": self.source_name,
            "category": self.category,
            "pubDate": self.pub_date,
            "link": self.link,
        }


__all__ = ["Article", "to_iso"]
