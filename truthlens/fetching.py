"""Client for the NewsData article source."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx

from .config import NewsSourceConfig

LOGGER = logging.getLogger(__name__)


class SourceUnavailableError(RuntimeError):
    """Raised when the article source cannot provide records."""


class NewsFetcher:
    """Fetch raw article records from the NewsData ``latest`` endpoint."""

    def __init__(
        self,
        config: NewsSourceConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.config = config
        self._transport = transport

    def _params(self) -> Dict[str, str]:
        return {
            "apikey": self.config.api_key or "",
            "country": self.config.country,
            "language": self.config.language,
            "page": "1",
        }

    async def fetch(self) -> List[Dict[str, Any]]:
        """Return the raw records of one page of the latest news."""

        if not self.config.api_key:
            raise SourceUnavailableError("NewsData API key is not configured")

        try:
            async with httpx.AsyncClient(
                timeout=self.config.timeout, transport=self._transport
            ) as client:
                response = await client.get(self.config.url, params=self._params())
                response.raise_for_status()
                payload = response.json()
        except httpx.HTTPStatusError as exc:
            raise SourceUnavailableError(
                f"NewsData responded with status {exc.response.status_code}"
            ) from exc
        except httpx.HTTPError as exc:
            raise SourceUnavailableError(f"NewsData request failed: {exc!r}") from exc
        except (ValueError, RecursionError) as exc:
            raise SourceUnavailableError("NewsData returned invalid JSON") from exc

        if not isinstance(payload, dict):
            raise SourceUnavailableError("NewsData returned an unexpected payload")
        records = payload.get("results")
        if records is None:
            records = payload.get("data")
        if not isinstance(records, list):
            records = []
        LOGGER.debug("NewsData returned %d raw records", len(records))
        return records


__all__ = ["NewsFetcher", "SourceUnavailableError"]
