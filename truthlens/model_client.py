"""Chat-completions client used to request article analyses."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx

from .config import AnalysisConfig
from .schemas import AnalyzeRequest

LOGGER = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are an assistant that returns JSON about news analysis. Return only JSON."
)


class AnalysisProviderError(RuntimeError):
    """Raised when the configured analysis provider fails to answer."""


class AnalysisTimeoutError(AnalysisProviderError):
    """Raised when the analysis provider does not answer in time."""


class ModelClient:
    """Send article analysis prompts to an OpenAI-compatible endpoint."""

    def __init__(
        self,
        config: AnalysisConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.config = config
        self._transport = transport

    @staticmethod
    def build_messages(article: AnalyzeRequest) -> List[Dict[str, str]]:
        user = (
            "Analyze this article for sentiment, bias, truthfulness and provide a short "
            "fact-check summary and perspectives. "
            f"Title: {article.title}\n"
            f"Summary: {article.summary or ''}\n"
            f"Content: {article.content or ''}\n"
            f"URL: {article.link or ''}"
        )
        return [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": user},
        ]

    async def analyze(self, article: AnalyzeRequest) -> str:
        """Return the raw text the model produced for ``article``."""

        if not self.config.api_key:
            raise AnalysisProviderError("analysis provider is not configured")

        payload = {
            "model": self.config.model,
            "messages": self.build_messages(article),
            "max_tokens": self.config.max_tokens,
            "temperature": self.config.temperature,
        }
        headers = {"Authorization": f"Bearer {self.config.api_key}"}

        try:
            async with httpx.AsyncClient(
                timeout=self.config.timeout, transport=self._transport
            ) as client:
                response = await client.post(self.config.url, headers=headers, json=payload)
                if response.is_error:
                    LOGGER.error(
                        "Analysis provider error %s: %s",
                        response.status_code,
                        response.text[:500],
                    )
                    raise AnalysisProviderError(
                        f"analysis provider responded with status {response.status_code}"
                    )
                data = response.json()
        except httpx.TimeoutException as exc:
            raise AnalysisTimeoutError("analysis provider timed out") from exc
        except httpx.HTTPError as exc:
            raise AnalysisProviderError(f"analysis request failed: {exc!r}") from exc
        except (ValueError, RecursionError) as exc:
            raise AnalysisProviderError("analysis provider returned invalid JSON") from exc

        return self._message_text(data)

    @staticmethod
    def _message_text(data: Any) -> str:
        """Pull the completion text out of a chat or legacy completion body."""

        if not isinstance(data, dict):
            return ""
        choices = data.get("choices")
        if not isinstance(choices, list) or not choices or not isinstance(choices[0], dict):
            return ""
        choice = choices[0]
        message = choice.get("message")
        if isinstance(message, dict) and isinstance(message.get("content"), str):
            return message["content"]
        text = choice.get("text")
        return text if isinstance(text, str) else ""


__all__ = ["AnalysisProviderError", "AnalysisTimeoutError", "ModelClient", "SYSTEM_PROMPT"]
