"""Extraction of analysis objects from model output, with a deterministic fallback."""

from __future__ import annotations

import json
import logging
import math
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from .models import to_iso
from .schemas import (
    AnalysisResult,
    AnalyzeRequest,
    Bias,
    Perspective,
    Sentiment,
    SentimentScores,
    SourceCredibility,
)

LOGGER = logging.getLogger(__name__)

EXCERPT_MAX_CHARS = 1000

ModelT = TypeVar("ModelT", bound=BaseModel)


def _loads_object(text: str) -> Optional[Dict[str, Any]]:
    try:
        data = json.loads(text)
    except (TypeError, ValueError, RecursionError):
        return None
    return data if isinstance(data, dict) else None


def extract_analysis_json(text: Optional[str]) -> Optional[Dict[str, Any]]:
    """
    Recover a JSON object from raw model output.

    The whole text is parsed first so well-formed responses skip the
    heuristic. Otherwise the span from the first ``{`` to the last ``}`` is
    parsed, which recovers objects wrapped in prose or code fences. This is a
    best-effort scan rather than a parser: several JSON-like fragments in one
    response can defeat it. Returns None when nothing usable is found.
    """
    if not text:
        return None

    data = _loads_object(text)
    if data is not None:
        return data

    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end == -1 or end <= start:
        return None
    return _loads_object(text[start : end + 1])


def _validate(model: Type[ModelT], value: Any) -> Optional[ModelT]:
    if value is None:
        return None
    try:
        return model.model_validate(value)
    except ValidationError:
        LOGGER.debug("Discarding malformed %s: %r", model.__name__, value)
        return None


def _score(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        try:
            value = float(value.strip().rstrip("%"))
        except ValueError:
            return None
    if not isinstance(value, (int, float)) or math.isnan(value):
        return None
    return float(min(max(value, 0.0), 100.0))


def _sentiment(value: Any) -> Optional[Sentiment]:
    if isinstance(value, str) and value.strip():
        return Sentiment(label=value.strip())
    return _validate(Sentiment, value)


def _bias(value: Any) -> Optional[Bias]:
    if isinstance(value, str) and value.strip():
        return Bias(label=value.strip())
    return _validate(Bias, value)


def _credibility(value: Any) -> Optional[SourceCredibility]:
    if isinstance(value, Mapping) and "score" in value:
        score = _score(value.get("score"))
        if score is None:
            return None
        value = {**value, "score": score}
    return _validate(SourceCredibility, value)


def _perspectives(value: Any) -> List[Perspective]:
    if not isinstance(value, list):
        return []
    perspectives = []
    for entry in value:
        perspective = _validate(Perspective, entry)
        if perspective is not None:
            perspectives.append(perspective)
    return perspectives


def coerce_analysis(data: Mapping[str, Any], now: Optional[datetime] = None) -> AnalysisResult:
    """
    Build a well-typed :class:`AnalysisResult` from an extracted object.

    Fields in the wrong shape fall back to their defaults (None, empty
    string or empty list). A bare string sentiment or bias is kept as its
    label. ``analyzedAt`` is always stamped here.
    """
    if now is None:
        now = datetime.now(timezone.utc)
    summary = data.get("factCheckSummary")
    return AnalysisResult(
        truth_score=_score(data.get("truthScore")),
        sentiment=_sentiment(data.get("sentiment")),
        bias=_bias(data.get("bias")),
        source_credibility=_credibility(data.get("sourceCredibility")),
        fact_check_summary=summary if isinstance(summary, str) else "",
        perspectives=_perspectives(data.get("perspectives")),
        analyzed_at=to_iso(now),
    )


def _original_perspective(article: AnalyzeRequest) -> Perspective:
    return Perspective(
        source=article.source_name or "Original",
        summary=article.summary or "",
        url=article.link,
    )


def synthesize_analysis(
    article: AnalyzeRequest,
    reason: Optional[str] = None,
    excerpt: Optional[str] = None,
    now: Optional[datetime] = None,
) -> AnalysisResult:
    """
    Produce a placeholder analysis for ``article``.

    Without a ``reason`` the result is the demo analysis served when no
    analysis provider is configured. With a ``reason`` the summary reports
    why the automated analysis is unavailable, followed by an excerpt of the
    model output when one is given.
    """
    if now is None:
        now = datetime.now(timezone.utc)
    sentiment = Sentiment(
        label="neutral",
        scores=SentimentScores(positive=0.2, neutral=0.6, negative=0.2),
    )

    if reason is None:
        return AnalysisResult(
            truth_score=65,
            sentiment=sentiment,
            bias=Bias(label="center", confidence=0.6),
            source_credibility=SourceCredibility(score=60, verified=False),
            fact_check_summary=(
                "Analysis provider not configured - this is a demo analysis."
            ),
            perspectives=[_original_perspective(article)],
            analyzed_at=to_iso(now),
        )

    summary = f"Automated analysis unavailable: {reason}."
    if excerpt and excerpt.strip():
        summary += f"\n\nModel output: {excerpt.strip()[:EXCERPT_MAX_CHARS]}"
    return AnalysisResult(
        truth_score=60,
        sentiment=sentiment,
        bias=Bias(label="unknown", confidence=0.5),
        source_credibility=SourceCredibility(score=50, verified=False),
        fact_check_summary=summary,
        perspectives=[_original_perspective(article)],
        analyzed_at=to_iso(now),
    )


__all__ = [
    "EXCERPT_MAX_CHARS",
    "coerce_analysis",
    "extract_analysis_json",
    "synthesize_analysis",
]
