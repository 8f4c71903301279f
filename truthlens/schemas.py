"""Pydantic schemas for request and response payloads."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .models import Article


class ArticleResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    summary: str
    content: str
    image_url: Optional[str] = Field(None, alias="imageUrl")
    source_name: str = Field(..., alias="sourceName")
    category: str
    pub_date: str = Field(..., alias="pubDate")
    link: str

    @classmethod
    def from_article(cls, article: Article) -> "ArticleResponse":
        return cls(
            id=article.id,
            title=article.title,
            summary=article.summary,
            content=article.content,
            image_url=article.image_url,
            source_name=article.source_name,
            category=article.category,
            pub_date=article.pub_date,
            link=article.link,
        )


class AnalyzeRequest(BaseModel):
    """Article fields a client sends for analysis; only ``title`` is required."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    title: Optional[str] = None
    summary: Optional[str] = None
    content: Optional[str] = None
    link: Optional[str] = None
    source_name: Optional[str] = Field(None, alias="sourceName")


class SentimentScores(BaseModel):
    positive: float = 0.0
    neutral: float = 0.0
    negative: float = 0.0


class Sentiment(BaseModel):
    label: str
    scores: SentimentScores = Field(default_factory=SentimentScores)


class Bias(BaseModel):
    label: str
    confidence: float = 0.0


class SourceCredibility(BaseModel):
    score: float = Field(..., ge=0, le=100)
    verified: bool = False


class Perspective(BaseModel):
    source: str
    summary: str = ""
    url: Optional[str] = None


class AnalysisResult(BaseModel):
    """Analysis of one article as rendered by the client."""

    model_config = ConfigDict(populate_by_name=True)

    truth_score: Optional[float] = Field(None, alias="truthScore", ge=0, le=100)
    sentiment: Optional[Sentiment] = None
    bias: Optional[Bias] = None
    source_credibility: Optional[SourceCredibility] = Field(None, alias="sourceCredibility")
    fact_check_summary: str = Field("", alias="factCheckSummary")
    perspectives: List[Perspective] = Field(default_factory=list)
    analyzed_at: str = Field(..., alias="analyzedAt")


__all__ = [
    "AnalysisResult",
    "AnalyzeRequest",
    "ArticleResponse",
    "Bias",
    "Perspective",
    "Sentiment",
    "SentimentScores",
    "SourceCredibility",
]
