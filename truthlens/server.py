"""FastAPI application serving news articles and article analyses."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse
from pydantic import ValidationError

from .model_client import AnalysisProviderError
from .schemas import AnalysisResult, AnalyzeRequest, ArticleResponse
from .service import NewsAggregator

LOGGER = logging.getLogger(__name__)


def create_app(aggregator: NewsAggregator, static_dir: Optional[Path] = None) -> FastAPI:
    app = FastAPI(title="TruthLens", version="1.0.0")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    def get_aggregator() -> NewsAggregator:
        return aggregator

    @app.get("/healthz", summary="Health check")
    async def health_check() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/api/news", response_model=list[ArticleResponse])
    async def list_news(
        service: NewsAggregator = Depends(get_aggregator),
    ) -> list[ArticleResponse]:
        articles = await service.fetch_articles()
        return [ArticleResponse.from_article(article) for article in articles]

    @app.post("/api/analyze", response_model=AnalysisResult)
    async def analyze_article(
        request: Request, service: NewsAggregator = Depends(get_aggregator)
    ) -> AnalysisResult:
        raw_body = await request.body()
        try:
            payload = json.loads(raw_body.decode("utf-8")) if raw_body.strip() else None
        except (UnicodeDecodeError, json.JSONDecodeError, RecursionError) as exc:
            raise HTTPException(status_code=400, detail="Request body must be valid JSON") from exc
        if not isinstance(payload, dict):
            raise HTTPException(status_code=400, detail="Missing article")
        try:
            article = AnalyzeRequest.model_validate(payload)
        except ValidationError as exc:
            raise HTTPException(status_code=400, detail="Invalid article payload") from exc
        if not article.title:
            raise HTTPException(status_code=400, detail="Missing article")

        try:
            return await service.analyze(article)
        except AnalysisProviderError as exc:
            LOGGER.error("Analysis failed for %r: %s", article.title, exc)
            raise HTTPException(status_code=500, detail="Analysis provider failed") from exc

    if static_dir is not None:
        _mount_client(app, static_dir)

    return app


def _mount_client(app: FastAPI, static_dir: Path) -> None:
    """Serve the presentation client, falling back to ``index.html`` for unknown paths."""

    root = static_dir.expanduser().resolve()
    if not root.is_dir():
        LOGGER.warning("Static directory %s does not exist; client not served", root)
        return
    index = root / "index.html"

    @app.get("/{path:path}", include_in_schema=False)
    async def serve_client(path: str) -> FileResponse:
        if path.startswith("api/"):
            raise HTTPException(status_code=404, detail="Not Found")
        candidate = (root / path).resolve()
        if path and candidate.is_file() and candidate.is_relative_to(root):
            return FileResponse(candidate)
        if not index.is_file():
            raise HTTPException(status_code=404, detail="Not Found")
        return FileResponse(index)


__all__ = ["create_app"]
