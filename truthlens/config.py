"""Configuration helpers for the TruthLens news service."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta
from pathlib import Path
from typing import Optional
import os


@dataclass
class NewsSourceConfig:
    """Configuration for the NewsData article source."""

    api_key: Optional[str] = None
    url: str = "https://newsdata.io/api/1/latest"
    country: str = "in"
    language: str = "en"
    timeout: float = 15.0


@dataclass
class AnalysisConfig:
    """Configuration for the chat-completions analysis provider."""

    api_key: Optional[str] = None
    url: str = "https://api.openai.com/v1/chat/completions"
    model: str = "gpt-3.5-turbo"
    max_tokens: int = 600
    temperature: float = 0.0
    timeout: float = 60.0

    @property
    def configured(self) -> bool:
        return bool(self.api_key)


@dataclass
class AppConfig:
    """Top-level configuration for the service."""

    source: NewsSourceConfig = field(default_factory=NewsSourceConfig)
    analysis: AnalysisConfig = field(default_factory=AnalysisConfig)
    max_age_hours: float = 4.0
    api_host: str = "0.0.0.0"
    api_port: int = 3000
    static_dir: Optional[Path] = None
    log_level: str = "INFO"

    @property
    def max_age(self) -> timedelta:
        return timedelta(hours=self.max_age_hours)


def _optional_env(name: str) -> Optional[str]:
    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    return value.strip()


def _float_env(name: str, default: str) -> float:
    raw = os.getenv(name, default)
    try:
        return float(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got {raw!r}") from exc


def _int_env(name: str, default: str) -> int:
    raw = os.getenv(name, default)
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc


def load_config() -> AppConfig:
    """Load configuration from environment variables with sensible defaults."""

    source = NewsSourceConfig(
        api_key=_optional_env("NEWSDATA_API_KEY"),
        url=os.getenv("NEWSDATA_URL", "https://newsdata.io/api/1/latest"),
        country=os.getenv("NEWS_COUNTRY", "in"),
        language=os.getenv("NEWS_LANGUAGE", "en"),
        timeout=_float_env("NEWS_TIMEOUT_SECONDS", "15"),
    )
    analysis = AnalysisConfig(
        api_key=_optional_env("OPENAI_API_KEY"),
        url=os.getenv("OPENAI_URL", "https://api.openai.com/v1/chat/completions"),
        model=os.getenv("OPENAI_MODEL", "gpt-3.5-turbo"),
        max_tokens=_int_env("ANALYSIS_MAX_TOKENS", "600"),
        timeout=_float_env("ANALYSIS_TIMEOUT_SECONDS", "60"),
    )

    max_age_hours = _float_env("NEWS_MAX_AGE_HOURS", "4")
    if max_age_hours <= 0:
        raise ValueError("NEWS_MAX_AGE_HOURS must be positive")

    static_dir_env = _optional_env("STATIC_DIR")
    static_dir = Path(static_dir_env).expanduser() if static_dir_env else None

    return AppConfig(
        source=source,
        analysis=analysis,
        max_age_hours=max_age_hours,
        api_host=os.getenv("API_HOST", "0.0.0.0"),
        api_port=_int_env("PORT", "3000"),
        static_dir=static_dir,
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )


__all__ = [
    "AnalysisConfig",
    "AppConfig",
    "NewsSourceConfig",
    "load_config",
]
