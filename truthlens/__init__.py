"""TruthLens news aggregation and analysis service."""

from .config import AnalysisConfig, AppConfig, NewsSourceConfig, load_config
from .service import NewsAggregator

__all__ = [
    "AnalysisConfig",
    "AppConfig",
    "NewsAggregator",
    "NewsSourceConfig",
    "load_config",
]
