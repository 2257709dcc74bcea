"""
News Dashboard - topic-filtered Google News with AI summaries and rankings.

This package fetches Google News RSS feeds, normalizes them into Article
records, summarizes articles through a text-generation API (with a
persistent cache) and ranks a period window by estimated importance,
falling back to recency whenever the model cannot be used.

Main entry point is the CLI via the `news-dashboard` command.

Example:
    $ news-dashboard headlines -q "半導体" -r jp
    $ news-dashboard rank --period week
"""

__all__ = [
    "__version__",
    "Article",
    "AppConfig",
    "FeedPipeline",
    "build_pipeline",
    "load_config",
]
__version__ = "0.1.0"

from .config import AppConfig, load_config
from .core.types import Article
from .pipeline import FeedPipeline, build_pipeline
