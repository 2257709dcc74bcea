"""
Feed and article fetching.

This package handles RSS retrieval, HTTP page fetching with bounded
redirects, and body text extraction.
"""

from .extractor import ContentExtractor, extract_text
from .feed import build_feed_url, fetch_feed
from .fetcher import FetchResult, fetch_html

__all__ = [
    "ContentExtractor",
    "extract_text",
    "build_feed_url",
    "fetch_feed",
    "FetchResult",
    "fetch_html",
]
