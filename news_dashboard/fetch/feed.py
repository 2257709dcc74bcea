"""Google News RSS feed retrieval.

Feeds are downloaded with httpx (so timeouts and proxies follow the fetch
config) and parsed with feedparser. Any upstream problem degrades to an
empty article list.
"""

from __future__ import annotations

import io
import logging
from urllib.parse import urlencode

import feedparser
import httpx

from ..config import FeedConfig, FetchConfig
from ..core.normalizer import normalize_entries
from ..core.types import Article

logger = logging.getLogger(__name__)


def build_feed_url(query: str, region: str, cfg: FeedConfig) -> str:
    """Build the Google News search feed URL for a query and region.

    Unknown regions fall back to the configured default region.

    Example:
        >>> build_feed_url("AI", "us", FeedConfig())
        'https://news.google.com/rss/search?q=AI&hl=en-US&gl=US&ceid=US%3Aen'
    """
    locale = cfg.regions.get(region) or cfg.regions[cfg.default_region]
    params = {"q": query, "hl": locale["hl"], "gl": locale["gl"], "ceid": locale["ceid"]}
    return f"{cfg.base_url}?{urlencode(params)}"


def fetch_feed(
    url: str,
    cfg: FetchConfig,
    transport: httpx.BaseTransport | None = None,
) -> list[Article]:
    """Download and normalize one RSS/Atom feed.

    Args:
        url: Feed URL
        cfg: Fetch settings (timeout, User-Agent, proxies)
        transport: Optional httpx transport (used by tests)

    Returns:
        Normalized articles in feed order, or [] if the feed is unavailable
    """
    try:
        with httpx.Client(
            timeout=cfg.timeout_seconds,
            headers={"User-Agent": cfg.user_agent},
            follow_redirects=True,
            max_redirects=cfg.max_redirects,
            trust_env=cfg.trust_env,
            transport=transport,
        ) as client:
            resp = client.get(url)
            resp.raise_for_status()
            body = resp.content
    except httpx.HTTPError as exc:
        logger.warning("Feed fetch failed for %s: %s: %s", url, type(exc).__name__, exc)
        return []

    # A stream keeps feedparser from treating the body as a URL or file path
    feed = feedparser.parse(io.BytesIO(body))
    entries = getattr(feed, "entries", None) or []
    if getattr(feed, "bozo", 0) and not entries:
        exc = getattr(feed, "bozo_exception", None)
        logger.warning("Invalid RSS/Atom feed: %s (%s)", url, exc)
        return []
    return normalize_entries(entries)
