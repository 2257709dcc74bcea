"""Feed entry normalization.

This module turns raw RSS entries (feedparser entries or plain mappings
with RSS field names) into canonical Article records. Entries missing a
title or link are skipped individually so one bad item never aborts the
rest of the feed.
"""

from __future__ import annotations

import calendar
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
import logging
import re
import time
from typing import Any, Iterable, Mapping

from bs4 import BeautifulSoup

from ..exceptions import MalformedEntryError
from .types import Article

logger = logging.getLogger(__name__)

DEFAULT_SOURCE = "Google News"

_TAG_RE = re.compile(r"<[^>]*>")
_WS_RE = re.compile(r"\s+")


def strip_markup(html: str | None) -> str:
    """Remove all markup from an HTML fragment and collapse whitespace.

    Args:
        html: HTML fragment such as an RSS description

    Returns:
        Plain text on a single line with no angle brackets

    Examples:
        >>> strip_markup('<a href="x">Rates rise</a>&nbsp;&nbsp;<font>NHK</font>')
        'Rates rise NHK'
    """
    if not html:
        return ""
    text = BeautifulSoup(html, "html.parser").get_text(" ")
    # Decoded entities (&lt;b&gt;) can reintroduce tags as text
    text = _TAG_RE.sub(" ", text)
    text = text.replace("<", " ").replace(">", " ")
    return _WS_RE.sub(" ", text).strip()


def clean_title(title: str) -> str:
    """Drop the trailing " - Source" suffix Google News appends to headlines.

    The cut happens at the last " - " only when it is not at position 0,
    so a headline starting with a dash is left intact.

    Examples:
        >>> clean_title("Rates rise again - NHK")
        'Rates rise again'
        >>> clean_title(" - Breaking")
        ' - Breaking'
    """
    idx = title.rfind(" - ")
    if idx > 0:
        return title[:idx]
    return title


def parse_published(entry: Mapping[str, Any]) -> datetime | None:
    """Return a timezone-aware UTC publish time, or None if unparsable.

    Prefers feedparser's pre-parsed struct_time fields, then falls back to
    parsing the raw RFC 2822 (or ISO 8601) date string.
    """
    for key in ("published_parsed", "updated_parsed"):
        val = entry.get(key)
        if isinstance(val, time.struct_time):
            # feedparser normalizes *_parsed to UTC
            return datetime.fromtimestamp(calendar.timegm(val), tz=timezone.utc)

    for key in ("published", "pubDate", "updated"):
        raw = entry.get(key)
        if isinstance(raw, datetime):
            return _as_utc(raw)
        if not isinstance(raw, str) or not raw.strip():
            continue
        parsed = _parse_date_string(raw.strip())
        if parsed is not None:
            return parsed
    return None


def normalize_entry(entry: Mapping[str, Any], default_source: str = DEFAULT_SOURCE) -> Article:
    """Convert one raw feed entry into an Article.

    Requires:
    - title (non-empty)
    - link (non-empty)
    Optional:
    - published/pubDate, description/summary, source

    Raises:
        MalformedEntryError: If title or link is missing
    """
    title = _text(entry.get("title"))
    link = _text(entry.get("link"))
    if not title or not link:
        raise MalformedEntryError("Entry lacks required fields for Article: title/link")

    description = entry.get("description")
    if description is None:
        description = entry.get("summary")

    return Article(
        title=title,
        clean_title=clean_title(title),
        link=link,
        published_at=parse_published(entry),
        source=_source(entry.get("source")) or default_source,
        description=strip_markup(_text(description)),
    )


def normalize_entries(
    entries: Iterable[Mapping[str, Any]],
    default_source: str = DEFAULT_SOURCE,
) -> list[Article]:
    """Normalize a batch of entries, skipping malformed ones with a warning."""
    articles: list[Article] = []
    for idx, entry in enumerate(entries):
        try:
            articles.append(normalize_entry(entry, default_source))
        except MalformedEntryError as exc:
            logger.warning("Skipping feed entry %d: %s", idx, exc)
    return articles


def sort_by_recency(articles: Iterable[Article]) -> list[Article]:
    """Sort newest first; undated articles go last in their original order."""
    items = list(articles)
    dated = [a for a in items if a.published_at is not None]
    undated = [a for a in items if a.published_at is None]
    dated.sort(key=lambda a: a.published_at, reverse=True)
    return dated + undated


def _parse_date_string(raw: str) -> datetime | None:
    try:
        return _as_utc(parsedate_to_datetime(raw))
    except (TypeError, ValueError, IndexError):
        pass
    try:
        return _as_utc(datetime.fromisoformat(raw.replace("Z", "+00:00")))
    except ValueError:
        return None


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _source(value: Any) -> str:
    # feedparser exposes <source> as a mapping with a "title" key
    if isinstance(value, Mapping):
        value = value.get("title")
    return _text(value)


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()
