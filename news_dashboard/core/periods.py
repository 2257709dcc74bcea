"""Period window filtering for rankings and digests."""

from __future__ import annotations

from datetime import datetime
import math
from typing import Iterable

from .types import PERIOD_DAYS, Article

_SECONDS_PER_DAY = 86400


def age_in_days(published_at: datetime, now: datetime) -> int:
    """Whole days between two instants, rounded up.

    An article 23h59m old is 1 day old; one 24h1s old is 2 days old.
    """
    seconds = abs((now - published_at).total_seconds())
    return math.ceil(seconds / _SECONDS_PER_DAY)


def filter_by_period(articles: Iterable[Article], period: str, now: datetime) -> list[Article]:
    """Keep articles whose age fits the period window, preserving order.

    Articles without a publish time are excluded for every period,
    including "all".

    Raises:
        ValueError: If the period label is unknown
    """
    if period not in PERIOD_DAYS:
        supported = ", ".join(PERIOD_DAYS)
        raise ValueError(f"Unsupported period: {period}. Supported: {supported}")
    limit = PERIOD_DAYS[period]

    kept: list[Article] = []
    for article in articles:
        if article.published_at is None:
            continue
        if limit is not None and age_in_days(article.published_at, now) > limit:
            continue
        kept.append(article)
    return kept
