"""
Core domain models and business logic.

This package contains data types and transformations that are
independent of any network collaborator.
"""

from .dedup import dedup_articles, filter_by_keywords, paginate
from .normalizer import (
    DEFAULT_SOURCE,
    clean_title,
    normalize_entries,
    normalize_entry,
    sort_by_recency,
    strip_markup,
)
from .periods import age_in_days, filter_by_period
from .types import PERIOD_DAYS, Article, Page, RankCandidate, SummaryResult

__all__ = [
    "Article",
    "Page",
    "RankCandidate",
    "SummaryResult",
    "PERIOD_DAYS",
    "DEFAULT_SOURCE",
    "clean_title",
    "strip_markup",
    "normalize_entry",
    "normalize_entries",
    "sort_by_recency",
    "age_in_days",
    "filter_by_period",
    "dedup_articles",
    "filter_by_keywords",
    "paginate",
]
