"""
Core data types for the news dashboard.

This module defines the fundamental data structures used throughout the pipeline:
- Article: Canonical record built from one feed entry
- RankCandidate: Restricted article view sent to the ranking model
- SummaryResult: Outcome of one summary request (text or failure)
- Page: One page of a paginated article list
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


PERIOD_DAYS: dict[str, int | None] = {
    "today": 1,
    "week": 7,
    "month": 30,
    "all": None,
}


@dataclass(frozen=True)
class Article:
    """Represents a normalized news article.

    Identity is the link: it is used for de-duplication and as the
    summary cache key.

    Attributes:
        title: The headline as published, including any " - Source" suffix
        clean_title: The headline with the trailing source suffix removed
        link: The full URL of the article
        published_at: Timezone-aware publish time, or None if unparsable
        source: The publication name
        description: Plain-text description, markup stripped and whitespace collapsed
    """
    title: str
    clean_title: str
    link: str
    published_at: datetime | None
    source: str
    description: str = ""


@dataclass(frozen=True)
class RankCandidate:
    """Article view sent to the ranking model.

    The id is a position in the candidate list and is only meaningful
    within a single ranking call.
    """
    id: int
    title: str


@dataclass
class SummaryResult:
    """Outcome of a summary request.

    Either text will be populated (success) or failure will be populated,
    but never both.

    Attributes:
        article: The article that was summarized
        text: The generated summary, or None on failure
        failure: Failure category ("provider_error", "empty_response"), None on success
        cached: Whether the text was served from the summary cache
    """
    article: Article
    text: str | None = None
    failure: str | None = None
    cached: bool = False

    @property
    def ok(self) -> bool:
        return self.text is not None

    def display_text(self) -> str:
        """Summary text, or the feed description when generation failed."""
        if self.text:
            return self.text
        return self.article.description


@dataclass
class Page:
    """One page of articles.

    Attributes:
        items: Articles on this page
        page: 1-based page number
        page_size: Maximum number of articles per page
        total: Number of articles across all pages
    """
    items: list[Article] = field(default_factory=list)
    page: int = 1
    page_size: int = 12
    total: int = 0

    @property
    def total_pages(self) -> int:
        if self.total == 0:
            return 1
        return (self.total + self.page_size - 1) // self.page_size

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.page > 1
