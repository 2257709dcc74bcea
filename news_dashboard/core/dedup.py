"""
Article deduplication, keyword relevance and pagination.

Deduplication removes articles based on:
1. Exact link matches (the same item listed twice)
2. Fuzzy headline similarity (the same story syndicated under several links)
"""

from __future__ import annotations

from rapidfuzz import fuzz

from .types import Article, Page


def dedup_articles(articles: list[Article], threshold: int = 92) -> list[Article]:
    """Remove duplicate articles from a list.

    Headlines are compared without their " - Source" suffix, since Google
    News appends a different publisher to each copy of a syndicated story.

    Args:
        articles: List of articles to deduplicate
        threshold: Similarity threshold (0-100) for fuzzy title matching.
                   Default 92 means titles must be 92% similar to be duplicates.

    Returns:
        Deduplicated list of articles, preserving original order
    """
    seen_links: set[str] = set()
    kept: list[Article] = []
    titles: list[str] = []

    for article in articles:
        if article.link in seen_links:
            continue
        if _is_similar_title(article.clean_title, titles, threshold):
            continue
        seen_links.add(article.link)
        titles.append(article.clean_title)
        kept.append(article)

    return kept


def filter_by_keywords(
    articles: list[Article],
    keywords: list[str] | None,
    threshold: int = 85,
) -> list[Article]:
    """Keep articles relevant to at least one keyword.

    A keyword matches when it appears in the headline or description, or
    when rapidfuzz's partial ratio against them reaches the threshold
    (tolerates inflections and small spelling differences).

    Args:
        articles: Articles to filter
        keywords: Keywords to match; None or empty disables filtering
        threshold: Minimum partial-ratio score (0-100)

    Returns:
        Matching articles in their original order
    """
    terms = [k.strip().lower() for k in keywords or [] if k and k.strip()]
    if not terms:
        return list(articles)

    kept: list[Article] = []
    for article in articles:
        haystack = f"{article.clean_title} {article.description}".lower()
        for term in terms:
            if term in haystack or fuzz.partial_ratio(term, haystack) >= threshold:
                kept.append(article)
                break
    return kept


def paginate(articles: list[Article], page: int, page_size: int) -> Page:
    """Slice one 1-based page out of an article list.

    Pages below 1 clamp to the first page and pages past the end clamp to
    the last one.
    """
    if page_size < 1:
        raise ValueError("page_size must be at least 1")
    total = len(articles)
    last_page = max(1, (total + page_size - 1) // page_size)
    page = min(max(page, 1), last_page)
    start = (page - 1) * page_size
    return Page(
        items=articles[start : start + page_size],
        page=page,
        page_size=page_size,
        total=total,
    )


def _is_similar_title(title: str, titles: list[str], threshold: int) -> bool:
    for existing in titles:
        if fuzz.ratio(title, existing) >= threshold:
            return True
    return False
