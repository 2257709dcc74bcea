"""Tests for deduplication, keyword relevance and pagination."""

from datetime import datetime, timezone

import pytest

from news_dashboard.core.dedup import dedup_articles, filter_by_keywords, paginate
from news_dashboard.core.types import Article


def _article(title: str, link: str, description: str = "") -> Article:
    clean = title.rsplit(" - ", 1)[0]
    return Article(
        title=title,
        clean_title=clean,
        link=link,
        published_at=datetime(2026, 10, 19, tzinfo=timezone.utc),
        source="Example",
        description=description,
    )


def test_dedup_by_link():
    articles = [
        _article("Story one - A", "https://example.com/1"),
        _article("Completely different - B", "https://example.com/1"),
    ]
    assert dedup_articles(articles) == [articles[0]]


def test_dedup_syndicated_headlines():
    articles = [
        _article("Toyota posts record quarterly profit - Nikkei", "https://nikkei.example/1"),
        _article("Toyota posts record quarterly profit - Reuters", "https://reuters.example/9"),
        _article("Sony unveils new sensor - Reuters", "https://reuters.example/10"),
    ]

    kept = dedup_articles(articles)

    assert [a.link for a in kept] == ["https://nikkei.example/1", "https://reuters.example/10"]


def test_dedup_keeps_distinct_headlines_with_high_threshold():
    articles = [
        _article("Rates rise in Japan - A", "https://example.com/1"),
        _article("Rates rise in Japan again - B", "https://example.com/2"),
    ]
    assert len(dedup_articles(articles, threshold=101)) == 2


def test_keyword_filter_substring_and_fuzzy():
    articles = [
        _article("Semiconductor exports climb - A", "https://example.com/1"),
        _article("Weather update - B", "https://example.com/2", description="Rain in Osaka"),
        _article("Chip makers rally - C", "https://example.com/3", description="semiconductors lead gains"),
    ]

    kept = filter_by_keywords(articles, ["semiconductor"])
    assert [a.link for a in kept] == ["https://example.com/1", "https://example.com/3"]

    assert filter_by_keywords(articles, ["osaka"]) == [articles[1]]


def test_keyword_filter_disabled_without_terms():
    articles = [_article("Anything - A", "https://example.com/1")]
    assert filter_by_keywords(articles, None) == articles
    assert filter_by_keywords(articles, ["  ", ""]) == articles


def test_paginate_pages_and_clamps():
    articles = [_article(f"Story {i} - A", f"https://example.com/{i}") for i in range(25)]

    first = paginate(articles, 1, 12)
    assert len(first.items) == 12
    assert first.total_pages == 3
    assert first.has_next and not first.has_previous

    last = paginate(articles, 99, 12)
    assert last.page == 3
    assert [a.link for a in last.items] == ["https://example.com/24"]
    assert not last.has_next

    assert paginate(articles, 0, 12).page == 1


def test_paginate_empty_list():
    page = paginate([], 3, 12)
    assert page.items == []
    assert page.page == 1
    assert page.total_pages == 1


def test_paginate_rejects_bad_page_size():
    with pytest.raises(ValueError):
        paginate([], 1, 0)
