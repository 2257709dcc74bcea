"""
Feed pipeline orchestration for the news dashboard.

This module composes the dashboard workflow:
1. Fetch the Google News feed for a query/region (or an explicit feed URL)
2. Normalize entries and drop duplicates
3. Sort newest first and optionally filter by keyword relevance
4. Paginate for display
5. Summarize the visible articles (staggered to ease rate limits)
6. Rank a period window by importance on demand

Every outbound call is bounded by its own timeout and fails soft.
"""

from __future__ import annotations

import logging
from pathlib import Path
import random
import time
from typing import Callable

from .cache import Clock, SummaryCache, utc_now
from .config import AppConfig
from .core.dedup import dedup_articles, filter_by_keywords, paginate
from .core.normalizer import sort_by_recency
from .core.types import Article, Page, SummaryResult
from .fetch.extractor import ContentExtractor
from .fetch.feed import build_feed_url, fetch_feed
from .llm.providers.base import TextProvider
from .llm.providers.factory import create_provider
from .logging_utils import log_event, setup_llm_logger
from .services.ranking import RankingService
from .services.summary import Extractor, SummaryService, cache_key

FeedFetcher = Callable[[str], list[Article]]


class FeedPipeline:
    """Entry point used by the CLI and the digest builder.

    Attributes:
        cfg: Application configuration
        summaries: Summary service (cache + extractor + provider)
        ranking: Ranking service
        logger: Pipeline event logger
    """

    def __init__(
        self,
        cfg: AppConfig,
        summaries: SummaryService,
        ranking: RankingService,
        feed_fetcher: FeedFetcher | None = None,
        logger: logging.Logger | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.cfg = cfg
        self.summaries = summaries
        self.ranking = ranking
        self.logger = logger or logging.getLogger(__name__)
        self._feed_fetcher = feed_fetcher or (lambda url: fetch_feed(url, cfg.fetch))
        self._sleep = sleep

    def feed_url(self, query: str | None = None, region: str | None = None) -> str:
        return build_feed_url(
            query or self.cfg.feed.default_query,
            region or self.cfg.feed.default_region,
            self.cfg.feed,
        )

    def fetch_articles(
        self,
        query: str | None = None,
        region: str | None = None,
        feed_url: str | None = None,
        keywords: list[str] | None = None,
    ) -> list[Article]:
        """Fetch, normalize, de-duplicate and sort a feed, newest first.

        Args:
            query: Search topic (defaults to the configured topic)
            region: Region key such as "jp" or "us"
            feed_url: Arbitrary feed URL overriding query/region
            keywords: Optional relevance filter

        Returns:
            Articles sorted by recency; [] if the feed is unavailable
        """
        url = feed_url or self.feed_url(query, region)
        articles = self._feed_fetcher(url)
        fetched = len(articles)
        if self.cfg.dedup.enabled:
            articles = dedup_articles(articles, self.cfg.dedup.title_similarity_threshold)
        else:
            # Links stay unique even without fuzzy matching; ratio never exceeds 100
            articles = dedup_articles(articles, threshold=101)
        articles = sort_by_recency(articles)
        if keywords:
            articles = filter_by_keywords(articles, keywords, self.cfg.dedup.keyword_threshold)
        log_event(
            self.logger,
            "Feed fetched",
            event="feed_fetched",
            url=url,
            fetched=fetched,
            kept=len(articles),
        )
        return articles

    def page(self, articles: list[Article], page: int = 1) -> Page:
        return paginate(articles, page, self.cfg.feed.page_size)

    def get_summary(self, article: Article) -> SummaryResult:
        return self.summaries.get_summary(article)

    def summarize_visible(self, articles: list[Article], limit: int | None = None) -> list[SummaryResult]:
        """Summarize the first visible articles one after another.

        A random delay (up to ``stagger_max_seconds``) precedes each
        uncached request to spread load on the provider.
        """
        count = self.cfg.summary.auto_summary_count if limit is None else limit
        results: list[SummaryResult] = []
        for article in articles[:count]:
            if self.cfg.summary.stagger_max_seconds > 0 and not self._is_cached(article):
                self._sleep(random.uniform(0, self.cfg.summary.stagger_max_seconds))
            result = self.summaries.get_summary(article)
            log_event(
                self.logger,
                "Summary",
                event="summary_cache_hit" if result.cached else "summary_generated",
                url=article.link,
                status=result.failure or "ok",
            )
            results.append(result)
        return results

    def get_ranking(self, articles: list[Article], period: str) -> list[Article]:
        ranked = self.ranking.get_ranking(articles, period)
        log_event(
            self.logger,
            "Ranking",
            event="ranking",
            period=period,
            candidates=len(articles),
            ranked=len(ranked),
        )
        return ranked

    def _is_cached(self, article: Article) -> bool:
        return self.summaries.cache.get(cache_key(article)) is not None


def build_pipeline(
    cfg: AppConfig,
    logger: logging.Logger | None = None,
    provider: TextProvider | None = None,
    extractor: Extractor | None = None,
    clock: Clock = utc_now,
) -> FeedPipeline:
    """Wire a FeedPipeline from configuration.

    Raises:
        ConfigurationError: If the provider cannot be built (e.g. missing API key)
    """
    if provider is None:
        provider = create_provider(cfg.provider, cfg.logging, setup_llm_logger(cfg.logging))
    if extractor is None:
        extractor = ContentExtractor(cfg.fetch, cfg.extract)
    cache = SummaryCache(
        Path(cfg.cache.path) if cfg.cache.path else None,
        clock=clock,
        ttl_days=cfg.cache.ttl_days,
    )
    summaries = SummaryService(provider, extractor, cache, cfg.summary)
    ranking = RankingService(provider, cfg.ranking, clock=clock)
    return FeedPipeline(cfg, summaries, ranking, logger=logger)
