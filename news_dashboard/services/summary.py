"""Article summary generation with a persistent cache."""

from __future__ import annotations

import logging
from typing import Protocol

from ..cache import SummaryCache
from ..config import SummaryConfig
from ..core.types import Article, SummaryResult
from ..exceptions import ProviderError
from ..llm.prompts import build_summary_prompt
from ..llm.providers.base import TextProvider

logger = logging.getLogger(__name__)


class Extractor(Protocol):
    def extract(self, url: str) -> str:  # pragma: no cover - interface
        ...


def cache_key(article: Article) -> str:
    """Cache key for an article: its link, or its title when the link is empty."""
    return article.link or article.title


class SummaryService:
    """Produces short blurbs for articles.

    On a cache miss the article page is extracted; when the body is too
    short to be useful the headline and feed description are used
    instead. Failures are reported in the SummaryResult and never cached,
    so a later request retries the provider.
    """

    def __init__(
        self,
        provider: TextProvider,
        extractor: Extractor,
        cache: SummaryCache,
        cfg: SummaryConfig,
    ):
        self.provider = provider
        self.extractor = extractor
        self.cache = cache
        self.cfg = cfg

    def get_summary(self, article: Article) -> SummaryResult:
        key = cache_key(article)
        cached = self.cache.get(key)
        if cached:
            logger.debug("Summary cache hit for %s", key)
            return SummaryResult(article=article, text=cached, cached=True)

        basis, from_page = self._basis(article)
        prompt = build_summary_prompt(article, basis, from_page, self.cfg)
        try:
            content = self.provider.generate(
                prompt,
                purpose="summary",
                temperature=0.3,
                max_output_tokens=512,
            )
        except ProviderError as exc:
            logger.warning("Summary failed for %s: %s", key, exc)
            return SummaryResult(article=article, failure="provider_error")

        text = (content or "").strip()
        if not text:
            logger.warning("Summary failed for %s: empty response", key)
            return SummaryResult(article=article, failure="empty_response")

        try:
            self.cache.set(key, text)
        except OSError as exc:
            logger.warning("Could not persist summary cache: %s", exc)
        return SummaryResult(article=article, text=text)

    def _basis(self, article: Article) -> tuple[str, bool]:
        """Text sent to the model, and whether it came from the article page."""
        extracted = self.extractor.extract(article.link) if article.link else ""
        if len(extracted) < self.cfg.min_extract_chars:
            fallback = "\n".join(p for p in (article.clean_title, article.description) if p)
            return fallback, False
        return extracted[: self.cfg.max_chars], True
