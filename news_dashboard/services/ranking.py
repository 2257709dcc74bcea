"""Importance ranking of a period window of articles.

The ranking is best-effort: whenever the model cannot be used (request
failure, unparseable reply, no ids) the result degrades to the most
recent articles in the window. Callers never see an error.
"""

from __future__ import annotations

from datetime import datetime
import logging

from ..cache import Clock, utc_now
from ..config import RankingConfig
from ..core.periods import filter_by_period
from ..core.types import Article, RankCandidate
from ..exceptions import ProviderError, RankingParseError
from ..llm.json_parser import parse_ranked_ids
from ..llm.prompts import build_ranking_prompt
from ..llm.providers.base import TextProvider

logger = logging.getLogger(__name__)

# Upper bound on a ranking result, whatever top_n is configured to
MAX_RANKED = 5


def build_candidates(articles: list[Article], limit: int) -> list[RankCandidate]:
    """Positional candidates for the first ``limit`` articles."""
    return [RankCandidate(id=idx, title=a.title) for idx, a in enumerate(articles[:limit])]


def merge_ranking(
    ranked_ids: list[int],
    candidates: list[Article],
    pool: list[Article],
    top_n: int,
) -> list[Article]:
    """Map ranked ids back to articles and back-fill from the pool.

    Ids outside the candidate list (including negative ones) are skipped,
    as are repeats of an already chosen link. Remaining slots are filled
    with unseen pool articles in pool order.

    Returns:
        At most ``top_n`` articles with distinct links
    """
    ranked: list[Article] = []
    seen: set[str] = set()

    for article_id in ranked_ids:
        if len(ranked) >= top_n:
            break
        if article_id < 0 or article_id >= len(candidates):
            continue
        article = candidates[article_id]
        if article.link in seen:
            continue
        seen.add(article.link)
        ranked.append(article)

    for article in pool:
        if len(ranked) >= top_n:
            break
        if article.link in seen:
            continue
        seen.add(article.link)
        ranked.append(article)

    return ranked


class RankingService:
    """Orders a period window of articles by estimated importance."""

    def __init__(self, provider: TextProvider, cfg: RankingConfig, clock: Clock = utc_now):
        self.provider = provider
        self.cfg = cfg
        self._clock = clock

    @property
    def top_n(self) -> int:
        return max(0, min(self.cfg.top_n, MAX_RANKED))

    def get_ranking(
        self,
        articles: list[Article],
        period: str,
        now: datetime | None = None,
    ) -> list[Article]:
        """Return up to ``top_n`` articles from the period, most important first.

        Args:
            articles: Articles sorted newest first
            period: "today", "week", "month" or "all"
            now: Reference time for the period window (defaults to the clock)

        Raises:
            ValueError: If the period label is unknown
        """
        filtered = filter_by_period(articles, period, now or self._clock())
        if not filtered:
            return []

        candidates = filtered[: self.cfg.max_candidates]
        prompt = build_ranking_prompt(
            build_candidates(candidates, self.cfg.max_candidates),
            period,
            self.cfg,
            top_n=self.top_n,
        )
        try:
            content = self.provider.generate(
                prompt,
                purpose="ranking",
                temperature=0.1,
                max_output_tokens=256,
            )
            ranked_ids = parse_ranked_ids(content)
        except (ProviderError, RankingParseError) as exc:
            logger.warning("Ranking fell back to recency order: %s", exc)
            return self._fallback(filtered)

        if not ranked_ids:
            logger.warning("Ranking fell back to recency order: no ids returned")
            return self._fallback(filtered)

        return merge_ranking(ranked_ids, candidates, filtered, self.top_n)

    def _fallback(self, filtered: list[Article]) -> list[Article]:
        # The window may itself repeat a link; keep the no-duplicates guarantee
        return merge_ranking([], filtered, filtered, self.top_n)
