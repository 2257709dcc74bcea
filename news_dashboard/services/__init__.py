"""AI-assisted article services: summaries and importance rankings."""

from .ranking import RankingService, build_candidates, merge_ranking
from .summary import SummaryService, cache_key

__all__ = [
    "RankingService",
    "SummaryService",
    "build_candidates",
    "merge_ranking",
    "cache_key",
]
