"""Prompt builders for summaries and importance rankings."""

from __future__ import annotations

import json

from ..config import RankingConfig, SummaryConfig
from ..core.types import Article, RankCandidate

_PERIOD_LABELS = {
    "today": "the last 24 hours",
    "week": "the past week",
    "month": "the past month",
    "all": "the whole feed",
}


def build_summary_prompt(article: Article, basis: str, from_page: bool, cfg: SummaryConfig) -> str:
    """Prompt for a short blurb about one article.

    ``from_page`` tells the model whether ``basis`` is the article body or
    only the headline and feed description, in which case it must infer.
    """
    if from_page:
        source_note = "Article text:"
    else:
        source_note = (
            "The article body was unavailable. Infer the story from the headline "
            "and feed description below, without inventing specific facts:"
        )
    return (
        f"Summarize the following news article in {cfg.language} in about "
        f"{cfg.target_chars} characters. Output only the summary as plain text, "
        "with no heading, bullets or preface.\n"
        f"Title: {article.clean_title}\n"
        f"Source: {article.source}\n"
        f"{source_note}\n{basis}"
    )


def build_ranking_prompt(
    candidates: list[RankCandidate],
    period: str,
    cfg: RankingConfig,
    top_n: int | None = None,
) -> str:
    """Prompt asking for candidate ids ordered by descending importance."""
    count = cfg.top_n if top_n is None else top_n
    listing = json.dumps(
        [{"id": c.id, "title": c.title} for c in candidates],
        ensure_ascii=False,
    )
    window = _PERIOD_LABELS.get(period, period)
    return (
        f"You are {cfg.persona}. From the headlines below, published during {window}, "
        f"pick the {count} most important stories for a general reader, judged by "
        "economic and social impact. Respond with only a JSON array of the chosen ids "
        "in descending order of importance, for example [3, 0, 7, 1, 12].\n"
        f"Headlines:\n{listing}"
    )
