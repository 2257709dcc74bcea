"""Daily digest assembly and rendering.

The digest lists the ranked top stories of a period with their
summaries, followed by the latest headlines. Rendering uses the Jinja2
templates shipped in ``news_dashboard/templates``; delivering the result
(e.g. by email) is left to the scheduler that invokes the CLI.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from .cache import utc_now
from .core.types import Article, SummaryResult
from .pipeline import FeedPipeline

_TEMPLATE_DIR = Path(__file__).parent / "templates"


@dataclass
class Digest:
    """Content of one daily digest.

    Attributes:
        title: Digest heading
        query: Topic the feed was searched for
        period: Ranking window of the top stories
        generated_at: Time the digest was built
        top_stories: Ranked articles with their summaries
        headlines: Latest articles not already in the top stories
    """
    title: str
    query: str
    period: str
    generated_at: datetime
    top_stories: list[SummaryResult] = field(default_factory=list)
    headlines: list[Article] = field(default_factory=list)


def build_digest(
    pipeline: FeedPipeline,
    query: str | None = None,
    region: str | None = None,
    period: str | None = None,
    now: datetime | None = None,
) -> Digest:
    cfg = pipeline.cfg.digest
    query = query or pipeline.cfg.feed.default_query
    period = period or cfg.period

    articles = pipeline.fetch_articles(query=query, region=region)
    ranked = pipeline.get_ranking(articles, period)
    top_stories = [pipeline.get_summary(article) for article in ranked]
    ranked_links = {article.link for article in ranked}
    headlines = [a for a in articles if a.link not in ranked_links][: cfg.headline_count]

    return Digest(
        title=cfg.title,
        query=query,
        period=period,
        generated_at=now or utc_now(),
        top_stories=top_stories,
        headlines=headlines,
    )


def render_digest_html(digest: Digest, output_path: Path) -> None:
    _render("digest.html", digest, output_path)


def render_digest_markdown(digest: Digest, output_path: Path) -> None:
    _render("digest.md", digest, output_path)


def _render(template_name: str, digest: Digest, output_path: Path) -> None:
    env = Environment(
        loader=FileSystemLoader(str(_TEMPLATE_DIR)),
        autoescape=select_autoescape(["html"]),
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["datetime"] = _format_datetime
    template = env.get_template(template_name)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(template.render(digest=digest), encoding="utf-8")


def _format_datetime(value: datetime | None) -> str:
    if value is None:
        return ""
    return value.strftime("%Y-%m-%d %H:%M UTC")
