"""
Command-line interface for the news dashboard.

Uses Typer to expose the feed pipeline: headline listing with summaries,
single-article summaries, importance rankings and the daily digest.
Supports loading .env files for API key configuration.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from dotenv import load_dotenv
import typer
from rich.console import Console
from rich.table import Table

from .config import AppConfig, load_config
from .core.normalizer import DEFAULT_SOURCE, clean_title, strip_markup
from .core.types import PERIOD_DAYS, Article
from .digest import build_digest, render_digest_html, render_digest_markdown
from .exceptions import ConfigurationError
from .logging_utils import setup_logging
from .pipeline import FeedPipeline, build_pipeline

app = typer.Typer(add_completion=False, help="Topic-filtered Google News with AI summaries.")
console = Console()

ConfigOption = typer.Option(None, "--config", "-c", exists=True, help="YAML config file.")
LogLevelOption = typer.Option(None, "--log-level", help="Logging level.")
DIGEST_FORMATS = ("html", "markdown")


def _load(config: Path | None, log_level: str | None) -> AppConfig:
    load_dotenv()
    cfg = load_config(str(config) if config else None)
    if log_level:
        cfg.logging.level = log_level
    return cfg


def _pipeline(cfg: AppConfig) -> FeedPipeline:
    logger = setup_logging(cfg.logging)
    try:
        return build_pipeline(cfg, logger=logger)
    except ConfigurationError as exc:
        console.print(f"[bold red]Configuration error:[/] {exc}")
        raise typer.Exit(code=2) from exc


def _check_period(period: str) -> str:
    if period not in PERIOD_DAYS:
        raise typer.BadParameter(f"must be one of: {', '.join(PERIOD_DAYS)}")
    return period


def _check_format(fmt: str) -> str:
    if fmt not in DIGEST_FORMATS:
        raise typer.BadParameter(f"must be one of: {', '.join(DIGEST_FORMATS)}", param_hint="--format")
    return fmt


def _format_time(value: datetime | None) -> str:
    if value is None:
        return "-"
    return value.strftime("%Y-%m-%d %H:%M")


@app.command()
def headlines(
    query: str | None = typer.Option(None, "--query", "-q", help="Search topic."),
    region: str | None = typer.Option(None, "--region", "-r", help="Region key (jp, us)."),
    feed_url: str | None = typer.Option(None, "--feed-url", help="Read an arbitrary RSS feed instead."),
    keyword: list[str] | None = typer.Option(None, "--keyword", "-k", help="Keep only relevant articles."),
    page: int = typer.Option(1, "--page", "-p", min=1),
    summaries: bool = typer.Option(True, "--summaries/--no-summaries"),
    config: Path | None = ConfigOption,
    log_level: str | None = LogLevelOption,
):
    """List the latest headlines, summarizing the first few on the page."""
    cfg = _load(config, log_level)
    pipeline = _pipeline(cfg)
    articles = pipeline.fetch_articles(query=query, region=region, feed_url=feed_url, keywords=keyword)
    current = pipeline.page(articles, page)
    if not current.items:
        console.print("No articles found.")
        return

    summary_by_link = {}
    if summaries:
        with console.status("Summarizing..."):
            for result in pipeline.summarize_visible(current.items):
                summary_by_link[result.article.link] = result

    table = Table(title=f"{query or cfg.feed.default_query} (page {current.page}/{current.total_pages})")
    table.add_column("Published", no_wrap=True)
    table.add_column("Source")
    table.add_column("Title")
    table.add_column("Summary")
    for article in current.items:
        result = summary_by_link.get(article.link)
        summary = result.display_text() if result else ""
        table.add_row(_format_time(article.published_at), article.source, article.title, summary)
    console.print(table)


@app.command()
def summarize(
    url: str = typer.Option(..., "--url", help="Article URL."),
    title: str = typer.Option(..., "--title", help="Article headline."),
    description: str = typer.Option("", "--description", help="Feed description (HTML allowed)."),
    config: Path | None = ConfigOption,
    log_level: str | None = LogLevelOption,
):
    """Summarize a single article, falling back to its description."""
    cfg = _load(config, log_level)
    pipeline = _pipeline(cfg)
    article = Article(
        title=title,
        clean_title=clean_title(title),
        link=url,
        published_at=None,
        source=DEFAULT_SOURCE,
        description=strip_markup(description),
    )
    result = pipeline.get_summary(article)
    if result.ok:
        label = "Summary (cached)" if result.cached else "Summary"
    else:
        label = f"Summary unavailable ({result.failure}); feed description"
    console.print(f"[bold]{label}[/]")
    console.print(result.display_text())


@app.command()
def rank(
    query: str | None = typer.Option(None, "--query", "-q", help="Search topic."),
    region: str | None = typer.Option(None, "--region", "-r", help="Region key (jp, us)."),
    feed_url: str | None = typer.Option(None, "--feed-url", help="Read an arbitrary RSS feed instead."),
    period: str = typer.Option("today", "--period", help="today, week, month or all."),
    config: Path | None = ConfigOption,
    log_level: str | None = LogLevelOption,
):
    """Show the most important articles of a period."""
    period = _check_period(period)
    cfg = _load(config, log_level)
    pipeline = _pipeline(cfg)
    articles = pipeline.fetch_articles(query=query, region=region, feed_url=feed_url)
    with console.status("Ranking..."):
        ranked = pipeline.get_ranking(articles, period)
    if not ranked:
        console.print("No articles in this period.")
        return
    for idx, article in enumerate(ranked, start=1):
        console.print(f"{idx}. {article.clean_title} [dim]({article.source})[/]")


@app.command()
def digest(
    query: str | None = typer.Option(None, "--query", "-q", help="Search topic."),
    region: str | None = typer.Option(None, "--region", "-r", help="Region key (jp, us)."),
    period: str | None = typer.Option(None, "--period", help="Ranking window for top stories."),
    output: Path | None = typer.Option(None, "--output", "-o", help="Output directory."),
    fmt: str | None = typer.Option(None, "--format", help="html or markdown."),
    config: Path | None = ConfigOption,
    log_level: str | None = LogLevelOption,
):
    """Render the daily digest to a file for delivery by a scheduled job."""
    cfg = _load(config, log_level)
    if period:
        cfg.digest.period = _check_period(period)
    if output is not None:
        cfg.digest.output_dir = str(output)
    if fmt:
        cfg.digest.format = fmt
    _check_format(cfg.digest.format)
    pipeline = _pipeline(cfg)

    with console.status("Building digest..."):
        result = build_digest(pipeline, query=query, region=region)

    stamp = result.generated_at.strftime("%Y%m%d")
    out_dir = Path(cfg.digest.output_dir)
    if cfg.digest.format == "markdown":
        path = out_dir / f"digest-{stamp}.md"
        render_digest_markdown(result, path)
    else:
        path = out_dir / f"digest-{stamp}.html"
        render_digest_html(result, path)
    console.print(f"Digest generated: {path}")


if __name__ == "__main__":
    app()
