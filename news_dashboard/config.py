"""
Configuration management using YAML files and dataclasses.

This module defines all configuration dataclasses and provides loading
from YAML files with defaults. Configuration sections:
- ProviderConfig: Text-generation API settings
- FeedConfig: Google News query and region settings
- FetchConfig: HTTP fetching settings
- ExtractConfig: Article body extraction settings
- SummaryConfig: Summary prompt and cache-basis settings
- RankingConfig: Importance ranking settings
- DedupConfig: Duplicate/keyword matching settings
- CacheConfig: Summary cache location and TTL
- LoggingConfig: Logging behavior
- DigestConfig: Daily digest output settings
- AppConfig: Root configuration container
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
import os
from typing import Any

import yaml


@dataclass
class ProviderConfig:
    """Configuration for the text-generation provider.

    Attributes:
        name: Provider name ("gemini" or "openai"/"openai_compatible")
        model: Model identifier
        api_key_env: Environment variable holding the API key (provider default if None)
        base_url: Base URL for the provider API
        api_key: Optional inline API key (overrides env var)
        timeout_seconds: Per-call timeout for generation requests
        trust_env: Whether to respect system proxy settings for API requests
    """

    name: str = "gemini"
    model: str = "gemini-2.0-flash"
    api_key_env: str | None = None
    base_url: str = "https://generativelanguage.googleapis.com"
    api_key: str | None = None
    timeout_seconds: float = 30.0
    trust_env: bool = True


@dataclass
class FeedConfig:
    """Configuration for the Google News RSS source.

    Attributes:
        base_url: Google News RSS search endpoint
        default_query: Topic used when no query is given
        default_region: Region key used when no region is given
        regions: Region key -> {hl, gl, ceid} query parameters
        page_size: Number of articles per dashboard page
    """

    base_url: str = "https://news.google.com/rss/search"
    default_query: str = "人工知能"
    default_region: str = "jp"
    regions: dict[str, dict[str, str]] = field(
        default_factory=lambda: {
            "jp": {"hl": "ja", "gl": "JP", "ceid": "JP:ja"},
            "us": {"hl": "en-US", "gl": "US", "ceid": "US:en"},
        }
    )
    page_size: int = 12


@dataclass
class FetchConfig:
    """Configuration for HTTP fetching of feeds and article pages.

    Attributes:
        timeout_seconds: Timeout per request attempt
        retries: Retry attempts after a network-level failure
        max_redirects: Redirect hops followed before giving up
        trust_env: Whether to respect system proxy settings
        user_agent: Browser-like User-Agent header string
    """

    timeout_seconds: float = 8.0
    retries: int = 1
    max_redirects: int = 5
    trust_env: bool = True
    user_agent: str = (
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/120.0.0.0 Safari/537.36"
    )


@dataclass
class ExtractConfig:
    """Configuration for HTML body extraction.

    Attributes:
        primary: First extraction method ("paragraphs", "document", "trafilatura", "readability")
        fallback: Methods tried in order when the primary yields nothing
    """

    primary: str = "paragraphs"
    fallback: list[str] = field(default_factory=lambda: ["document"])


@dataclass
class SummaryConfig:
    """Configuration for article summaries.

    Attributes:
        language: Output language named in the prompt
        target_chars: Approximate summary length requested from the model
        min_extract_chars: Extracted text shorter than this falls back to title + description
        max_chars: Maximum characters of article text sent to the model
        auto_summary_count: Visible articles summarized without an explicit request
        stagger_max_seconds: Upper bound of the random delay between summary calls
    """

    language: str = "Japanese"
    target_chars: int = 100
    min_extract_chars: int = 200
    max_chars: int = 10000
    auto_summary_count: int = 5
    stagger_max_seconds: float = 2.0


@dataclass
class RankingConfig:
    """Configuration for importance ranking.

    Attributes:
        max_candidates: Articles sent to the model as ranking candidates
        top_n: Size of the ranked result
        persona: Role given to the model in the ranking prompt
    """

    max_candidates: int = 20
    top_n: int = 5
    persona: str = "an experienced economist and news editor"


@dataclass
class DedupConfig:
    """Configuration for article deduplication and keyword matching.

    Attributes:
        enabled: Whether to drop near-duplicate headlines
        title_similarity_threshold: Fuzzy match threshold (0-100) for title similarity
        keyword_threshold: Fuzzy partial-match threshold (0-100) for keyword relevance
    """

    enabled: bool = True
    title_similarity_threshold: int = 92
    keyword_threshold: int = 85


@dataclass
class CacheConfig:
    """Configuration for the summary cache.

    Attributes:
        path: JSON file backing the cache, or None for memory only
        ttl_days: Optional time-to-live for cached summaries in days
    """

    path: str | None = ".cache/summaries.json"
    ttl_days: int | None = 7


@dataclass
class LoggingConfig:
    """Configuration for logging behavior.

    Attributes:
        level: Logging level ("DEBUG", "INFO", "WARNING", "ERROR")
        console: Whether to log to console
        file: Optional path of a log file
        format: Log file format ("jsonl" or "plain")
        llm_log_file: Optional path of a separate LLM interaction log
        llm_log_detail: LLM log detail level ("response_only", "prompt_response")
        llm_log_redaction: Redaction mode for LLM logs ("none", "redact_content", "redact_urls")
    """

    level: str = "INFO"
    console: bool = True
    file: str | None = None
    format: str = "jsonl"
    llm_log_file: str | None = None
    llm_log_detail: str = "response_only"
    llm_log_redaction: str = "redact_urls"


@dataclass
class DigestConfig:
    """Configuration for the daily digest.

    Attributes:
        title: Digest heading
        period: Ranking window used for top stories
        headline_count: Latest headlines listed below the top stories
        output_dir: Directory where rendered digests are written
        format: "html" or "markdown"
    """

    title: str = "Daily News Digest"
    period: str = "today"
    headline_count: int = 10
    output_dir: str = "out"
    format: str = "html"


@dataclass
class AppConfig:
    """Root configuration container aggregating all config sections."""

    provider: ProviderConfig = field(default_factory=ProviderConfig)
    feed: FeedConfig = field(default_factory=FeedConfig)
    fetch: FetchConfig = field(default_factory=FetchConfig)
    extract: ExtractConfig = field(default_factory=ExtractConfig)
    summary: SummaryConfig = field(default_factory=SummaryConfig)
    ranking: RankingConfig = field(default_factory=RankingConfig)
    dedup: DedupConfig = field(default_factory=DedupConfig)
    cache: CacheConfig = field(default_factory=CacheConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    digest: DigestConfig = field(default_factory=DigestConfig)


_SECTIONS: dict[str, type] = {
    "provider": ProviderConfig,
    "feed": FeedConfig,
    "fetch": FetchConfig,
    "extract": ExtractConfig,
    "summary": SummaryConfig,
    "ranking": RankingConfig,
    "dedup": DedupConfig,
    "cache": CacheConfig,
    "logging": LoggingConfig,
    "digest": DigestConfig,
}


def load_config(path: str | None) -> AppConfig:
    """Load configuration from a YAML file with defaults."""
    if not path:
        return AppConfig()

    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    return _merge_config(AppConfig(), raw)


def _merge_config(base: AppConfig, raw: dict[str, Any]) -> AppConfig:
    """Merge raw YAML config into base AppConfig."""
    data = asdict(base)
    for key, value in raw.items():
        if key not in data:
            continue
        if isinstance(value, dict) and isinstance(data[key], dict):
            data[key].update(value)
        else:
            data[key] = value
    return _fromdict(data)


def _fromdict(data: dict[str, Any]) -> AppConfig:
    """Reconstruct AppConfig from nested dictionary."""
    return AppConfig(**{name: cls(**data[name]) for name, cls in _SECTIONS.items()})


def get_api_key(cfg: ProviderConfig) -> str | None:
    """Get API key from inline config or environment variable."""
    if cfg.api_key:
        return cfg.api_key
    if cfg.api_key_env:
        return os.getenv(cfg.api_key_env)
    defaults = {
        "gemini": "GOOGLE_API_KEY",
        "openai": "OPENAI_API_KEY",
        "openai_compatible": "OPENAI_API_KEY",
        "openai-compatible": "OPENAI_API_KEY",
    }
    env_name = defaults.get(cfg.name.lower(), "OPENAI_API_KEY")
    return os.getenv(env_name)
