"""
HTML body extraction with multiple fallback strategies.

This module provides a chain of extraction methods:
1. paragraphs: Text of every <p> block, one per line (default)
2. document: Whole-page text with script/style removed (default fallback)
3. trafilatura: Purpose-built main-content extraction (optional)
4. readability: Mozilla's readability algorithm (optional)

ContentExtractor wraps fetching and extraction into a best-effort call
that returns an empty string on any failure.
"""

from __future__ import annotations

import logging
import re
from typing import Callable

from bs4 import BeautifulSoup
import httpx
import trafilatura
from readability import Document

from ..config import ExtractConfig, FetchConfig
from .fetcher import fetch_html

logger = logging.getLogger(__name__)

_WS_RE = re.compile(r"\s+")


def extract_text(html: str, primary: str, fallback: list[str]) -> str:
    """Extract plain text from HTML using a chain of extractors.

    Tries each extraction method in order until one produces non-empty
    output.

    Args:
        html: The HTML content to extract text from
        primary: Name of the primary extraction method to try first
        fallback: List of fallback method names to try if primary fails

    Returns:
        Extracted plain text, or an empty string if all methods fail

    Examples:
        >>> extract_text("<p>One</p><p>Two  words</p>", "paragraphs", ["document"])
        'One\\nTwo words'
    """
    if not html:
        return ""
    order = [primary] + [name for name in fallback if name != primary]
    for method in order:
        extractor = _get_extractor(method)
        if not extractor:
            logger.warning("Unknown extraction method: %s", method)
            continue
        text = extractor(html)
        if text:
            return text.strip()
    return ""


class ContentExtractor:
    """Fetches an article page and extracts its body text.

    Attributes:
        fetch_cfg: Timeout, retry, redirect and User-Agent settings
        extract_cfg: Extraction method chain
        transport: Optional httpx transport passed through to the fetcher
    """

    def __init__(
        self,
        fetch_cfg: FetchConfig,
        extract_cfg: ExtractConfig,
        transport: httpx.BaseTransport | None = None,
    ):
        self.fetch_cfg = fetch_cfg
        self.extract_cfg = extract_cfg
        self.transport = transport

    def extract(self, url: str) -> str:
        """Return best-effort body text for ``url``, or "" on failure."""
        try:
            result = fetch_html(
                url,
                timeout=self.fetch_cfg.timeout_seconds,
                user_agent=self.fetch_cfg.user_agent,
                max_redirects=self.fetch_cfg.max_redirects,
                retries=self.fetch_cfg.retries,
                trust_env=self.fetch_cfg.trust_env,
                transport=self.transport,
            )
            if result.error or not result.text:
                logger.info("Extraction skipped for %s: %s", url, result.error or "empty body")
                return ""
            return extract_text(result.text, self.extract_cfg.primary, self.extract_cfg.fallback)
        except Exception as exc:  # noqa: BLE001
            logger.warning("Extraction failed for %s: %s: %s", url, type(exc).__name__, exc)
            return ""


def _get_extractor(name: str) -> Callable[[str], str | None] | None:
    if name == "paragraphs":
        return _extract_paragraphs
    if name == "document":
        return _extract_document
    if name == "trafilatura":
        return _extract_trafilatura
    if name == "readability":
        return _extract_readability
    return None


def _collapse(text: str) -> str:
    return _WS_RE.sub(" ", text).strip()


def _extract_paragraphs(html: str) -> str | None:
    """Join the text of every <p> block with newlines.

    Inner markup (links, emphasis) is stripped and whitespace inside each
    paragraph is collapsed. Empty paragraphs are dropped.
    """
    soup = BeautifulSoup(html, "html.parser")
    blocks = [_collapse(p.get_text(" ")) for p in soup.find_all("p")]
    joined = "\n".join(block for block in blocks if block)
    return joined or None


def _extract_document(html: str) -> str | None:
    """Whole-document text with script/style/noscript removed."""
    soup = BeautifulSoup(html, "html.parser")
    for tag in soup(["script", "style", "noscript"]):
        tag.decompose()
    return _collapse(soup.get_text(" ")) or None


def _extract_trafilatura(html: str) -> str | None:
    return trafilatura.extract(html)


def _extract_readability(html: str) -> str | None:
    doc = Document(html)
    # readability returns simplified HTML; reduce it to text
    return _extract_document(doc.summary())
