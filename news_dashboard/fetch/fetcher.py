"""
HTTP page fetching for article extraction.

Redirects are followed by hand in an iterative loop with an explicit hop
counter; a chain longer than the limit ends in an error result. Network
failures are retried and then reported in the result; nothing here raises
to the caller.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
import time
from urllib.parse import urljoin

import httpx

logger = logging.getLogger(__name__)


@dataclass
class FetchResult:
    """Result of an HTTP fetch operation.

    Either text will be populated (success) or error will be populated (failure),
    but never both. status_code may be None for network-level failures.

    Attributes:
        url: The URL that was finally fetched (after redirects)
        status_code: HTTP status code, or None if request failed before getting response
        text: The response body text, or None on error
        error: Error message if fetch failed, None on success
        redirects: Number of redirect hops followed
    """
    url: str
    status_code: int | None
    text: str | None
    error: str | None
    redirects: int = 0


def fetch_html(
    url: str,
    timeout: float,
    user_agent: str,
    max_redirects: int = 5,
    retries: int = 0,
    trust_env: bool = True,
    transport: httpx.BaseTransport | None = None,
) -> FetchResult:
    """Fetch a page, following at most ``max_redirects`` redirects.

    Args:
        url: The URL to fetch
        timeout: Timeout in seconds for each request attempt
        user_agent: User-Agent header string
        max_redirects: Redirect hops allowed before giving up
        retries: Retry attempts after a network-level failure
        trust_env: Whether to respect system proxy settings from environment
        transport: Optional httpx transport (used by tests)

    Returns:
        FetchResult with text on success or error message on failure
    """
    headers = {"User-Agent": user_agent}
    last_error: str | None = None

    for attempt in range(retries + 1):
        try:
            with httpx.Client(
                timeout=timeout,
                headers=headers,
                follow_redirects=False,
                trust_env=trust_env,
                transport=transport,
            ) as client:
                return _follow(client, url, max_redirects)
        except (httpx.InvalidURL, ValueError) as exc:
            # Malformed URLs or Location headers fail the same way on every attempt
            error = f"Invalid URL: {type(exc).__name__}: {exc}"
            logger.debug("Fetch failed for %s: %s", url, error)
            return FetchResult(url=url, status_code=None, text=None, error=error)
        except httpx.HTTPError as exc:
            last_error = f"{type(exc).__name__}: {exc}"
            logger.debug("Fetch attempt %d failed for %s: %s", attempt + 1, url, last_error)
            if attempt < retries:
                # Linear backoff: 0.5s, 1.0s, 1.5s...
                time.sleep(0.5 * (attempt + 1))

    return FetchResult(url=url, status_code=None, text=None, error=last_error)


def _follow(client: httpx.Client, url: str, max_redirects: int) -> FetchResult:
    current = url
    hops = 0
    while True:
        resp = client.get(current)
        # is_redirect implies a Location header is present
        if not resp.is_redirect:
            break
        if hops >= max_redirects:
            return FetchResult(
                url=current,
                status_code=resp.status_code,
                text=None,
                error=f"Too many redirects (>{max_redirects})",
                redirects=hops,
            )
        hops += 1
        current = urljoin(current, resp.headers["location"])

    if resp.status_code >= 400:
        return FetchResult(
            url=current,
            status_code=resp.status_code,
            text=None,
            error=f"HTTP {resp.status_code}",
            redirects=hops,
        )
    return FetchResult(
        url=current,
        status_code=resp.status_code,
        text=resp.text,
        error=None,
        redirects=hops,
    )
