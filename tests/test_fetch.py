"""Tests for page fetching, body extraction and feed retrieval."""

import httpx

from news_dashboard.config import ExtractConfig, FeedConfig, FetchConfig
from news_dashboard.fetch.extractor import ContentExtractor, extract_text
from news_dashboard.fetch.feed import build_feed_url, fetch_feed
from news_dashboard.fetch.fetcher import fetch_html

UA = "test-agent"

RSS = """<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0">
  <channel>
    <title>"AI" - Google News</title>
    <item>
      <title>Chipmaker unveils new accelerator - Nikkei</title>
      <link>https://news.example.com/chip</link>
      <pubDate>Mon, 19 Oct 2026 08:00:00 GMT</pubDate>
      <description>&lt;a href="https://nikkei.example/chip"&gt;Chipmaker unveils new accelerator&lt;/a&gt;&amp;nbsp;&amp;nbsp;&lt;font color="#6f6f6f"&gt;Nikkei&lt;/font&gt;</description>
      <source url="https://nikkei.example">Nikkei</source>
    </item>
    <item>
      <title>Entry without a link</title>
      <pubDate>Mon, 19 Oct 2026 07:00:00 GMT</pubDate>
      <description>missing link</description>
    </item>
    <item>
      <title>Regulators publish AI guidance - Reuters</title>
      <link>https://news.example.com/guidance</link>
      <pubDate>Sun, 18 Oct 2026 22:00:00 GMT</pubDate>
      <description>Guidance text</description>
    </item>
  </channel>
</rss>
"""


def _redirect_chain(hops: int, final_body: str = "<p>done</p>"):
    def handler(request: httpx.Request) -> httpx.Response:
        step = int(request.url.params.get("step", "0"))
        if step < hops:
            return httpx.Response(302, headers={"location": f"/article?step={step + 1}"})
        return httpx.Response(200, text=final_body)

    return httpx.MockTransport(handler)


def test_fetch_html_follows_relative_redirects():
    result = fetch_html(
        "https://news.example.com/article?step=0",
        timeout=1.0,
        user_agent=UA,
        transport=_redirect_chain(3),
    )

    assert result.error is None
    assert result.text == "<p>done</p>"
    assert result.redirects == 3
    assert result.url == "https://news.example.com/article?step=3"


def test_fetch_html_allows_exactly_five_hops():
    result = fetch_html(
        "https://news.example.com/article?step=0",
        timeout=1.0,
        user_agent=UA,
        max_redirects=5,
        transport=_redirect_chain(5),
    )
    assert result.text == "<p>done</p>"


def test_fetch_html_gives_up_after_too_many_redirects():
    result = fetch_html(
        "https://news.example.com/article?step=0",
        timeout=1.0,
        user_agent=UA,
        max_redirects=5,
        transport=_redirect_chain(6),
    )

    assert result.text is None
    assert "Too many redirects" in result.error


def test_fetch_html_sends_user_agent():
    seen = {}

    def handler(request):
        seen["ua"] = request.headers.get("user-agent")
        return httpx.Response(200, text="ok")

    fetch_html("https://example.com", timeout=1.0, user_agent=UA, transport=httpx.MockTransport(handler))
    assert seen["ua"] == UA


def test_fetch_html_reports_http_errors():
    transport = httpx.MockTransport(lambda request: httpx.Response(404, text="missing"))
    result = fetch_html("https://example.com/gone", timeout=1.0, user_agent=UA, transport=transport)

    assert result.status_code == 404
    assert result.text is None
    assert result.error == "HTTP 404"


def test_fetch_html_swallows_timeouts():
    def handler(request):
        raise httpx.ReadTimeout("timed out", request=request)

    result = fetch_html(
        "https://example.com/slow",
        timeout=0.1,
        user_agent=UA,
        retries=0,
        transport=httpx.MockTransport(handler),
    )

    assert result.status_code is None
    assert result.text is None
    assert "ReadTimeout" in result.error


def test_extract_text_prefers_paragraphs():
    html = """
    <html><head><script>var x = 1;</script></head>
    <body><nav>Menu</nav>
      <p>First   <a href="#">paragraph</a>.</p>
      <p></p>
      <p>Second
         paragraph.</p>
    </body></html>
    """
    assert extract_text(html, "paragraphs", ["document"]) == "First paragraph .\nSecond paragraph."


def test_extract_text_falls_back_to_document():
    html = "<html><head><style>p{}</style><script>alert(1)</script></head><body><div>Only   div text</div></body></html>"
    assert extract_text(html, "paragraphs", ["document"]) == "Only div text"


def test_extract_text_empty_input():
    assert extract_text("", "paragraphs", ["document"]) == ""


def test_content_extractor_returns_empty_on_failure():
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    extractor = ContentExtractor(
        FetchConfig(retries=0),
        ExtractConfig(),
        transport=httpx.MockTransport(handler),
    )
    assert extractor.extract("https://example.com/down") == ""


def test_content_extractor_returns_empty_after_redirect_loop():
    def handler(request):
        return httpx.Response(301, headers={"location": "https://example.com/loop"})

    extractor = ContentExtractor(FetchConfig(retries=0), ExtractConfig(), transport=httpx.MockTransport(handler))
    assert extractor.extract("https://example.com/loop") == ""


def test_content_extractor_extracts_body():
    transport = httpx.MockTransport(
        lambda request: httpx.Response(200, text="<body><p>Body text.</p></body>")
    )
    extractor = ContentExtractor(FetchConfig(retries=0), ExtractConfig(), transport=transport)
    assert extractor.extract("https://example.com/a") == "Body text."


def test_build_feed_url_uses_region_locale():
    url = build_feed_url("人工知能", "jp", FeedConfig())
    assert url.startswith("https://news.google.com/rss/search?q=")
    assert "hl=ja" in url
    assert "gl=JP" in url
    assert "ceid=JP%3Aja" in url


def test_build_feed_url_unknown_region_uses_default():
    assert build_feed_url("AI", "zz", FeedConfig()) == build_feed_url("AI", "jp", FeedConfig())


def test_fetch_feed_normalizes_and_skips_bad_entries():
    transport = httpx.MockTransport(
        lambda request: httpx.Response(
            200,
            content=RSS.encode("utf-8"),
            headers={"content-type": "application/rss+xml"},
        )
    )
    articles = fetch_feed("https://news.google.com/rss/search?q=AI", FetchConfig(), transport=transport)

    assert [a.link for a in articles] == [
        "https://news.example.com/chip",
        "https://news.example.com/guidance",
    ]
    chip = articles[0]
    assert chip.clean_title == "Chipmaker unveils new accelerator"
    assert chip.source == "Nikkei"
    assert chip.description == "Chipmaker unveils new accelerator Nikkei"
    assert chip.published_at.isoformat() == "2026-10-19T08:00:00+00:00"


def test_fetch_feed_soft_fails_on_network_error():
    def handler(request):
        raise httpx.ConnectError("unreachable", request=request)

    assert fetch_feed("https://news.google.com/rss", FetchConfig(), transport=httpx.MockTransport(handler)) == []


def test_fetch_feed_soft_fails_on_server_error():
    transport = httpx.MockTransport(lambda request: httpx.Response(503, text="busy"))
    assert fetch_feed("https://news.google.com/rss", FetchConfig(), transport=transport) == []


def test_fetch_feed_soft_fails_on_garbage():
    transport = httpx.MockTransport(lambda request: httpx.Response(200, text="<<<not xml"))
    assert fetch_feed("https://news.google.com/rss", FetchConfig(), transport=transport) == []


def test_fetch_html_reports_malformed_location():
    def handler(request):
        return httpx.Response(302, headers={"location": "http://[broken/x"})

    result = fetch_html(
        "https://news.example.com/a",
        timeout=1.0,
        user_agent=UA,
        retries=2,
        transport=httpx.MockTransport(handler),
    )

    assert result.text is None
    assert result.error.startswith("Invalid URL")


def test_fetch_html_reports_unprintable_url():
    transport = httpx.MockTransport(lambda request: httpx.Response(200, text="<p>never</p>"))
    result = fetch_html("https://exa\x00mple.com/a", timeout=1.0, user_agent=UA, transport=transport)

    assert result.text is None
    assert result.error.startswith("Invalid URL")


def test_content_extractor_survives_malformed_urls():
    transport = httpx.MockTransport(
        lambda request: httpx.Response(302, headers={"location": "http://[broken/x"})
    )
    extractor = ContentExtractor(FetchConfig(retries=0), ExtractConfig(), transport=transport)

    assert extractor.extract("https://news.example.com/a") == ""
    assert extractor.extract("https://exa\x00mple.com/a") == ""
