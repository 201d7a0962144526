"""
Tests for link stripping, social-media detection and Firecrawl scraping.
"""

import json
from unittest.mock import patch

import httpx
import pytest

from contentforge.errors import ConfigurationError, ProviderError
from contentforge.services import scraper
from contentforge.services.scraper import LINK_REMOVED, is_valid_url, remove_links, social_media_domain


def test_remove_markdown_links_keeps_text():
    assert remove_links("Read [the docs](https://example.com/docs) first.") == (
        f"Read the docs {LINK_REMOVED} first."
    )


def test_remove_bare_urls_and_mailto():
    text = remove_links("Visit https://example.com or www.example.org, mail mailto:a@b.c")
    assert "example" not in text
    assert "mailto" not in text
    assert LINK_REMOVED in text


def test_remove_reference_definitions():
    text = remove_links("See [guide][1].\n[1]: https://example.com/guide")
    assert text == f"See guide {LINK_REMOVED}."


def test_remove_html_anchor():
    assert remove_links('<a href="https://x.test">click</a>') == f"click {LINK_REMOVED}"


def test_adjacent_markers_collapse():
    text = remove_links("https://a.test https://b.test https://c.test")
    assert text == LINK_REMOVED


@pytest.mark.parametrize("url,expected", [
    ("https://www.youtube.com/watch?v=1", "www.youtube.com"),
    ("https://x.com/someone", "x.com"),
    ("https://m.facebook.com/page", "m.facebook.com"),
    ("https://example.com/article", None),
    ("https://netflix.com/title", None),
    ("https://notyoutube.com/", None),
])
def test_social_media_domain(url, expected):
    assert social_media_domain(url) == expected


def test_is_valid_url():
    assert is_valid_url("https://example.com/a")
    assert not is_valid_url("example.com")
    assert not is_valid_url("")
    assert not is_valid_url(None)


@pytest.mark.asyncio
async def test_scrape_returns_title_and_clean_content():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json={
            "success": True,
            "data": {
                "markdown": "# Story\nSee [source](https://news.test/a).",
                "metadata": {"title": "Big Story"},
            },
        })

    with patch.object(scraper.settings, "FIRECRAWL_API_KEY", "fc-key"):
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            page = await scraper.scrape("https://news.test/a", http_client=client)

    assert page == {"title": "Big Story", "content": f"# Story\nSee source {LINK_REMOVED}."}
    body = json.loads(seen[0].content)
    assert body["url"] == "https://news.test/a"
    assert body["formats"] == ["markdown"]
    assert body["onlyMainContent"] is True
    assert seen[0].headers["Authorization"] == "Bearer fc-key"


@pytest.mark.asyncio
async def test_scrape_default_title_and_failure():
    def ok(request):
        return httpx.Response(200, json={"success": True, "data": {"markdown": "Plain text."}})

    def failed(request):
        return httpx.Response(200, json={"success": False, "error": "blocked"})

    with patch.object(scraper.settings, "FIRECRAWL_API_KEY", "fc-key"):
        async with httpx.AsyncClient(transport=httpx.MockTransport(ok)) as client:
            page = await scraper.scrape("https://news.test/b", http_client=client)
        assert page["title"] == "Scraped Article"

        async with httpx.AsyncClient(transport=httpx.MockTransport(failed)) as client:
            with pytest.raises(ProviderError, match="blocked"):
                await scraper.scrape("https://news.test/c", http_client=client)


@pytest.mark.asyncio
async def test_scrape_requires_api_key():
    with pytest.raises(ConfigurationError, match="Firecrawl API key not configured"):
        await scraper.scrape("https://news.test/a")
