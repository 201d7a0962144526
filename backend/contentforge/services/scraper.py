"""Research link scraping via Firecrawl, with link stripping."""

from __future__ import annotations

import logging
import re
from typing import Any
from urllib.parse import urlparse

import httpx

from contentforge.config import get_settings
from contentforge.errors import ConfigurationError, ProviderError, response_error_detail

logger = logging.getLogger(__name__)
settings = get_settings()

PROVIDER = "firecrawl"
LINK_REMOVED = "LINK REMOVED"

SOCIAL_MEDIA_DOMAINS = (
    "youtube.com", "youtu.be", "instagram.com", "facebook.com", "fb.com",
    "tiktok.com", "twitter.com", "x.com", "linkedin.com", "snapchat.com",
    "pinterest.com", "reddit.com", "discord.com", "telegram.org",
    "whatsapp.com", "wechat.com", "weibo.com", "vk.com", "twitch.tv", "clubhouse.com",
)

_INCLUDE_TAGS = ["p", "h1", "h2", "h3", "h4", "h5", "h6", "article", "section", "main"]
_EXCLUDE_TAGS = ["nav", "footer", "aside", "header", "script", "style", "form", "iframe"]

# Applied in order.
_LINK_PATTERNS: list[tuple[re.Pattern[str], str]] = [
    (re.compile(r"\[([^\]]*)\]\([^)]+\)"), rf"\1 {LINK_REMOVED}"),
    (re.compile(r"\[([^\]]*)\]\[[^\]]*\]"), rf"\1 {LINK_REMOVED}"),
    (re.compile(r"<a[^>]*href=\"[^\"]*\"[^>]*>([^<]*)</a>", re.IGNORECASE), rf"\1 {LINK_REMOVED}"),
    (re.compile(r"https?://\S+"), LINK_REMOVED),
    (re.compile(r"ftp://\S+"), LINK_REMOVED),
    (re.compile(r"www\.\S+"), LINK_REMOVED),
    (re.compile(r"mailto:\S+"), LINK_REMOVED),
    (re.compile(r"^\[[^\]]+\]:\s*\S+.*$", re.MULTILINE), ""),
    (re.compile(rf"(\s*{LINK_REMOVED}\s*){{2,}}"), f" {LINK_REMOVED} "),
    (re.compile(r"\n\s*\n\s*\n"), "\n\n"),
]


def remove_links(text: str) -> str:
    """Replace every link in ``text`` with a ``LINK REMOVED`` marker.

    Link text survives (``[docs](https://x)`` → ``docs LINK REMOVED``), bare
    URLs and mailto references are replaced outright, reference definitions
    are dropped and runs of markers collapse to one.
    """
    for pattern, replacement in _LINK_PATTERNS:
        text = pattern.sub(replacement, text)
    return text.strip()


def social_media_domain(url: str) -> str | None:
    """Return the hostname when ``url`` points at a social platform."""
    hostname = (urlparse(url).hostname or "").lower()
    for domain in SOCIAL_MEDIA_DOMAINS:
        if hostname == domain or hostname.endswith(f".{domain}"):
            return hostname
    return None


def is_valid_url(url: Any) -> bool:
    if not isinstance(url, str) or not url:
        return False
    parsed = urlparse(url)
    return bool(parsed.scheme and parsed.netloc)


async def scrape(url: str, http_client: httpx.AsyncClient | None = None) -> dict[str, str]:
    """Scrape the main content of ``url`` as markdown and strip its links.

    Returns ``{title, content}``.
    """
    if not settings.FIRECRAWL_API_KEY:
        raise ConfigurationError("Firecrawl API key not configured", provider=PROVIDER)

    body = {
        "url": url,
        "formats": ["markdown"],
        "onlyMainContent": True,
        "includeTags": _INCLUDE_TAGS,
        "excludeTags": _EXCLUDE_TAGS,
        "waitFor": 3000,
        "timeout": 30000,
    }
    headers = {
        "Authorization": f"Bearer {settings.FIRECRAWL_API_KEY}",
        "Content-Type": "application/json",
    }

    logger.info("Scraping %s with Firecrawl", url)
    client = http_client or httpx.AsyncClient(timeout=60.0)
    own_client = http_client is None
    try:
        resp = await client.post(f"{settings.FIRECRAWL_ENDPOINT}/scrape", json=body, headers=headers)
        if resp.is_error:
            raise ProviderError(
                f"Firecrawl scraping failed: HTTP {resp.status_code}",
                provider=PROVIDER,
                details=response_error_detail(resp),
            )
        result = resp.json()
    finally:
        if own_client:
            await client.aclose()

    if not result.get("success"):
        raise ProviderError(f"Firecrawl scraping failed: {result.get('error')}", provider=PROVIDER)

    data = result.get("data") or {}
    markdown = data.get("markdown") or ""
    if not markdown.strip():
        raise ProviderError("No content could be extracted from the page", provider=PROVIDER)

    content = remove_links(markdown)
    logger.info("Scraped %s: %d characters", url, len(content))
    return {
        "title": (data.get("metadata") or {}).get("title") or "Scraped Article",
        "content": content,
    }
