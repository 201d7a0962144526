from __future__ import annotations
"""Research helpers: scrape an article into link-free markdown."""

import logging
from datetime import datetime, timezone

import httpx
from fastapi import APIRouter
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from contentforge.errors import ProviderError
from contentforge.services import scraper

logger = logging.getLogger(__name__)

router = APIRouter()


class ScrapeRequest(BaseModel):
    url: str | None = None


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


async def _scrape(url: str | None):
    if not url or not isinstance(url, str):
        return JSONResponse(status_code=400, content={"success": False, "error": "Valid URL is required"})
    if not scraper.is_valid_url(url):
        return JSONResponse(status_code=400, content={"success": False, "error": "Invalid URL format"})

    domain = scraper.social_media_domain(url)
    if domain:
        return JSONResponse(
            status_code=400,
            content={
                "success": False,
                "error": "Social media platforms cannot be scraped with Firecrawl",
                "isSocialMedia": True,
                "domain": domain,
            },
        )

    try:
        page = await scraper.scrape(url)
    except (ProviderError, httpx.HTTPError) as e:
        logger.error("Scraping %s failed: %s", url, e)
        return JSONResponse(
            status_code=500,
            content={"success": False, "error": str(e) or "Failed to scrape URL", "timestamp": _now()},
        )

    return {
        "success": True,
        "url": url,
        "title": page["title"],
        "content": page["content"],
        "contentLength": len(page["content"]),
        "timestamp": _now(),
        "method": "firecrawl",
    }


@router.post("/research/scrape-link")
async def scrape_link(data: ScrapeRequest):
    return await _scrape(data.url)


@router.get("/research/scrape-link")
async def scrape_link_get(url: str | None = None):
    """Scrape ``?url=``; without it, describe the endpoint."""
    if not url:
        return {
            "message": "Firecrawl link scraping API is running",
            "usage": 'POST with { url: "https://example.com" } or GET with ?url=https://example.com',
            "requirements": "FIRECRAWL_API_KEY environment variable must be set",
        }
    return await _scrape(url)
