"""Stock photo / footage search: Pexels and Pixabay.

Results are normalised to ``{id, url, thumbnail, source, photographer, type}``.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from contentforge.config import get_settings
from contentforge.errors import ConfigurationError, ProviderError

logger = logging.getLogger(__name__)
settings = get_settings()

PEXELS_PHOTO_URL = "https://api.pexels.com/v1/search"
PEXELS_VIDEO_URL = "https://api.pexels.com/videos/search"
PIXABAY_PHOTO_URL = "https://pixabay.com/api/"
PIXABAY_VIDEO_URL = "https://pixabay.com/api/videos/"

PER_PAGE = 9
MAX_VIDEO_BYTES = 25 * 1024 * 1024
PIXABAY_QUALITIES = ("large", "medium", "small", "tiny")


async def _get_json(
    source: str,
    url: str,
    params: dict[str, Any],
    headers: dict[str, str] | None,
    http_client: httpx.AsyncClient | None,
) -> dict[str, Any]:
    client = http_client or httpx.AsyncClient(timeout=30.0)
    own_client = http_client is None
    try:
        resp = await client.get(url, params=params, headers=headers)
        if resp.is_error:
            logger.error("%s API error: %s %s", source, resp.status_code, resp.text[:300])
            raise ProviderError(
                f"{source} API request failed with status {resp.status_code}",
                provider=source.lower(),
            )
        return resp.json()
    finally:
        if own_client:
            await client.aclose()


# ---------------------------------------------------------------------------
# Pexels
# ---------------------------------------------------------------------------

def format_pexels_images(data: dict[str, Any]) -> list[dict[str, Any]]:
    return [
        {
            "id": photo["id"],
            "url": photo["src"]["original"],
            "thumbnail": photo["src"]["medium"],
            "source": "pexels",
            "photographer": photo.get("photographer"),
            "type": "image",
        }
        for photo in data.get("photos") or []
    ]


def format_pexels_videos(data: dict[str, Any]) -> list[dict[str, Any]]:
    """Pick the widest file under the size cap for each video; skip videos with none."""
    results = []
    for video in data.get("videos") or []:
        suitable = [
            f for f in video.get("video_files") or []
            if f.get("size") and f["size"] < MAX_VIDEO_BYTES
        ]
        if not suitable:
            continue
        best = max(suitable, key=lambda f: f.get("width") or 0)
        results.append({
            "id": video["id"],
            "url": best["link"],
            "thumbnail": video.get("image"),
            "source": "pexels",
            "photographer": (video.get("user") or {}).get("name"),
            "type": "video",
        })
    return results


async def search_pexels(
    query: str,
    media_type: str = "image",
    http_client: httpx.AsyncClient | None = None,
) -> list[dict[str, Any]]:
    if not settings.PEXELS_API_KEY:
        raise ConfigurationError("PEXELS_API_KEY environment variable is not set", provider="pexels")

    url = PEXELS_VIDEO_URL if media_type == "video" else PEXELS_PHOTO_URL
    data = await _get_json(
        "Pexels",
        url,
        {"query": query, "per_page": PER_PAGE, "orientation": "landscape"},
        {"Authorization": settings.PEXELS_API_KEY},
        http_client,
    )
    if media_type == "video":
        return format_pexels_videos(data)
    return format_pexels_images(data)


# ---------------------------------------------------------------------------
# Pixabay
# ---------------------------------------------------------------------------

def format_pixabay_images(data: dict[str, Any]) -> list[dict[str, Any]]:
    return [
        {
            "id": hit["id"],
            "url": hit.get("largeImageURL"),
            "thumbnail": hit.get("previewURL"),
            "source": "pixabay",
            "photographer": hit.get("user"),
            "type": "image",
        }
        for hit in data.get("hits") or []
    ]


def format_pixabay_videos(data: dict[str, Any]) -> list[dict[str, Any]]:
    """Take the largest rendition under the size cap, in large → tiny order."""
    results = []
    for hit in data.get("hits") or []:
        renditions = hit.get("videos") or {}
        best = None
        for quality in PIXABAY_QUALITIES:
            candidate = renditions.get(quality)
            if candidate and (candidate.get("size") or 0) < MAX_VIDEO_BYTES:
                best = candidate
                break
        if best is None:
            continue
        results.append({
            "id": hit["id"],
            "url": best.get("url"),
            "thumbnail": f"https://i.vimeocdn.com/video/{hit.get('picture_id')}_295x166.jpg",
            "source": "pixabay",
            "photographer": hit.get("user"),
            "type": "video",
        })
    return results


async def search_pixabay(
    query: str,
    media_type: str = "image",
    http_client: httpx.AsyncClient | None = None,
) -> list[dict[str, Any]]:
    if not settings.PIXABAY_API_KEY:
        raise ConfigurationError("PIXABAY_API_KEY environment variable is not set", provider="pixabay")

    params: dict[str, Any] = {
        "key": settings.PIXABAY_API_KEY,
        "q": query,
        "per_page": PER_PAGE,
        "orientation": "horizontal",
    }
    if media_type == "video":
        data = await _get_json("Pixabay", PIXABAY_VIDEO_URL, params, None, http_client)
        return format_pixabay_videos(data)

    params["image_type"] = "photo"
    data = await _get_json("Pixabay", PIXABAY_PHOTO_URL, params, None, http_client)
    return format_pixabay_images(data)
