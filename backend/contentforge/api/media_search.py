from __future__ import annotations
"""Stock media search API: Pexels and Pixabay."""

import logging

import httpx
from fastapi import APIRouter, HTTPException
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from contentforge.errors import ProviderError, error_body
from contentforge.services import stock_media

logger = logging.getLogger(__name__)

router = APIRouter()


class MediaSearchRequest(BaseModel):
    query: str | None = None
    type: str = "image"


async def _search(source: str, search, data: MediaSearchRequest):
    if not data.query:
        raise HTTPException(status_code=400, detail="Search query is required")
    media_type = "video" if data.type == "video" else "image"

    try:
        results = await search(data.query, media_type)
    except (ProviderError, httpx.HTTPError) as e:
        logger.error("%s search failed: %s", source, e)
        return JSONResponse(status_code=500, content=error_body(str(e)))

    if not results:
        return {"results": [], "message": f"No {media_type}s found on {source}."}
    return {"results": results}


@router.post("/search-pexels")
async def search_pexels(data: MediaSearchRequest):
    return await _search("Pexels", stock_media.search_pexels, data)


@router.post("/search-pixabay")
async def search_pixabay(data: MediaSearchRequest):
    return await _search("Pixabay", stock_media.search_pixabay, data)
