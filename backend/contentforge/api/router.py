from __future__ import annotations
"""Master API router: mounts all sub-routers."""

from fastapi import APIRouter

from contentforge.api.ai_voices import router as ai_voices_router
from contentforge.api.audio import router as audio_router
from contentforge.api.image_to_video import router as image_to_video_router
from contentforge.api.media_search import router as media_search_router
from contentforge.api.models import router as models_router
from contentforge.api.prompts import router as prompts_router
from contentforge.api.research import router as research_router
from contentforge.api.text_to_image import router as text_to_image_router
from contentforge.api.text_to_video import router as text_to_video_router
from contentforge.api.utils import router as utils_router
from contentforge.api.videos import router as videos_router

api_router = APIRouter(prefix="/api", redirect_slashes=False)

api_router.include_router(text_to_video_router, prefix="/text-to-video", tags=["Text to Video"])
api_router.include_router(image_to_video_router, prefix="/image-to-video", tags=["Image to Video"])
api_router.include_router(text_to_image_router, prefix="/text-to-image", tags=["Text to Image"])
api_router.include_router(audio_router, tags=["Audio"])
api_router.include_router(prompts_router, prefix="/prompts", tags=["Prompts"])
api_router.include_router(ai_voices_router, prefix="/ai-voices", tags=["AI Voices"])
api_router.include_router(videos_router, tags=["Videos"])
api_router.include_router(utils_router, tags=["Utilities"])
api_router.include_router(research_router, tags=["Research"])
api_router.include_router(media_search_router, tags=["Media Search"])
api_router.include_router(models_router, tags=["Models"])
