from __future__ import annotations
"""Image-to-video API: dispatcher plus FAL, Replicate and Google Veo sub-routes."""

import logging
from typing import Any

from fastapi import APIRouter, HTTPException

from contentforge.api.common import (
    GENERATION_ERRORS,
    provider_failure,
    require_text,
    video_response,
)
from contentforge.api.dispatch import describe, dispatch
from contentforge.schemas.generation import (
    FalImageToVideoRequest,
    GoogleImageToVideoRequest,
    ReplicateImageToVideoRequest,
)
from contentforge.services.artifact_store import (
    fetch,
    persist_bytes,
    persist_or_fallback,
    video_folder,
)
from contentforge.services.provider_registry import IMAGE_TO_VIDEO
from contentforge.services.providers import fal, google_genai, replicate

logger = logging.getLogger(__name__)

router = APIRouter()

FEATURE = "image-to-video"
SUCCESS_MESSAGE = "Image-to-video generation completed successfully"


@router.get("")
async def list_providers() -> dict[str, Any]:
    """List image-to-video providers and their models."""
    return describe(IMAGE_TO_VIDEO)


@router.post("")
async def dispatch_image_to_video(body: dict[str, Any]):
    """Route a request to the selected provider (default: replicate)."""
    return await dispatch(IMAGE_TO_VIDEO, body)


@router.post("/providers/fal")
async def fal_image_to_video(data: FalImageToVideoRequest):
    prompt = require_text(data.prompt, "Prompt is required and must be a string")
    image_url = require_text(data.image_url, "Image URL is required and must be a string")
    endpoint_id = fal.FAL_IMAGE_TO_VIDEO_MODELS.get(data.model)
    if endpoint_id is None:
        raise HTTPException(
            status_code=400,
            detail=f"Invalid model. Available models: {', '.join(fal.FAL_IMAGE_TO_VIDEO_MODELS)}",
        )

    logger.info("FAL image-to-video: model=%s", data.model)
    arguments = fal.build_image_to_video_input(
        data.model,
        prompt,
        image_url,
        duration=data.duration,
        fps=data.fps,
        seed=data.seed,
    )
    try:
        result = await fal.run_queue_job(endpoint_id=endpoint_id, model=data.model, arguments=arguments)
    except GENERATION_ERRORS as e:
        return provider_failure(e, feature=FEATURE, label="FAL AI", provider="fal")

    artifact = await persist_or_fallback(
        result.media_url,
        folder=video_folder("fal", data.model, image_to_video=True),
    )
    return video_response(
        provider="fal",
        model=data.model,
        artifact=artifact,
        request_id=result.request_id,
        message=SUCCESS_MESSAGE,
    )


@router.post("/providers/replicate")
async def replicate_image_to_video(data: ReplicateImageToVideoRequest):
    prompt = require_text(data.prompt, "Prompt is required and must be a string")
    image = require_text(data.image, "Image is required and must be a base64 string")
    if data.duration not in replicate.ALLOWED_DURATIONS:
        raise HTTPException(status_code=400, detail="Duration must be 5 or 10 seconds")
    if data.model not in replicate.REPLICATE_VIDEO_MODELS:
        raise HTTPException(
            status_code=400,
            detail=f"Invalid model. Available models: {', '.join(replicate.REPLICATE_VIDEO_MODELS)}",
        )

    logger.info("Replicate image-to-video: model=%s duration=%s", data.model, data.duration)
    try:
        result = await replicate.generate_video(
            model=data.model,
            prompt=prompt,
            duration=data.duration,
            image=image,
        )
    except GENERATION_ERRORS as e:
        return provider_failure(e, feature=FEATURE, label="Replicate", provider="replicate")

    artifact = await persist_or_fallback(
        result.media_url,
        folder=video_folder("replicate", data.model, image_to_video=True),
    )
    return video_response(
        provider="replicate",
        model=data.model,
        artifact=artifact,
        request_id=result.request_id,
        message=SUCCESS_MESSAGE,
    )


@router.post("/providers/google")
async def google_image_to_video(data: GoogleImageToVideoRequest):
    prompt = require_text(data.prompt, "Prompt is required and must be a string")
    image_url = require_text(data.image_url, "Image URL is required and must be a string")
    if data.model not in google_genai.VEO_MODELS:
        raise HTTPException(
            status_code=400,
            detail=f"Invalid model. Available models: {', '.join(google_genai.VEO_MODELS)}",
        )

    logger.info("Google Veo image-to-video: model=%s", data.model)
    try:
        image_bytes, mime_type = await fetch(image_url)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=f"Invalid image: {e}") from e
    except GENERATION_ERRORS as e:
        return provider_failure(e, feature=FEATURE, label="Google GenAI", provider="google")

    try:
        video_bytes = await google_genai.generate_video(
            prompt=prompt,
            model=data.model,
            image_bytes=image_bytes,
            image_mime_type=(mime_type or "image/png").split(";")[0],
        )
        artifact = await persist_bytes(
            video_bytes,
            folder=video_folder("google", data.model, image_to_video=True),
            extension="mp4",
            content_type="video/mp4",
        )
    except GENERATION_ERRORS as e:
        return provider_failure(e, feature=FEATURE, label="Google GenAI", provider="google")

    return video_response(
        provider="google",
        model=data.model,
        artifact=artifact,
        message=SUCCESS_MESSAGE,
    )
