from __future__ import annotations
"""Text-to-image API: dispatcher plus the Google Imagen and FAL sub-routes."""

import base64
import logging
from typing import Any

from fastapi import APIRouter, HTTPException

from contentforge.api.common import GENERATION_ERRORS, provider_failure, require_text
from contentforge.api.dispatch import describe, dispatch
from contentforge.errors import StorageError
from contentforge.schemas.generation import FalTextToImageRequest, GoogleTextToImageRequest
from contentforge.services.artifact_store import StoredArtifact, image_folder, persist_bytes, persist_or_fallback
from contentforge.services.provider_registry import TEXT_TO_IMAGE
from contentforge.services.providers import fal, google_genai

logger = logging.getLogger(__name__)

router = APIRouter()

FEATURE = "text-to-image"
SUCCESS_MESSAGE = "Text-to-image generation completed successfully"


def _image_response(
    *,
    provider: str,
    model: str,
    image_url: str,
    persisted: bool,
    request_id: str | None = None,
) -> dict[str, Any]:
    return {
        "success": True,
        "imageUrl": image_url,
        "provider": provider,
        "model": model,
        "requestId": request_id,
        "persisted": persisted,
        "message": SUCCESS_MESSAGE,
    }


@router.get("")
async def list_providers() -> dict[str, Any]:
    """List text-to-image providers and their models."""
    return describe(TEXT_TO_IMAGE)


@router.post("")
async def dispatch_text_to_image(body: dict[str, Any]):
    """Route a request to the selected provider (default: google)."""
    return await dispatch(TEXT_TO_IMAGE, body)


@router.post("/providers/google")
async def google_text_to_image(data: GoogleTextToImageRequest):
    prompt = require_text(data.prompt, "Prompt is required and must be a string")
    if data.model not in google_genai.IMAGEN_MODELS:
        raise HTTPException(
            status_code=400,
            detail=f"Invalid model. Available models: {', '.join(google_genai.IMAGEN_MODELS)}",
        )

    logger.info("Google Imagen text-to-image: model=%s", data.model)
    try:
        image_bytes = await google_genai.generate_image(
            prompt=prompt,
            model=data.model,
            aspect_ratio=data.aspect_ratio,
        )
    except GENERATION_ERRORS as e:
        return provider_failure(e, feature=FEATURE, label="Google GenAI", provider="google")

    try:
        artifact = await persist_bytes(
            image_bytes,
            folder=image_folder("google", data.model),
            extension="png",
            content_type="image/png",
        )
        image_url, persisted = artifact.storage_url, True
    except StorageError as e:
        logger.warning("Imagen persistence failed, returning inline image: %s", e)
        image_url = "data:image/png;base64," + base64.b64encode(image_bytes).decode("ascii")
        persisted = False

    return _image_response(provider="google", model=data.model, image_url=image_url, persisted=persisted)


@router.post("/providers/fal")
async def fal_text_to_image(data: FalTextToImageRequest):
    prompt = require_text(data.prompt, "Prompt is required and must be a string")
    endpoint_id = fal.FAL_TEXT_TO_IMAGE_MODELS.get(data.model)
    if endpoint_id is None:
        raise HTTPException(
            status_code=400,
            detail=f"Invalid model. Available models: {', '.join(fal.FAL_TEXT_TO_IMAGE_MODELS)}",
        )

    logger.info("FAL text-to-image: model=%s aspect_ratio=%s", data.model, data.aspect_ratio)
    arguments = fal.build_text_to_image_input(data.model, prompt, aspect_ratio=data.aspect_ratio)
    try:
        result = await fal.run_queue_job(endpoint_id=endpoint_id, model=data.model, arguments=arguments)
    except GENERATION_ERRORS as e:
        return provider_failure(e, feature=FEATURE, label="FAL AI", provider="fal")

    artifact: StoredArtifact = await persist_or_fallback(
        result.media_url,
        folder=image_folder("fal", data.model),
        extension="png",
        content_type="image/png",
    )
    return _image_response(
        provider="fal",
        model=data.model,
        image_url=artifact.storage_url,
        persisted=artifact.persisted,
        request_id=result.request_id,
    )
