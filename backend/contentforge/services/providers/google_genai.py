"""Google GenAI provider: Veo video and Imagen image generation.

Uses the google-genai SDK async client. Veo runs as a long-running
operation polled through ``operations.get``; Imagen returns image bytes
in a single call.
"""

from __future__ import annotations

import logging
from typing import Any

from google import genai
from google.genai import errors as genai_errors
from google.genai import types
from pydantic import ValidationError

from contentforge.config import get_settings
from contentforge.errors import ConfigurationError, ProviderError
from contentforge.services.job_poller import GenerationJob, poll_until_terminal

logger = logging.getLogger(__name__)
settings = get_settings()

PROVIDER = "google"

VEO_MODELS: tuple[str, ...] = ("veo-3.0-generate-preview",)
IMAGEN_MODELS: tuple[str, ...] = ("imagen-3.0-generate-002",)


def get_client(api_key: str | None = None) -> genai.Client:
    api_key = api_key if api_key is not None else settings.GEMINI_API_KEY
    if not api_key:
        raise ConfigurationError("Google GenAI API key not configured", provider=PROVIDER)
    return genai.Client(api_key=api_key)


async def generate_video(
    *,
    prompt: str,
    model: str,
    image_bytes: bytes | None = None,
    image_mime_type: str = "image/png",
    client: genai.Client | None = None,
    poll_interval: float | None = None,
    max_attempts: int | None = None,
) -> bytes:
    """Generate a video with Veo and return the downloaded MP4 bytes."""
    client = client or get_client()

    kwargs: dict[str, Any] = {"model": model, "prompt": prompt}
    try:
        if image_bytes:
            kwargs["image"] = types.Image(image_bytes=image_bytes, mime_type=image_mime_type)
        operation = await client.aio.models.generate_videos(**kwargs)
    except genai_errors.APIError as e:
        raise _api_failure(e) from e
    except ValidationError as e:
        raise ProviderError("Invalid Veo request parameters", provider=PROVIDER, details=str(e)) from e
    job = GenerationJob(
        provider=PROVIDER,
        model=model,
        params={"prompt": prompt},
        request_id=getattr(operation, "name", None),
    )
    logger.info("Veo operation started: %s (model=%s)", job.request_id, model)

    state = {"operation": operation}

    async def check_status() -> str:
        try:
            op = await client.aio.operations.get(state["operation"])
        except genai_errors.APIError as e:
            raise _api_failure(e) from e
        state["operation"] = op
        if op.done:
            return "failed" if op.error else "done"
        return "running"

    async def fetch_result() -> Any:
        return state["operation"]

    # The initial response may already be done.
    if not operation.done:
        operation = await poll_until_terminal(
            job,
            check_status,
            fetch_result,
            interval=poll_interval if poll_interval is not None else settings.VEO_POLL_INTERVAL_SECONDS,
            max_attempts=max_attempts or settings.VEO_POLL_MAX_ATTEMPTS,
            failure_details=lambda: _operation_error(state["operation"]),
        )
    elif operation.error:
        raise ProviderError(
            "Veo video generation failed",
            provider=PROVIDER,
            details=_operation_error(operation),
        )

    videos = getattr(operation.response, "generated_videos", None) or []
    if not videos or videos[0].video is None:
        raise ProviderError("No generated video returned", provider=PROVIDER)

    video = videos[0].video
    data = getattr(video, "video_bytes", None)
    if not data:
        try:
            data = await client.aio.files.download(file=video)
        except genai_errors.APIError as e:
            raise _api_failure(e) from e
    if not data:
        raise ProviderError("Failed to download generated video", provider=PROVIDER)

    logger.info("Veo operation %s produced %d bytes", job.request_id, len(data))
    return data


async def generate_image(
    *,
    prompt: str,
    model: str,
    aspect_ratio: str | None = None,
    client: genai.Client | None = None,
) -> bytes:
    """Generate one image with Imagen and return the PNG bytes."""
    client = client or get_client()

    config: dict[str, Any] = {"number_of_images": 1}
    if aspect_ratio:
        config["aspect_ratio"] = aspect_ratio

    try:
        response = await client.aio.models.generate_images(
            model=model,
            prompt=prompt,
            config=types.GenerateImagesConfig(**config),
        )
    except genai_errors.APIError as e:
        raise _api_failure(e) from e
    except ValidationError as e:
        raise ProviderError("Invalid Imagen request parameters", provider=PROVIDER, details=str(e)) from e

    images = getattr(response, "generated_images", None) or []
    image = images[0].image if images else None
    if image is None or not image.image_bytes:
        raise ProviderError("No image returned from Google GenAI", provider=PROVIDER)
    return image.image_bytes


def _operation_error(operation: Any) -> Any:
    error = getattr(operation, "error", None)
    if isinstance(error, dict):
        return error.get("message") or error
    return error


def _api_failure(error: genai_errors.APIError) -> ProviderError:
    return ProviderError(
        f"Google GenAI request failed: {getattr(error, 'message', None) or error}",
        provider=PROVIDER,
        status_code=getattr(error, "code", None) or 500,
    )
