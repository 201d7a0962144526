"""FAL AI video and image generation provider.

Talks to the FAL queue REST API directly:
  POST {queue}/{endpoint_id}          → {request_id, status_url, response_url}
  GET  status_url?logs=1              → {status: IN_QUEUE | IN_PROGRESS | COMPLETED}
  GET  response_url                   → model output ({video: {url}}, {images: [{url}]} ...)

Supports:
- Text-to-video: hailuo-02-pro, kling-v2.1-master
- Image-to-video: bytedance-seedance-v1-pro, pixverse-v4.5, wan-v2.2-5b
- Text-to-image: flux-dev, recraft-v3, stable-diffusion-v35-large/medium,
  ideogram-v3, minimax-image-01
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from contentforge.config import get_settings
from contentforge.errors import ConfigurationError, JobFailedError, ProviderError, response_error_detail
from contentforge.services.job_poller import GenerationJob, JobResult, run_generation_job

logger = logging.getLogger(__name__)
settings = get_settings()

PROVIDER = "fal"

FAL_TEXT_TO_VIDEO_MODELS: dict[str, str] = {
    "hailuo-02-pro": "fal-ai/minimax/hailuo-02/pro/text-to-video",
    "kling-v2.1-master": "fal-ai/kling-video/v2.1/master/text-to-video",
}

FAL_IMAGE_TO_VIDEO_MODELS: dict[str, str] = {
    "bytedance-seedance-v1-pro": "fal-ai/bytedance/seedance/v1/pro/image-to-video",
    "pixverse-v4.5": "fal-ai/pixverse/v4.5/image-to-video",
    "wan-v2.2-5b": "fal-ai/wan/v2.2-5b/image-to-video",
}

FAL_TEXT_TO_IMAGE_MODELS: dict[str, str] = {
    "flux-dev": "fal-ai/flux/dev",
    "recraft-v3": "fal-ai/recraft-v3",
    "stable-diffusion-v35-large": "fal-ai/stable-diffusion-v35-large",
    "stable-diffusion-v35-medium": "fal-ai/stable-diffusion-v35-medium",
    "ideogram-v3": "fal-ai/ideogram/v3",
    "minimax-image-01": "fal-ai/minimax/image-01",
}

# Pixel size per aspect ratio; anything else falls back to square.
IMAGE_DIMENSIONS: dict[str, tuple[int, int]] = {
    "16:9": (1344, 768),
    "1:1": (1024, 1024),
    "9:16": (768, 1344),
}

# FAL reports COMPLETED for both success and failure; the response_url call
# is what surfaces the error.
_STATUS_MAP = {"COMPLETED": "completed"}


def build_text_to_video_input(
    model: str,
    prompt: str,
    *,
    duration: int = 5,
    aspect_ratio: str = "16:9",
    fps: int | None = None,
    seed: int | None = None,
) -> dict[str, Any]:
    """Shape the model input for a text-to-video request."""
    arguments: dict[str, Any] = {"prompt": prompt.strip()}

    if model.startswith("hailuo"):
        arguments["duration"] = str(duration)
    elif model.startswith("kling"):
        arguments["duration"] = str(duration)
        arguments["aspect_ratio"] = aspect_ratio

    if fps:
        arguments["fps"] = fps
    if seed is not None:
        arguments["seed"] = seed
    return arguments


def build_image_to_video_input(
    model: str,
    prompt: str,
    image_url: str,
    *,
    duration: int = 5,
    fps: int | None = 24,
    seed: int | None = None,
) -> dict[str, Any]:
    """Shape the model input for an image-to-video request."""
    arguments: dict[str, Any] = {"image_url": image_url, "prompt": prompt.strip()}

    if model == "wan-v2.2-5b":
        arguments["duration"] = duration
        if fps:
            arguments["fps"] = fps
    elif model == "bytedance-seedance-v1-pro":
        arguments["duration"] = str(duration)
    elif model == "pixverse-v4.5":
        arguments["duration"] = duration

    if seed is not None:
        arguments["seed"] = seed
    return arguments


def build_text_to_image_input(model: str, prompt: str, *, aspect_ratio: str = "16:9") -> dict[str, Any]:
    """Shape the model input for a single-image text-to-image request."""
    width, height = IMAGE_DIMENSIONS.get(aspect_ratio, IMAGE_DIMENSIONS["1:1"])
    arguments: dict[str, Any] = {
        "prompt": prompt.strip(),
        "image_size": {"width": width, "height": height},
        "num_inference_steps": 28,
        "guidance_scale": 3.5,
        "num_images": 1,
        "enable_safety_checker": False,
    }
    if model == "ideogram-v3":
        arguments["mode"] = "turbo"
    return arguments


async def run_queue_job(
    *,
    endpoint_id: str,
    model: str,
    arguments: dict[str, Any],
    api_key: str | None = None,
    queue_url: str | None = None,
    http_client: httpx.AsyncClient | None = None,
    poll_interval: float | None = None,
    max_attempts: int | None = None,
) -> JobResult:
    """Run one FAL queue job to completion and return its media URL."""
    api_key = api_key if api_key is not None else settings.FAL_KEY
    if not api_key:
        raise ConfigurationError("FAL AI API key not configured", provider=PROVIDER)

    base = (queue_url or settings.FAL_QUEUE_URL).rstrip("/")
    headers = {
        "Authorization": f"Key {api_key}",
        "Content-Type": "application/json",
    }

    client = http_client or httpx.AsyncClient(timeout=60.0)
    own_client = http_client is None
    urls: dict[str, str] = {}

    async def submit() -> str:
        resp = await client.post(f"{base}/{endpoint_id}", json=arguments, headers=headers)
        resp.raise_for_status()
        data = resp.json()
        request_id = data.get("request_id", "")
        urls["status"] = data.get("status_url") or f"{base}/{endpoint_id}/requests/{request_id}/status"
        urls["response"] = data.get("response_url") or f"{base}/{endpoint_id}/requests/{request_id}"
        return request_id

    async def check_status(request_id: str) -> str:
        resp = await client.get(urls["status"], params={"logs": 1}, headers=headers)
        resp.raise_for_status()
        data = resp.json()
        status = data.get("status", "")
        if status == "IN_PROGRESS":
            messages = [log.get("message", "") for log in data.get("logs") or []]
            if messages:
                logger.debug("FAL %s progress: %s", request_id, ", ".join(messages))
        return _STATUS_MAP.get(status, status)

    async def fetch_result(request_id: str) -> Any:
        resp = await client.get(urls["response"], headers=headers)
        if resp.is_error:
            raise JobFailedError(
                f"FAL job {request_id} failed",
                provider=PROVIDER,
                request_id=request_id,
                last_status="COMPLETED",
                details=response_error_detail(resp),
            )
        return resp.json()

    try:
        return await run_generation_job(
            GenerationJob(provider=PROVIDER, model=model, params=arguments),
            submit=submit,
            check_status=check_status,
            fetch_result=fetch_result,
            interval=poll_interval if poll_interval is not None else settings.POLL_INTERVAL_SECONDS,
            max_attempts=max_attempts or settings.POLL_MAX_ATTEMPTS,
        )
    except httpx.HTTPStatusError as e:
        raise ProviderError(
            f"FAL request failed with HTTP {e.response.status_code}",
            provider=PROVIDER,
            details=response_error_detail(e.response),
        ) from e
    finally:
        if own_client:
            await client.aclose()

