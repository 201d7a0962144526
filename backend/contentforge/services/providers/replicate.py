"""Replicate video generation provider (predictions REST API).

Creates a prediction on an official model and polls its ``urls.get`` link
until the status is succeeded / failed / canceled.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from contentforge.config import get_settings
from contentforge.errors import ConfigurationError, ProviderError, response_error_detail
from contentforge.services.job_poller import GenerationJob, JobResult, run_generation_job

logger = logging.getLogger(__name__)
settings = get_settings()

PROVIDER = "replicate"

REPLICATE_VIDEO_MODELS: tuple[str, ...] = ("bytedance/seedance-1-lite",)
ALLOWED_DURATIONS = (5, 10)


def to_data_url(image: str) -> str:
    """Wrap raw base64 in a data URL; data URLs pass through unchanged."""
    if image.startswith("data:"):
        return image
    return f"data:application/octet-stream;base64,{image}"


async def generate_video(
    *,
    model: str,
    prompt: str,
    duration: int = 5,
    image: str | None = None,
    api_token: str | None = None,
    api_url: str | None = None,
    http_client: httpx.AsyncClient | None = None,
    poll_interval: float | None = None,
    max_attempts: int | None = None,
) -> JobResult:
    """Run one Replicate prediction and return the output video URL."""
    api_token = api_token if api_token is not None else settings.REPLICATE_API_TOKEN
    if not api_token:
        raise ConfigurationError("Replicate API token not configured", provider=PROVIDER)

    base = (api_url or settings.REPLICATE_API_URL).rstrip("/")
    headers = {
        "Authorization": f"Bearer {api_token}",
        "Content-Type": "application/json",
    }

    model_input: dict[str, Any] = {"prompt": prompt.strip(), "duration": duration}
    if image:
        model_input["image"] = to_data_url(image)

    client = http_client or httpx.AsyncClient(timeout=60.0)
    own_client = http_client is None
    state: dict[str, Any] = {}

    async def submit() -> str:
        resp = await client.post(
            f"{base}/models/{model}/predictions",
            json={"input": model_input},
            headers=headers,
        )
        resp.raise_for_status()
        prediction = resp.json()
        state["prediction"] = prediction
        state["get_url"] = (prediction.get("urls") or {}).get("get") or (
            f"{base}/predictions/{prediction.get('id')}"
        )
        return prediction.get("id", "")

    async def check_status(prediction_id: str) -> str:
        resp = await client.get(state["get_url"], headers=headers)
        resp.raise_for_status()
        prediction = resp.json()
        state["prediction"] = prediction
        return prediction.get("status", "")

    async def fetch_result(prediction_id: str) -> Any:
        return state["prediction"].get("output")

    try:
        return await run_generation_job(
            GenerationJob(provider=PROVIDER, model=model, params=model_input),
            submit=submit,
            check_status=check_status,
            fetch_result=fetch_result,
            interval=poll_interval if poll_interval is not None else settings.POLL_INTERVAL_SECONDS,
            max_attempts=max_attempts or settings.POLL_MAX_ATTEMPTS,
            failure_details=lambda: state["prediction"].get("error"),
        )
    except httpx.HTTPStatusError as e:
        raise ProviderError(
            f"Replicate request failed with HTTP {e.response.status_code}",
            provider=PROVIDER,
            details=response_error_detail(e.response),
        ) from e
    finally:
        if own_client:
            await client.aclose()
