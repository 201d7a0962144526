"""Generic submit → poll → resolve loop for queue-based generation providers.

Every queue-backed provider (FAL, Replicate, Veo operations) follows the same
shape:
  1. submit a job and receive an external request id
  2. query a status endpoint on a fixed delay until a terminal status
  3. fetch the result payload once and pull a media URL out of it

The provider modules supply the three calls; this module owns the loop, the
status taxonomy and the URL extraction.

Usage:
    job = GenerationJob(provider="fal", model="hailuo-02-pro", params=arguments)
    result = await run_generation_job(
        job,
        submit=submit,
        check_status=check_status,
        fetch_result=fetch_result,
        interval=5,
        max_attempts=180,
    )
    result.media_url
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable

from contentforge.errors import JobFailedError, JobTimeoutError, ProviderError

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Status taxonomy
# ---------------------------------------------------------------------------

STATE_SUCCESS = "success"
STATE_FAILURE = "failure"
STATE_PENDING = "pending"

SUCCESS_STATUSES = frozenset({"completed", "succeeded", "success", "done"})
FAILURE_STATUSES = frozenset({"failed", "error", "canceled", "cancelled"})


def classify_status(status: Any) -> str:
    """Reduce a provider status string to success / failure / pending."""
    normalized = str(status or "").strip().lower()
    if normalized in SUCCESS_STATUSES:
        return STATE_SUCCESS
    if normalized in FAILURE_STATUSES:
        return STATE_FAILURE
    return STATE_PENDING


# ---------------------------------------------------------------------------
# Types
# ---------------------------------------------------------------------------

@dataclass
class GenerationJob:
    """In-flight generation job. Lives only for the duration of one request."""
    provider: str
    model: str
    params: dict[str, Any] = field(default_factory=dict)
    request_id: str | None = None
    status: str = "created"
    attempts: int = 0


@dataclass
class JobResult:
    """Terminal outcome of a successful job."""
    request_id: str
    media_url: str
    raw: Any = None


# ---------------------------------------------------------------------------
# Poll loop
# ---------------------------------------------------------------------------

async def poll_until_terminal(
    job: GenerationJob,
    check_status: Callable[[], Awaitable[str]],
    fetch_result: Callable[[], Awaitable[Any]],
    *,
    interval: float,
    max_attempts: int,
    failure_details: Callable[[], Any] | None = None,
    sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
) -> Any:
    """Poll ``check_status`` until the job reaches a terminal status.

    Sleeps ``interval`` seconds before each status check and makes at most
    ``max_attempts`` checks. On success the result is fetched exactly once
    and returned.

    Raises:
        JobFailedError: the provider reported a failure terminal status.
        JobTimeoutError: the attempt budget ran out; carries the last status.
    """
    if max_attempts < 1:
        raise ValueError("max_attempts must be at least 1")

    for attempt in range(1, max_attempts + 1):
        await sleep(interval)

        status = await check_status()
        job.status = str(status)
        job.attempts = attempt
        state = classify_status(status)

        logger.info(
            "%s job %s poll %d/%d: status=%s",
            job.provider, job.request_id, attempt, max_attempts, job.status,
        )

        if state == STATE_SUCCESS:
            return await fetch_result()

        if state == STATE_FAILURE:
            details = failure_details() if failure_details else None
            raise JobFailedError(
                f"{job.provider} job {job.request_id} ended with status '{job.status}'",
                provider=job.provider,
                request_id=job.request_id,
                last_status=job.status,
                details=details,
            )

    raise JobTimeoutError(
        f"{job.provider} job {job.request_id} timed out after {max_attempts} attempts "
        f"(last status: '{job.status}')",
        provider=job.provider,
        request_id=job.request_id,
        last_status=job.status,
        attempts=job.attempts,
    )


async def run_generation_job(
    job: GenerationJob,
    *,
    submit: Callable[[], Awaitable[str]],
    check_status: Callable[[str], Awaitable[str]],
    fetch_result: Callable[[str], Awaitable[Any]],
    interval: float,
    max_attempts: int,
    failure_details: Callable[[], Any] | None = None,
    sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
) -> JobResult:
    """Submit a job, poll it to completion and resolve its media URL."""
    request_id = await submit()
    if not request_id:
        raise ProviderError(f"{job.provider} returned no request id", provider=job.provider)

    job.request_id = request_id
    job.status = "submitted"
    logger.info("%s job submitted: %s (model=%s)", job.provider, request_id, job.model)

    payload = await poll_until_terminal(
        job,
        lambda: check_status(request_id),
        lambda: fetch_result(request_id),
        interval=interval,
        max_attempts=max_attempts,
        failure_details=failure_details,
        sleep=sleep,
    )

    media_url = extract_media_url(payload, provider=job.provider)
    logger.info("%s job %s resolved to %s", job.provider, request_id, media_url)
    return JobResult(request_id=request_id, media_url=media_url, raw=payload)


# ---------------------------------------------------------------------------
# Result parsing
# ---------------------------------------------------------------------------

_NESTED_KEYS = ("video", "image", "images", "audio", "output", "data")
_MAX_DEPTH = 5


def extract_media_url(payload: Any, provider: str = "unknown") -> str:
    """Pull a media URL out of the result shapes providers return.

    Handles a direct string, ``{url}``, ``{video: {url}}``, ``{video: url}``,
    ``{images: [{url}]}``, ``{output: ...}`` and lists of any of these.
    """
    url = _find_url(payload, 0)
    if not url:
        raise ProviderError(f"No media URL returned from {provider}", provider=provider)
    return url


def _find_url(value: Any, depth: int) -> str | None:
    if depth > _MAX_DEPTH or value is None:
        return None

    if isinstance(value, str):
        return value.strip() or None

    if isinstance(value, (list, tuple)):
        return _find_url(value[0], depth + 1) if value else None

    if isinstance(value, dict):
        url = value.get("url")
        if isinstance(url, str) and url.strip():
            return url.strip()
        for key in _NESTED_KEYS:
            if key in value:
                found = _find_url(value[key], depth + 1)
                if found:
                    return found

    return None
