from __future__ import annotations
"""Helpers shared by the generation routes."""

import logging
from typing import Any

import httpx
from fastapi import HTTPException
from fastapi.responses import JSONResponse

from contentforge.errors import ConfigurationError, ProviderError, StorageError, error_body
from contentforge.services.artifact_store import StoredArtifact

logger = logging.getLogger(__name__)


def require_text(value: Any, message: str) -> str:
    """Return ``value`` stripped, or raise 400 when it is missing or blank."""
    if not isinstance(value, str) or not value.strip():
        raise HTTPException(status_code=400, detail=message)
    return value.strip()


def provider_failure(
    error: Exception,
    *,
    feature: str,
    label: str,
    provider: str,
) -> JSONResponse:
    """Translate a provider/storage/network failure into the 500 error body."""
    if isinstance(error, ConfigurationError):
        logger.error("%s %s: %s", label, feature, error)
        return JSONResponse(status_code=500, content=error_body(str(error)))

    logger.error("%s %s failed: %s", label, feature, error)
    extra: dict[str, Any] = {}
    if isinstance(error, ProviderError) and error.details is not None:
        extra["providerDetails"] = error.details
    return JSONResponse(
        status_code=500,
        content=error_body(
            f"Failed to generate {feature} with {label}",
            details=str(error) or error.__class__.__name__,
            provider=provider,
            **extra,
        ),
    )


GENERATION_ERRORS = (ProviderError, StorageError, httpx.HTTPError)


def video_response(
    *,
    provider: str,
    model: str,
    artifact: StoredArtifact,
    message: str,
    request_id: str | None = None,
) -> dict[str, Any]:
    return {
        "success": True,
        "videoUrl": artifact.storage_url,
        "provider": provider,
        "model": model,
        "requestId": request_id,
        "persisted": artifact.persisted,
        "message": message,
    }
