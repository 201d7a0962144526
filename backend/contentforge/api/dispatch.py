"""Provider dispatcher: validate the provider/model and forward to its sub-route.

The feature routers expose ``GET``/``POST /api/<feature>``; both delegate
here. Forwarding goes over HTTP to ``INTERNAL_BASE_URL`` so each provider
sub-route stays independently callable.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx
from fastapi.responses import JSONResponse

from contentforge.config import get_settings
from contentforge.errors import error_body
from contentforge.services.provider_registry import (
    DispatchRegistry,
    UnknownModelError,
    UnknownProviderError,
)

logger = logging.getLogger(__name__)
settings = get_settings()

# Module-level client for connection reuse (lazy init)
_http_client: httpx.AsyncClient | None = None


def _get_http_client() -> httpx.AsyncClient:
    global _http_client
    if _http_client is None:
        _http_client = httpx.AsyncClient(
            base_url=settings.INTERNAL_BASE_URL,
            timeout=settings.DISPATCH_TIMEOUT,
        )
    return _http_client


async def close_http_client() -> None:
    global _http_client
    if _http_client is not None:
        await _http_client.aclose()
        _http_client = None


def describe(registry: DispatchRegistry) -> dict[str, Any]:
    return {
        "providers": registry.to_dict(),
        "message": f"Available {registry.feature} providers and models",
    }


async def dispatch(registry: DispatchRegistry, body: dict[str, Any]) -> JSONResponse:
    """Validate ``body["provider"]`` (and ``model`` when given) and forward the rest."""
    params = dict(body)
    provider = params.pop("provider", None) or registry.default_provider
    model = params.get("model")

    try:
        spec = registry.validate(provider, model)
    except UnknownProviderError as e:
        return JSONResponse(
            status_code=400,
            content={"error": str(e), "providers": registry.to_dict()},
        )
    except UnknownModelError as e:
        return JSONResponse(
            status_code=400,
            content={"error": str(e), "models": e.available},
        )

    logger.info("%s dispatch → %s (%s)", registry.feature, spec.endpoint, provider)

    try:
        resp = await _get_http_client().post(spec.endpoint, json=params)
    except httpx.HTTPError as e:
        logger.error("%s dispatch to %s failed: %s", registry.feature, spec.endpoint, e)
        return JSONResponse(
            status_code=500,
            content=error_body(
                f"Failed to process {registry.feature} request",
                details=str(e) or e.__class__.__name__,
            ),
        )

    try:
        content = resp.json()
    except ValueError:
        content = error_body(
            f"Failed to process {registry.feature} request",
            details=f"{provider} returned a non-JSON response ({resp.status_code})",
        )
        return JSONResponse(status_code=502 if resp.is_success else resp.status_code, content=content)

    if resp.is_error:
        logger.warning("%s provider %s answered %d", registry.feature, provider, resp.status_code)
    return JSONResponse(status_code=resp.status_code, content=content)
