"""Provider-side exceptions shared by the generation services.

Everything a provider call can fail with derives from ProviderError, so the
route boundary can translate it into a ``{error, provider, details}`` body.
"""

from __future__ import annotations

from typing import Any


class ProviderError(Exception):
    """Structured provider error with the provider name and an HTTP status."""

    def __init__(
        self,
        message: str,
        provider: str = "unknown",
        status_code: int = 500,
        details: Any = None,
    ):
        super().__init__(message)
        self.provider = provider
        self.status_code = status_code
        self.details = details


class ConfigurationError(ProviderError):
    """A credential or endpoint required by the provider is not configured."""


class JobFailedError(ProviderError):
    """The provider reported a failure terminal status for a queued job."""

    def __init__(
        self,
        message: str,
        provider: str = "unknown",
        request_id: str | None = None,
        last_status: str | None = None,
        details: Any = None,
    ):
        super().__init__(message, provider=provider, details=details)
        self.request_id = request_id
        self.last_status = last_status


class JobTimeoutError(ProviderError):
    """The poll loop spent its whole attempt budget without a terminal status."""

    def __init__(
        self,
        message: str,
        provider: str = "unknown",
        request_id: str | None = None,
        last_status: str | None = None,
        attempts: int = 0,
    ):
        super().__init__(message, provider=provider)
        self.request_id = request_id
        self.last_status = last_status
        self.attempts = attempts


class StorageError(Exception):
    """Durable storage rejected an upload or is not configured."""


def error_body(error: str, details: Any = None, **extra: Any) -> dict[str, Any]:
    """Build the JSON body returned for failed requests."""
    body: dict[str, Any] = {"error": error}
    body.update(extra)
    if details is not None:
        body["details"] = details
    return body


def response_error_detail(resp: Any) -> Any:
    """Best-effort error detail from a failed httpx response."""
    try:
        body = resp.json()
    except ValueError:
        return resp.text[:500]
    if isinstance(body, dict):
        return body.get("detail") or body.get("error") or body
    return body
