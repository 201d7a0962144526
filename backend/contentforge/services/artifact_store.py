"""Artifact persistence: move provider output from ephemeral URLs to durable storage.

Providers hand back short-lived URLs. After a job succeeds the bytes are
downloaded, uploaded under a fresh UUID key, and the durable public URL is
substituted into the response. ``persist_or_fallback`` never raises: when
persistence fails the original URL is returned with ``persisted=False``.
"""

from __future__ import annotations

import base64
import logging
import re
import uuid
from dataclasses import dataclass

import httpx

from contentforge.errors import StorageError
from contentforge.services import storage

logger = logging.getLogger(__name__)

_DOWNLOAD_TIMEOUT = 300.0


@dataclass(frozen=True)
class StoredArtifact:
    """A generated media file and where it lives."""
    id: str
    origin_url: str | None
    storage_url: str
    content_type: str
    size: int
    persisted: bool = True
    path: str | None = None


# ---------------------------------------------------------------------------
# Key layout
# ---------------------------------------------------------------------------

def _slug(value: str) -> str:
    return re.sub(r"[^a-zA-Z0-9._-]+", "-", value).strip("-").lower()


def video_folder(provider: str, model: str, image_to_video: bool = False) -> str:
    """``generated-videos/<provider>[-i2v]-<model>``."""
    kind = f"{provider}-i2v" if image_to_video else provider
    return f"generated-videos/{_slug(kind)}-{_slug(model)}"


def image_folder(provider: str, model: str) -> str:
    return f"generated-images/{_slug(provider)}-{_slug(model)}"


def audio_folder(user_id: str) -> str:
    safe_id = re.sub(r"[^a-zA-Z0-9._-]+", "-", user_id).strip("-")
    return f"user_{safe_id or 'unknown_user'}/audio_chunks"


# ---------------------------------------------------------------------------
# Persistence
# ---------------------------------------------------------------------------

async def persist_bytes(
    data: bytes,
    *,
    folder: str,
    extension: str,
    content_type: str,
    origin_url: str | None = None,
    filename: str | None = None,
) -> StoredArtifact:
    """Upload in-memory bytes under ``<folder>/<uuid>.<extension>``."""
    if not data:
        raise StorageError("Refusing to persist an empty artifact")

    artifact_id = str(uuid.uuid4())
    path = f"{folder}/{filename or f'{artifact_id}.{extension}'}"
    public_url = await storage.upload_bytes(path, data, content_type)

    return StoredArtifact(
        id=artifact_id,
        origin_url=origin_url,
        storage_url=public_url,
        content_type=content_type,
        size=len(data),
        path=path,
    )


def decode_data_url(url: str) -> tuple[bytes, str]:
    """``data:image/png;base64,...`` → (bytes, "image/png")."""
    header, _, payload = url.partition(",")
    mime_type = header[5:].split(";")[0] or "application/octet-stream"
    if ";base64" not in header:
        raise ValueError("Only base64 data URLs are supported")
    return base64.b64decode(payload), mime_type


async def fetch(url: str, http_client: httpx.AsyncClient | None = None) -> tuple[bytes, str | None]:
    """Fetch a URL (or decode a data URL) into memory with its content type."""
    if url.startswith("data:"):
        return decode_data_url(url)

    client = http_client or httpx.AsyncClient(timeout=_DOWNLOAD_TIMEOUT, follow_redirects=True)
    own_client = http_client is None
    try:
        resp = await client.get(url)
        resp.raise_for_status()
        return resp.content, resp.headers.get("content-type")
    finally:
        if own_client:
            await client.aclose()


async def persist_remote_artifact(
    url: str,
    *,
    folder: str,
    extension: str = "mp4",
    content_type: str = "video/mp4",
    http_client: httpx.AsyncClient | None = None,
) -> StoredArtifact:
    """Download an ephemeral URL and re-upload it to durable storage."""
    data, _ = await fetch(url, http_client)
    return await persist_bytes(
        data,
        folder=folder,
        extension=extension,
        content_type=content_type,
        origin_url=url,
    )


async def persist_or_fallback(
    url: str,
    *,
    folder: str,
    extension: str = "mp4",
    content_type: str = "video/mp4",
    http_client: httpx.AsyncClient | None = None,
) -> StoredArtifact:
    """Persist ``url``; on any failure keep the ephemeral URL instead.

    Failed persistence is not retried or scheduled for cleanup, so the
    returned URL expires with the provider's retention window.
    """
    try:
        artifact = await persist_remote_artifact(
            url,
            folder=folder,
            extension=extension,
            content_type=content_type,
            http_client=http_client,
        )
        logger.info("Persisted %s -> %s", url, artifact.storage_url)
        return artifact
    except Exception as e:
        logger.warning("Persistence failed for %s, returning provider URL: %s", url, e)
        return StoredArtifact(
            id=str(uuid.uuid4()),
            origin_url=url,
            storage_url=url,
            content_type=content_type,
            size=0,
            persisted=False,
        )
