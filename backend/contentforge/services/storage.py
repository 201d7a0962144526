from __future__ import annotations
"""Supabase storage access: upload and public URL.

The supabase client is synchronous; calls are pushed off the event loop
with asyncio.to_thread.
"""

import asyncio
import logging

from supabase import Client, create_client

from contentforge.config import get_settings
from contentforge.errors import StorageError

logger = logging.getLogger(__name__)
settings = get_settings()

# Module-level client for connection reuse (lazy init)
_client: Client | None = None


def get_supabase() -> Client:
    """Return the shared service-role Supabase client, creating it on first use."""
    global _client
    if not settings.storage_configured:
        raise StorageError("Supabase storage is not configured")
    if _client is None:
        _client = create_client(settings.SUPABASE_URL, settings.SUPABASE_SERVICE_ROLE_KEY)
    return _client


async def upload_bytes(
    path: str,
    data: bytes,
    content_type: str,
    bucket: str | None = None,
) -> str:
    """Upload bytes under ``path`` (never overwriting) and return the public URL."""
    bucket_name = bucket or settings.SUPABASE_BUCKET
    bucket_api = get_supabase().storage.from_(bucket_name)

    try:
        await asyncio.to_thread(
            bucket_api.upload,
            path,
            data,
            {"content-type": content_type, "upsert": "false"},
        )
    except Exception as e:
        raise StorageError(f"Upload to {bucket_name}/{path} failed: {e}") from e

    public_url = bucket_api.get_public_url(path)
    logger.info("Uploaded %d bytes to %s/%s", len(data), bucket_name, path)
    return public_url

