"""
Tests for artifact persistence and storage key layout.
"""

import base64
from unittest.mock import AsyncMock, patch

import httpx
import pytest

from contentforge.errors import StorageError
from contentforge.services import artifact_store
from contentforge.services.artifact_store import (
    audio_folder,
    decode_data_url,
    image_folder,
    persist_bytes,
    persist_or_fallback,
    video_folder,
)


def _download_client(content=b"mp4-bytes", status_code=200):
    def handler(request):
        return httpx.Response(status_code, content=content, headers={"content-type": "video/mp4"})
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def test_folder_layout():
    assert video_folder("fal", "hailuo-02-pro") == "generated-videos/fal-hailuo-02-pro"
    assert video_folder("fal", "wan-v2.2-5b", image_to_video=True) == "generated-videos/fal-i2v-wan-v2.2-5b"
    assert video_folder("replicate", "bytedance/seedance-1-lite") == (
        "generated-videos/replicate-bytedance-seedance-1-lite"
    )
    assert image_folder("google", "imagen-3.0-generate-002") == "generated-images/google-imagen-3.0-generate-002"
    assert audio_folder("User 42") == "user_User-42/audio_chunks"
    assert audio_folder("") == "user_unknown_user/audio_chunks"


def test_decode_data_url():
    payload = base64.b64encode(b"\x89PNG").decode()
    data, mime = decode_data_url(f"data:image/png;base64,{payload}")
    assert data == b"\x89PNG"
    assert mime == "image/png"

    with pytest.raises(ValueError):
        decode_data_url("data:text/plain,hello")


@pytest.mark.asyncio
async def test_persist_bytes_uploads_under_folder():
    upload = AsyncMock(return_value="https://store.test/public/a.mp4")
    with patch.object(artifact_store.storage, "upload_bytes", upload):
        artifact = await persist_bytes(
            b"abc", folder="generated-videos/fal-x", extension="mp4", content_type="video/mp4",
        )

    path, data, content_type = upload.await_args.args
    assert path == f"generated-videos/fal-x/{artifact.id}.mp4"
    assert data == b"abc"
    assert content_type == "video/mp4"
    assert artifact.storage_url == "https://store.test/public/a.mp4"
    assert artifact.size == 3
    assert artifact.persisted is True


@pytest.mark.asyncio
async def test_persist_bytes_rejects_empty_payload():
    with pytest.raises(StorageError):
        await persist_bytes(b"", folder="f", extension="mp4", content_type="video/mp4")


@pytest.mark.asyncio
async def test_persist_or_fallback_success():
    upload = AsyncMock(return_value="https://store.test/public/v.mp4")
    async with _download_client() as http_client:
        with patch.object(artifact_store.storage, "upload_bytes", upload):
            artifact = await persist_or_fallback(
                "https://fal.media/v.mp4",
                folder="generated-videos/fal-hailuo-02-pro",
                http_client=http_client,
            )

    assert artifact.persisted is True
    assert artifact.origin_url == "https://fal.media/v.mp4"
    assert artifact.storage_url == "https://store.test/public/v.mp4"
    assert upload.await_args.args[1] == b"mp4-bytes"


@pytest.mark.asyncio
async def test_persist_or_fallback_keeps_provider_url_when_upload_fails():
    upload = AsyncMock(side_effect=StorageError("bucket missing"))
    async with _download_client() as http_client:
        with patch.object(artifact_store.storage, "upload_bytes", upload):
            artifact = await persist_or_fallback(
                "https://fal.media/v.mp4",
                folder="generated-videos/fal-hailuo-02-pro",
                http_client=http_client,
            )

    assert artifact.persisted is False
    assert artifact.storage_url == "https://fal.media/v.mp4"
    assert artifact.size == 0


@pytest.mark.asyncio
async def test_persist_or_fallback_keeps_provider_url_when_download_fails():
    upload = AsyncMock()
    async with _download_client(status_code=404) as http_client:
        with patch.object(artifact_store.storage, "upload_bytes", upload):
            artifact = await persist_or_fallback(
                "https://fal.media/gone.mp4",
                folder="generated-videos/fal-hailuo-02-pro",
                http_client=http_client,
            )

    assert artifact.persisted is False
    assert artifact.storage_url == "https://fal.media/gone.mp4"
    upload.assert_not_awaited()
