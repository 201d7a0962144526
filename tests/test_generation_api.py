"""
Tests for the provider generation sub-routes.

Provider calls and storage are patched; these cover request validation,
persistence fallback and error bodies.
"""

from unittest.mock import AsyncMock, patch

from contentforge.errors import ConfigurationError, JobTimeoutError, ProviderError, StorageError
from contentforge.services.artifact_store import StoredArtifact
from contentforge.services.job_poller import JobResult


def _artifact(url, persisted=True):
    return StoredArtifact(
        id="a1",
        origin_url="https://fal.media/v.mp4",
        storage_url=url,
        content_type="video/mp4",
        size=3 if persisted else 0,
        persisted=persisted,
    )


# ---------------------------------------------------------------------------
# Text-to-video
# ---------------------------------------------------------------------------

def test_fal_text_to_video_success(client):
    job = JobResult(request_id="req-1", media_url="https://fal.media/v.mp4")
    generate = AsyncMock(return_value=job)
    persist = AsyncMock(return_value=_artifact("https://store.test/v.mp4"))

    with patch("contentforge.services.providers.fal.run_queue_job", generate), \
            patch("contentforge.api.text_to_video.persist_or_fallback", persist):
        response = client.post("/api/text-to-video/providers/fal", json={
            "prompt": "a cat surfing", "model": "kling-v2.1-master", "duration": 10,
        })

    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "videoUrl": "https://store.test/v.mp4",
        "provider": "fal",
        "model": "kling-v2.1-master",
        "requestId": "req-1",
        "persisted": True,
        "message": "Text-to-video generation completed successfully",
    }
    kwargs = generate.await_args.kwargs
    assert kwargs["endpoint_id"] == "fal-ai/kling-video/v2.1/master/text-to-video"
    assert kwargs["arguments"]["duration"] == "10"
    assert persist.await_args.kwargs["folder"] == "generated-videos/fal-kling-v2.1-master"


def test_fal_text_to_video_unpersisted_keeps_provider_url(client):
    job = JobResult(request_id="req-1", media_url="https://fal.media/v.mp4")
    persist = AsyncMock(return_value=_artifact("https://fal.media/v.mp4", persisted=False))

    with patch("contentforge.services.providers.fal.run_queue_job", AsyncMock(return_value=job)), \
            patch("contentforge.api.text_to_video.persist_or_fallback", persist):
        response = client.post("/api/text-to-video/providers/fal", json={"prompt": "a cat"})

    assert response.status_code == 200
    assert response.json()["videoUrl"] == "https://fal.media/v.mp4"
    assert response.json()["persisted"] is False


def test_fal_text_to_video_validation(client):
    missing = client.post("/api/text-to-video/providers/fal", json={"prompt": "  "})
    assert missing.status_code == 400
    assert missing.json() == {"error": "Prompt is required and must be a string"}

    bad_model = client.post("/api/text-to-video/providers/fal", json={"prompt": "a cat", "model": "sora"})
    assert bad_model.status_code == 400
    assert bad_model.json()["error"] == "Invalid model. Available models: hailuo-02-pro, kling-v2.1-master"


def test_fal_text_to_video_missing_key(client):
    response = client.post("/api/text-to-video/providers/fal", json={"prompt": "a cat"})
    assert response.status_code == 500
    assert response.json() == {"error": "FAL AI API key not configured"}


def test_fal_text_to_video_timeout_error_body(client):
    timeout = JobTimeoutError("fal job req-1 timed out after 180 attempts", provider="fal", attempts=180)

    with patch("contentforge.services.providers.fal.run_queue_job", AsyncMock(side_effect=timeout)):
        response = client.post("/api/text-to-video/providers/fal", json={"prompt": "a cat"})

    assert response.status_code == 500
    data = response.json()
    assert data["error"] == "Failed to generate text-to-video with FAL AI"
    assert data["provider"] == "fal"
    assert "timed out" in data["details"]


def test_replicate_text_to_video_duration(client):
    response = client.post("/api/text-to-video/providers/replicate", json={"prompt": "a cat", "duration": 7})
    assert response.status_code == 400
    assert response.json() == {"error": "Duration must be 5 or 10 seconds"}


def test_google_text_to_video_storage_failure_is_fatal(client):
    with patch("contentforge.services.providers.google_genai.generate_video", AsyncMock(return_value=b"mp4")), \
            patch("contentforge.api.text_to_video.persist_bytes", AsyncMock(side_effect=StorageError("down"))):
        response = client.post("/api/text-to-video/providers/google", json={"prompt": "a cat"})

    assert response.status_code == 500
    assert response.json()["error"] == "Failed to generate text-to-video with Google GenAI"


def test_google_text_to_video_success(client):
    persist = AsyncMock(return_value=_artifact("https://store.test/veo.mp4"))

    with patch("contentforge.services.providers.google_genai.generate_video", AsyncMock(return_value=b"mp4")), \
            patch("contentforge.api.text_to_video.persist_bytes", persist):
        response = client.post("/api/text-to-video/providers/google", json={"prompt": "a cat"})

    assert response.status_code == 200
    assert response.json()["videoUrl"] == "https://store.test/veo.mp4"
    assert persist.await_args.kwargs["folder"] == "generated-videos/google-veo-3.0-generate-preview"


# ---------------------------------------------------------------------------
# Image-to-video
# ---------------------------------------------------------------------------

def test_fal_image_to_video_requires_image(client):
    response = client.post("/api/image-to-video/providers/fal", json={"prompt": "a cat"})
    assert response.status_code == 400
    assert response.json() == {"error": "Image URL is required and must be a string"}


def test_fal_image_to_video_uses_i2v_folder(client):
    job = JobResult(request_id="req-2", media_url="https://fal.media/i.mp4")
    generate = AsyncMock(return_value=job)
    persist = AsyncMock(return_value=_artifact("https://store.test/i.mp4"))

    with patch("contentforge.services.providers.fal.run_queue_job", generate), \
            patch("contentforge.api.image_to_video.persist_or_fallback", persist):
        response = client.post("/api/image-to-video/providers/fal", json={
            "prompt": "a cat", "image_url": "https://img.test/cat.png",
        })

    assert response.status_code == 200
    assert generate.await_args.kwargs["arguments"]["image_url"] == "https://img.test/cat.png"
    assert persist.await_args.kwargs["folder"] == "generated-videos/fal-i2v-wan-v2.2-5b"


def test_google_image_to_video_bad_data_url(client):
    response = client.post("/api/image-to-video/providers/google", json={
        "prompt": "a cat", "image_url": "data:image/png,not-base64",
    })
    assert response.status_code == 400
    assert response.json()["error"].startswith("Invalid image:")


def test_google_image_to_video_generation_error_is_not_an_image_error(client):
    fetch = AsyncMock(return_value=(b"png", "image/png"))
    failing = AsyncMock(side_effect=ProviderError("Invalid Veo request parameters", provider="google"))

    with patch("contentforge.api.image_to_video.fetch", fetch), \
            patch("contentforge.services.providers.google_genai.generate_video", failing):
        response = client.post("/api/image-to-video/providers/google", json={
            "prompt": "a cat", "image_url": "https://img.test/cat.png",
        })

    assert response.status_code == 500
    data = response.json()
    assert data["error"] == "Failed to generate image-to-video with Google GenAI"
    assert data["details"] == "Invalid Veo request parameters"


def test_replicate_image_to_video_requires_image(client):
    response = client.post("/api/image-to-video/providers/replicate", json={"prompt": "a cat"})
    assert response.status_code == 400
    assert response.json() == {"error": "Image is required and must be a base64 string"}


# ---------------------------------------------------------------------------
# Text-to-image
# ---------------------------------------------------------------------------

def test_imagen_persists_image(client):
    persist = AsyncMock(return_value=_artifact("https://store.test/i.png"))

    with patch("contentforge.services.providers.google_genai.generate_image", AsyncMock(return_value=b"png")), \
            patch("contentforge.api.text_to_image.persist_bytes", persist):
        response = client.post("/api/text-to-image/providers/google", json={"prompt": "a cat"})

    assert response.status_code == 200
    assert response.json()["imageUrl"] == "https://store.test/i.png"
    assert response.json()["persisted"] is True


def test_imagen_falls_back_to_data_url(client):
    with patch("contentforge.services.providers.google_genai.generate_image", AsyncMock(return_value=b"png")), \
            patch("contentforge.api.text_to_image.persist_bytes", AsyncMock(side_effect=StorageError("down"))):
        response = client.post("/api/text-to-image/providers/google", json={"prompt": "a cat"})

    assert response.status_code == 200
    assert response.json()["imageUrl"] == "data:image/png;base64,cG5n"
    assert response.json()["persisted"] is False


def test_imagen_missing_key(client):
    with patch(
        "contentforge.services.providers.google_genai.generate_image",
        AsyncMock(side_effect=ConfigurationError("Google GenAI API key not configured")),
    ):
        response = client.post("/api/text-to-image/providers/google", json={"prompt": "a cat"})

    assert response.status_code == 500
    assert response.json() == {"error": "Google GenAI API key not configured"}


def test_fal_text_to_image_success(client):
    job = JobResult(request_id="req-9", media_url="https://fal.media/i.png")
    generate = AsyncMock(return_value=job)
    persist = AsyncMock(return_value=_artifact("https://store.test/i.png"))

    with patch("contentforge.services.providers.fal.run_queue_job", generate), \
            patch("contentforge.api.text_to_image.persist_or_fallback", persist):
        response = client.post("/api/text-to-image/providers/fal", json={
            "prompt": "a lighthouse at dusk", "model": "recraft-v3", "aspect_ratio": "1:1",
        })

    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "imageUrl": "https://store.test/i.png",
        "provider": "fal",
        "model": "recraft-v3",
        "requestId": "req-9",
        "persisted": True,
        "message": "Text-to-image generation completed successfully",
    }
    kwargs = generate.await_args.kwargs
    assert kwargs["endpoint_id"] == "fal-ai/recraft-v3"
    assert kwargs["arguments"]["image_size"] == {"width": 1024, "height": 1024}
    persist_kwargs = persist.await_args.kwargs
    assert persist.await_args.args[0] == "https://fal.media/i.png"
    assert persist_kwargs["folder"] == "generated-images/fal-recraft-v3"
    assert persist_kwargs["content_type"] == "image/png"


def test_fal_text_to_image_unpersisted_keeps_provider_url(client):
    job = JobResult(request_id="req-9", media_url="https://fal.media/i.png")
    persist = AsyncMock(return_value=_artifact("https://fal.media/i.png", persisted=False))

    with patch("contentforge.services.providers.fal.run_queue_job", AsyncMock(return_value=job)), \
            patch("contentforge.api.text_to_image.persist_or_fallback", persist):
        response = client.post("/api/text-to-image/providers/fal", json={"prompt": "a lighthouse"})

    assert response.status_code == 200
    assert response.json()["imageUrl"] == "https://fal.media/i.png"
    assert response.json()["persisted"] is False


def test_fal_text_to_image_invalid_model(client):
    response = client.post("/api/text-to-image/providers/fal", json={"prompt": "a lighthouse", "model": "dalle-3"})
    assert response.status_code == 400
    assert response.json()["error"].startswith("Invalid model. Available models: flux-dev, recraft-v3")


def test_fal_text_to_image_failure(client):
    timeout = JobTimeoutError("FAL job req-9 did not finish after 180 attempts", provider="fal")

    with patch("contentforge.services.providers.fal.run_queue_job", AsyncMock(side_effect=timeout)):
        response = client.post("/api/text-to-image/providers/fal", json={"prompt": "a lighthouse"})

    assert response.status_code == 500
    data = response.json()
    assert data["error"] == "Failed to generate text-to-image with FAL AI"
    assert data["provider"] == "fal"
