"""ElevenLabs text-to-speech provider (REST ``/text-to-speech/{voice_id}``)."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from contentforge.config import get_settings
from contentforge.errors import ConfigurationError, ProviderError, response_error_detail

logger = logging.getLogger(__name__)
settings = get_settings()

PROVIDER = "elevenlabs"
DEFAULT_MODEL = "eleven_multilingual_v2"
OUTPUT_FORMAT = "mp3_44100_128"

# Only the flash model accepts an explicit language code.
LANGUAGE_CODE_MODELS = frozenset({"eleven_flash_v2_5"})


def build_request(text: str, model: str | None = None, language_code: str | None = None) -> dict[str, Any]:
    model = model or DEFAULT_MODEL
    body: dict[str, Any] = {"text": text, "model_id": model}
    if language_code and model in LANGUAGE_CODE_MODELS:
        body["language_code"] = language_code
    return body


async def synthesize(
    text: str,
    voice_id: str,
    model: str | None = None,
    language_code: str | None = None,
    http_client: httpx.AsyncClient | None = None,
) -> bytes:
    if not settings.ELEVENLABS_API_KEY:
        raise ConfigurationError("ElevenLabs API key not configured", provider=PROVIDER)

    body = build_request(text, model, language_code)
    logger.info("ElevenLabs TTS: voice=%s model=%s", voice_id, body["model_id"])

    client = http_client or httpx.AsyncClient(timeout=120.0)
    own_client = http_client is None
    try:
        resp = await client.post(
            f"{settings.ELEVENLABS_ENDPOINT}/text-to-speech/{voice_id}",
            params={"output_format": OUTPUT_FORMAT},
            json=body,
            headers={"xi-api-key": settings.ELEVENLABS_API_KEY},
        )
        if resp.is_error:
            raise ProviderError(
                f"ElevenLabs API error: {resp.status_code}",
                provider=PROVIDER,
                details=response_error_detail(resp),
            )
        audio = resp.content
    finally:
        if own_client:
            await client.aclose()

    if not audio:
        raise ProviderError("No audio received from ElevenLabs", provider=PROVIDER)
    return audio
