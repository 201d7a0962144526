"""Fish Audio text-to-speech provider. Voices are addressed by reference id."""

from __future__ import annotations

import logging

import httpx

from contentforge.config import get_settings
from contentforge.errors import ConfigurationError, ProviderError, response_error_detail

logger = logging.getLogger(__name__)
settings = get_settings()

PROVIDER = "fishaudio"


async def synthesize(
    text: str,
    reference_id: str,
    model: str | None = None,
    http_client: httpx.AsyncClient | None = None,
) -> bytes:
    if not settings.FISH_AUDIO_API_KEY:
        raise ConfigurationError("Fish Audio API key not configured", provider=PROVIDER)

    model = model or settings.FISH_AUDIO_MODEL
    logger.info("Fish Audio TTS: reference=%s model=%s chars=%d", reference_id, model, len(text))
    body = {
        "text": text,
        "format": "mp3",
        "mp3_bitrate": 128,
        "reference_id": reference_id,
        "normalize": True,
        "latency": "normal",
    }

    client = http_client or httpx.AsyncClient(timeout=120.0)
    own_client = http_client is None
    try:
        resp = await client.post(
            f"{settings.FISH_AUDIO_ENDPOINT}/tts",
            json=body,
            headers={"Authorization": f"Bearer {settings.FISH_AUDIO_API_KEY}", "model": model},
        )
        if resp.is_error:
            raise ProviderError(
                f"Fish Audio API error: {resp.status_code}",
                provider=PROVIDER,
                details=response_error_detail(resp),
            )
        audio = resp.content
    finally:
        if own_client:
            await client.aclose()

    if not audio:
        raise ProviderError("No audio received from Fish Audio", provider=PROVIDER)
    return audio
