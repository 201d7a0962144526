"""OpenAI text-to-speech provider (``/audio/speech`` over REST)."""

from __future__ import annotations

import logging

import httpx

from contentforge.config import get_settings
from contentforge.errors import ConfigurationError, ProviderError, response_error_detail

logger = logging.getLogger(__name__)
settings = get_settings()

PROVIDER = "openai"
DEFAULT_MODEL = "tts-1"


async def synthesize(
    text: str,
    voice: str,
    model: str | None = None,
    http_client: httpx.AsyncClient | None = None,
) -> bytes:
    """Return MP3 bytes for ``text`` spoken by ``voice``."""
    if not settings.OPENAI_API_KEY:
        raise ConfigurationError("OpenAI API key not configured", provider=PROVIDER)

    model = model or DEFAULT_MODEL
    logger.info("OpenAI TTS: voice=%s model=%s", voice, model)

    client = http_client or httpx.AsyncClient(timeout=120.0)
    own_client = http_client is None
    try:
        resp = await client.post(
            f"{settings.OPENAI_BASE_URL}/audio/speech",
            json={"model": model, "voice": voice, "input": text, "response_format": "mp3"},
            headers={"Authorization": f"Bearer {settings.OPENAI_API_KEY}"},
        )
        if resp.is_error:
            raise ProviderError(
                f"OpenAI TTS API error: {resp.status_code}",
                provider=PROVIDER,
                details=response_error_detail(resp),
            )
        audio = resp.content
    finally:
        if own_client:
            await client.aclose()

    if not audio:
        raise ProviderError("No audio received from OpenAI TTS", provider=PROVIDER)
    return audio
