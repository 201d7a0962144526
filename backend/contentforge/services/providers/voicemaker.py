"""VoiceMaker text-to-speech provider.

Synchronous REST API: one POST returns a hosted MP3 ``path`` plus character
quota counters.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from contentforge.config import get_settings
from contentforge.errors import ConfigurationError, ProviderError, response_error_detail

logger = logging.getLogger(__name__)
settings = get_settings()

PROVIDER = "voicemaker"


def _headers() -> dict[str, str]:
    if not settings.VOICEMAKER_API_KEY:
        raise ConfigurationError("VoiceMaker API key not configured", provider=PROVIDER)
    return {
        "Authorization": f"Bearer {settings.VOICEMAKER_API_KEY}",
        "Content-Type": "application/json",
    }


async def synthesize(
    *,
    text: str,
    voice_id: str,
    engine: str = "neural",
    language_code: str = "en-US",
    output_format: str = "mp3",
    sample_rate: str = "48000",
    effect: str = "default",
    master_volume: str = "0",
    master_speed: str = "0",
    master_pitch: str = "0",
    http_client: httpx.AsyncClient | None = None,
) -> dict[str, Any]:
    """Generate speech and return VoiceMaker's response (``path``, ``usedChars`` ...)."""
    headers = _headers()
    body = {
        "Engine": engine,
        "VoiceId": voice_id,
        "LanguageCode": language_code,
        "Text": text,
        "OutputFormat": output_format,
        "SampleRate": sample_rate,
        "Effect": effect,
        "MasterVolume": master_volume,
        "MasterSpeed": master_speed,
        "MasterPitch": master_pitch,
    }

    client = http_client or httpx.AsyncClient(timeout=120.0)
    own_client = http_client is None
    try:
        resp = await client.post(f"{settings.VOICEMAKER_ENDPOINT}/api", json=body, headers=headers)
        if resp.is_error:
            raise ProviderError(
                f"VoiceMaker API error: {resp.status_code}",
                provider=PROVIDER,
                details=response_error_detail(resp),
            )
        data = resp.json()
    finally:
        if own_client:
            await client.aclose()

    if not data.get("success") or not data.get("path"):
        raise ProviderError("Invalid response format from VoiceMaker API", provider=PROVIDER, details=data)

    logger.info(
        "VoiceMaker audio generated (voice=%s): used %s chars, %s remaining",
        voice_id, data.get("usedChars"), data.get("remainChars"),
    )
    return data


async def list_voices(
    language: str = "en-US",
    http_client: httpx.AsyncClient | None = None,
) -> list[dict[str, Any]]:
    """Return VoiceMaker's voice catalogue for ``language``."""
    headers = _headers()
    client = http_client or httpx.AsyncClient(timeout=30.0)
    own_client = http_client is None
    try:
        resp = await client.post(
            f"{settings.VOICEMAKER_ENDPOINT}/list",
            json={"language": language},
            headers=headers,
        )
        if resp.is_error:
            raise ProviderError(
                f"VoiceMaker API error: {resp.status_code}",
                provider=PROVIDER,
                details=response_error_detail(resp),
            )
        data = resp.json()
    finally:
        if own_client:
            await client.aclose()

    voices = (data.get("data") or {}).get("voices_list") if data.get("success") else None
    if voices is None:
        raise ProviderError("Invalid response format from VoiceMaker API", provider=PROVIDER)
    logger.info("Fetched %d VoiceMaker voices", len(voices))
    return voices
