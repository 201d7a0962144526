"""MiniMax text-to-speech provider.

The ``t2a_v2`` endpoint answers with JSON whose ``data.audio`` field holds
the MP3 as a hex string.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from contentforge.config import get_settings
from contentforge.errors import ConfigurationError, ProviderError, response_error_detail

logger = logging.getLogger(__name__)
settings = get_settings()

PROVIDER = "minimax"
DEFAULT_MODEL = "speech-02-hd"


def build_request(text: str, voice: str, model: str | None = None) -> dict[str, Any]:
    return {
        "model": model or DEFAULT_MODEL,
        "text": text,
        "stream": False,
        "subtitle_enable": False,
        "voice_setting": {"voice_id": voice, "speed": 1, "vol": 1, "pitch": 0},
        "audio_setting": {"sample_rate": 32000, "bitrate": 128000, "format": "mp3", "channel": 1},
    }


async def synthesize(
    text: str,
    voice: str,
    model: str | None = None,
    http_client: httpx.AsyncClient | None = None,
) -> bytes:
    if not settings.MINIMAX_API_KEY or not settings.MINIMAX_GROUP_ID:
        raise ConfigurationError("MiniMax API key or group id not configured", provider=PROVIDER)

    body = build_request(text, voice, model)
    logger.info("MiniMax TTS: voice=%s model=%s", voice, body["model"])

    client = http_client or httpx.AsyncClient(timeout=120.0)
    own_client = http_client is None
    try:
        resp = await client.post(
            f"{settings.MINIMAX_ENDPOINT}/t2a_v2",
            params={"GroupId": settings.MINIMAX_GROUP_ID},
            json=body,
            headers={"Authorization": f"Bearer {settings.MINIMAX_API_KEY}"},
        )
        if resp.is_error:
            raise ProviderError(
                f"MiniMax API error: {resp.status_code}",
                provider=PROVIDER,
                details=response_error_detail(resp),
            )
        data = resp.json()
    finally:
        if own_client:
            await client.aclose()

    hex_audio = (data.get("data") or {}).get("audio")
    if not hex_audio:
        raise ProviderError(
            "No audio data from MiniMax",
            provider=PROVIDER,
            details=data.get("base_resp") or data,
        )
    try:
        return bytes.fromhex(hex_audio)
    except ValueError as e:
        raise ProviderError("MiniMax returned malformed audio data", provider=PROVIDER) from e
