"""Google Cloud Text-to-Speech provider (REST, API key auth)."""

from __future__ import annotations

import base64
import logging
import re
from typing import Any

import httpx

from contentforge.config import get_settings
from contentforge.errors import ConfigurationError, ProviderError, response_error_detail

logger = logging.getLogger(__name__)
settings = get_settings()

PROVIDER = "google-tts"

_LANGUAGE_RE = re.compile(r"^([a-z]{2,3}-[A-Z]{2})")


def language_code_from_voice(voice_name: str) -> str:
    """Derive the BCP-47 language code from a voice name.

    ``en-US-Wavenet-D`` → ``en-US``; ``cmn-CN-Chirp3-HD-Achird`` → ``cmn-CN``.
    Raises ValueError when nothing usable can be derived.
    """
    match = _LANGUAGE_RE.match(voice_name)
    if match:
        return match.group(1)
    parts = voice_name.split("-")
    if len(parts) >= 2 and parts[0] and parts[1]:
        return f"{parts[0]}-{parts[1]}"
    raise ValueError(f"Cannot extract language code from voice name: {voice_name}")


def _api_key() -> str:
    if not settings.GOOGLE_TTS_API_KEY:
        raise ConfigurationError("Google TTS API key not configured", provider=PROVIDER)
    return settings.GOOGLE_TTS_API_KEY


async def synthesize(
    text: str,
    voice_name: str,
    audio_encoding: str = "MP3",
    http_client: httpx.AsyncClient | None = None,
) -> bytes:
    """Synthesize ``text`` with ``voice_name`` and return the audio bytes."""
    language_code = language_code_from_voice(voice_name)
    api_key = _api_key()
    logger.info("Google TTS: voice=%s language=%s", voice_name, language_code)

    body = {
        "input": {"text": text},
        "voice": {"languageCode": language_code, "name": voice_name},
        "audioConfig": {"audioEncoding": audio_encoding},
    }

    client = http_client or httpx.AsyncClient(timeout=120.0)
    own_client = http_client is None
    try:
        resp = await client.post(
            f"{settings.GOOGLE_TTS_ENDPOINT}/text:synthesize",
            params={"key": api_key},
            json=body,
        )
        if resp.is_error:
            raise ProviderError(
                f"Google TTS API error: {resp.status_code}",
                provider=PROVIDER,
                details=response_error_detail(resp),
            )
        content = resp.json().get("audioContent")
    finally:
        if own_client:
            await client.aclose()

    if not content:
        raise ProviderError("No audio content received from Google TTS", provider=PROVIDER)
    return base64.b64decode(content)


async def list_voices(http_client: httpx.AsyncClient | None = None) -> list[dict[str, Any]]:
    """Return voices as ``{id, name}`` sorted by language prefix, then name."""
    api_key = _api_key()
    client = http_client or httpx.AsyncClient(timeout=30.0)
    own_client = http_client is None
    try:
        resp = await client.get(f"{settings.GOOGLE_TTS_ENDPOINT}/voices", params={"key": api_key})
        if resp.is_error:
            raise ProviderError(
                f"Google TTS API error: {resp.status_code}",
                provider=PROVIDER,
                details=response_error_detail(resp),
            )
        raw = resp.json().get("voices") or []
    finally:
        if own_client:
            await client.aclose()

    def sort_key(voice: dict[str, Any]) -> tuple[str, str]:
        name = voice.get("name") or ""
        match = re.match(r"^([a-z]{2}-[A-Z]{2})", name)
        return (match.group(1) if match else "", name)

    voices = []
    for voice in sorted(raw, key=sort_key):
        name = voice.get("name") or "Unknown Name"
        languages = ", ".join(voice.get("languageCodes") or [])
        gender = voice.get("ssmlGender") or "SSML_VOICE_GENDER_UNSPECIFIED"
        voices.append({"id": name, "name": f"{name} ({languages}) - {gender}"})
    return voices
