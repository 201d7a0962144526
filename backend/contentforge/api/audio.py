from __future__ import annotations
"""Audio API: VoiceMaker and Google TTS voices, and per-chunk generation across the speech providers."""

import logging
import re
import time

import httpx
from fastapi import APIRouter, HTTPException
from fastapi.responses import JSONResponse

from contentforge.errors import ConfigurationError, ProviderError, StorageError, error_body
from contentforge.schemas.audio import AudioChunkRequest, VoiceListRequest, VoiceMakerAudioRequest
from contentforge.services.artifact_store import audio_folder, fetch, persist_bytes
from contentforge.services.providers import (
    elevenlabs,
    fish_audio,
    google_tts,
    minimax,
    openai_tts,
    voicemaker,
)

logger = logging.getLogger(__name__)

router = APIRouter()

AUDIO_PROVIDERS = ("openai", "minimax", "fishaudio", "elevenlabs", "voicemaker", "google-tts")

# provider -> (request field holding the voice, label used in the 400 message)
_VOICE_FIELDS = {
    "openai": ("voice", "openai"),
    "minimax": ("voice", "minimax"),
    "fishaudio": ("fishAudioVoiceId", "Fish Audio"),
    "elevenlabs": ("elevenLabsVoiceId", "ElevenLabs"),
    "voicemaker": ("voice", "VoiceMaker"),
    "google-tts": ("googleTtsVoiceName", "Google TTS"),
}


def _failure(message: str) -> JSONResponse:
    return JSONResponse(status_code=500, content={"success": False, "error": message})


@router.post("/voicemaker/generate-audio")
async def voicemaker_generate_audio(data: VoiceMakerAudioRequest):
    """Generate one section of narration with VoiceMaker."""
    if not data.text or not data.voiceId:
        return JSONResponse(
            status_code=400,
            content={"success": False, "error": "Text and voiceId are required"},
        )

    logger.info(
        "VoiceMaker audio for section %s: %d chars, voice=%s",
        data.sectionId, len(data.text), data.voiceId,
    )
    try:
        result = await voicemaker.synthesize(
            text=data.text,
            voice_id=data.voiceId,
            engine=data.engine,
            language_code=data.languageCode,
            output_format=data.outputFormat,
            sample_rate=data.sampleRate,
            effect=data.effect,
            master_volume=data.masterVolume,
            master_speed=data.masterSpeed,
            master_pitch=data.masterPitch,
        )
    except (ProviderError, httpx.HTTPError) as e:
        logger.error("VoiceMaker audio generation failed: %s", e)
        return _failure(str(e) or "Failed to generate VoiceMaker audio")

    return {
        "success": True,
        "audioUrl": result["path"],
        "result": {
            "success": True,
            "audioUrl": result["path"],
            "audioSize": 0,
            "chunksGenerated": 1,
            "totalChunks": 1,
            "voiceId": data.voiceId,
            "modelId": data.engine,
            "provider": "voicemaker",
            "usedChars": result.get("usedChars"),
            "remainChars": result.get("remainChars"),
            "remainKeyChars": result.get("remainKeyChars"),
        },
    }


@router.post("/voicemaker/voices")
async def voicemaker_voices(data: VoiceListRequest | None = None):
    """List VoiceMaker voices for a language."""
    language = data.language if data else "en-US"
    try:
        voices = await voicemaker.list_voices(language)
    except (ProviderError, httpx.HTTPError) as e:
        logger.error("VoiceMaker voice list failed: %s", e)
        return _failure(str(e) or "Failed to fetch VoiceMaker voices")
    return {"success": True, "voices": voices}


@router.get("/google-tts/voices")
async def google_tts_voices():
    """List Google Cloud TTS voices as ``{id, name}``."""
    try:
        voices = await google_tts.list_voices()
    except (ProviderError, httpx.HTTPError) as e:
        logger.error("Google TTS voice list failed: %s", e)
        return JSONResponse(
            status_code=500,
            content=error_body("Failed to fetch Google TTS voices", details=str(e)),
        )
    return {"voices": voices}


def _chunk_filename(data: AudioChunkRequest) -> str:
    field, _ = _VOICE_FIELDS[data.provider]
    if field != "voice":
        voice = re.sub(r"[^a-zA-Z0-9]", "_", getattr(data, field) or "unknown_voice")
    else:
        voice = re.sub(r"\s+", "_", data.voice or "unknown_voice")
    return f"{data.provider}-{voice}-chunk{data.chunkIndex}-{int(time.time() * 1000)}.mp3"


def _validate_chunk_request(data: AudioChunkRequest) -> None:
    if not data.text or not data.provider:
        raise HTTPException(
            status_code=400,
            detail="Missing required fields: text and provider are required",
        )
    if data.provider not in AUDIO_PROVIDERS:
        raise HTTPException(status_code=400, detail=f"Unsupported provider: {data.provider}")
    field, label = _VOICE_FIELDS[data.provider]
    if not getattr(data, field):
        raise HTTPException(status_code=400, detail=f"Missing required field '{field}' for {label}")
    if data.provider == "google-tts":
        try:
            google_tts.language_code_from_voice(data.googleTtsVoiceName)
        except ValueError as e:
            raise HTTPException(
                status_code=400,
                detail=f"Google TTS Error: Invalid voice name format. {e}",
            ) from e


async def _synthesize_chunk(data: AudioChunkRequest) -> bytes:
    if data.provider == "google-tts":
        return await google_tts.synthesize(data.text, data.googleTtsVoiceName)
    if data.provider == "openai":
        return await openai_tts.synthesize(data.text, data.voice, data.model)
    if data.provider == "minimax":
        return await minimax.synthesize(data.text, data.voice, data.model)
    if data.provider == "fishaudio":
        return await fish_audio.synthesize(data.text, data.fishAudioVoiceId, data.fishAudioModel)
    if data.provider == "elevenlabs":
        return await elevenlabs.synthesize(
            data.text,
            data.elevenLabsVoiceId,
            model=data.elevenLabsModelId,
            language_code=data.languageCode,
        )

    result = await voicemaker.synthesize(
        text=data.text,
        voice_id=data.voice,
        engine=data.model or "neural",
        language_code=data.languageCode or "en-US",
    )
    audio, _ = await fetch(result["path"])
    return audio


@router.post("/generate-audio")
async def generate_audio_chunk(data: AudioChunkRequest):
    """Synthesize one text chunk and store it under the user's audio folder."""
    _validate_chunk_request(data)
    logger.info(
        "Audio chunk %d: provider=%s user=%s length=%d",
        data.chunkIndex, data.provider, data.userId, len(data.text),
    )

    try:
        audio = await _synthesize_chunk(data)
        artifact = await persist_bytes(
            audio,
            folder=audio_folder(data.userId),
            extension="mp3",
            content_type="audio/mpeg",
            filename=_chunk_filename(data),
        )
    except ConfigurationError as e:
        return JSONResponse(status_code=500, content=error_body(str(e)))
    except (ProviderError, StorageError, httpx.HTTPError) as e:
        logger.error("Audio chunk %d failed: %s", data.chunkIndex, e)
        return JSONResponse(
            status_code=500,
            content=error_body(f"Failed to generate audio for chunk {data.chunkIndex}: {e}"),
        )

    logger.info("Audio chunk %d uploaded to %s", data.chunkIndex, artifact.path)
    return {"success": True, "audioUrl": artifact.storage_url, "chunkIndex": data.chunkIndex}
