from __future__ import annotations
"""Pydantic v2 schemas for the audio generation routes."""

from pydantic import BaseModel


class VoiceMakerAudioRequest(BaseModel):
    """Body of POST /api/voicemaker/generate-audio (camelCase, as sent by the UI)."""

    sectionId: str | None = None
    text: str | None = None
    voiceId: str | None = None
    engine: str = "neural"
    languageCode: str = "en-US"
    outputFormat: str = "mp3"
    sampleRate: str = "48000"
    effect: str = "default"
    masterVolume: str = "0"
    masterSpeed: str = "0"
    masterPitch: str = "0"


class VoiceListRequest(BaseModel):
    language: str = "en-US"


class AudioChunkRequest(BaseModel):
    """Body of POST /api/generate-audio: one text chunk for one provider."""

    text: str | None = None
    provider: str | None = None
    voice: str | None = None
    model: str | None = None
    languageCode: str | None = None
    googleTtsVoiceName: str | None = None
    fishAudioVoiceId: str | None = None
    fishAudioModel: str | None = None
    elevenLabsVoiceId: str | None = None
    elevenLabsModelId: str | None = None
    userId: str = "unknown_user"
    chunkIndex: int = 0
