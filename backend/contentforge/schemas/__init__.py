"""Pydantic v2 schemas package."""

from contentforge.schemas.ai_voice import AIVoiceCreate, AIVoiceRead, AIVoiceUpdate
from contentforge.schemas.audio import AudioChunkRequest, VoiceListRequest, VoiceMakerAudioRequest
from contentforge.schemas.generation import (
    FalImageToVideoRequest,
    FalTextToImageRequest,
    FalTextToVideoRequest,
    GoogleImageToVideoRequest,
    GoogleTextToImageRequest,
    GoogleTextToVideoRequest,
    ReplicateImageToVideoRequest,
    ReplicateTextToVideoRequest,
)
from contentforge.schemas.prompt import PromptRead, PromptWrite
from contentforge.schemas.video_record import VideoRecordCreate, VideoRecordRead

__all__ = [
    "AIVoiceCreate",
    "AIVoiceRead",
    "AIVoiceUpdate",
    "AudioChunkRequest",
    "VoiceListRequest",
    "VoiceMakerAudioRequest",
    "FalImageToVideoRequest",
    "FalTextToImageRequest",
    "FalTextToVideoRequest",
    "GoogleImageToVideoRequest",
    "GoogleTextToImageRequest",
    "GoogleTextToVideoRequest",
    "ReplicateImageToVideoRequest",
    "ReplicateTextToVideoRequest",
    "PromptRead",
    "PromptWrite",
    "VideoRecordCreate",
    "VideoRecordRead",
]
