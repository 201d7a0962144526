"""ORM model package: registers all models with Base.metadata."""

from contentforge.models.ai_voice import AIVoice
from contentforge.models.prompt import Prompt
from contentforge.models.video_record import VideoRecord

__all__ = [
    "AIVoice",
    "Prompt",
    "VideoRecord",
]
