from __future__ import annotations
"""AIVoice ORM model: TTS voices curated per provider."""

from datetime import datetime

from sqlalchemy import DateTime, Integer, String, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column

from contentforge.database import Base


class AIVoice(Base):
    """A named voice exposed by a TTS provider (voicemaker, google-tts, ...)."""

    __tablename__ = "ai_voices"
    __table_args__ = (
        UniqueConstraint("provider", "voice_id", name="uq_ai_voices_provider_voice"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    provider: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    voice_id: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
