from __future__ import annotations
"""Pydantic v2 schemas for AIVoice model."""

from datetime import datetime

from pydantic import BaseModel


class AIVoiceCreate(BaseModel):
    """Schema for creating a voice; missing fields are reported as 400 by the route."""

    name: str | None = None
    provider: str | None = None
    voice_id: str | None = None


class AIVoiceUpdate(AIVoiceCreate):
    id: int | None = None


class AIVoiceRead(BaseModel):
    id: int
    name: str
    provider: str
    voice_id: str
    created_at: datetime | None = None

    model_config = {"from_attributes": True}
