from __future__ import annotations
"""Pydantic v2 schemas for VideoRecord model."""

from datetime import datetime

from pydantic import BaseModel, Field


class VideoRecordCreate(BaseModel):
    """Schema for saving a generated video to the caller's history."""

    video_url: str = Field(..., min_length=1, max_length=2048)
    origin_url: str | None = None
    provider: str | None = None
    model: str | None = None
    prompt: str | None = None
    content_type: str = "video/mp4"
    size: int | None = Field(None, ge=0)


class VideoRecordRead(BaseModel):
    id: str
    user_id: str
    provider: str | None = None
    model: str | None = None
    prompt: str | None = None
    origin_url: str | None = None
    video_url: str
    content_type: str
    size: int | None = None
    created_at: datetime | None = None

    model_config = {"from_attributes": True}
