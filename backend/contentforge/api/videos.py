from __future__ import annotations
"""Per-user saved video records."""

import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from contentforge.database import get_db
from contentforge.models.video_record import VideoRecord
from contentforge.schemas.video_record import VideoRecordCreate, VideoRecordRead
from contentforge.services.auth import AuthUser, bearer, get_current_user, resolve_user

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/videos", response_model=list[VideoRecordRead])
async def list_videos(
    user: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """List the caller's videos (newest first)."""
    result = await db.execute(
        select(VideoRecord)
        .where(VideoRecord.user_id == user.id)
        .order_by(VideoRecord.created_at.desc())
    )
    return result.scalars().all()


@router.post("/videos", response_model=VideoRecordRead, status_code=201)
async def create_video(
    data: VideoRecordCreate,
    user: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Save a generated video to the caller's history."""
    record = VideoRecord(user_id=user.id, **data.model_dump())
    db.add(record)
    await db.flush()
    await db.refresh(record)
    return record


@router.delete("/delete-video")
async def delete_video(
    videoId: str | None = None,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer),
    db: AsyncSession = Depends(get_db),
):
    """Delete one of the caller's videos (``?videoId=``)."""
    if not videoId:
        raise HTTPException(status_code=400, detail="Video ID is required")
    user = await resolve_user(credentials)

    result = await db.execute(
        select(VideoRecord).where(
            VideoRecord.id == videoId,
            VideoRecord.user_id == user.id,
        )
    )
    record = result.scalar_one_or_none()
    if record is None:
        raise HTTPException(status_code=404, detail="Video not found or access denied")

    await db.delete(record)
    logger.info("User %s deleted video %s", user.id, videoId)
    return {"success": True, "message": "Video deleted successfully", "videoId": videoId}
