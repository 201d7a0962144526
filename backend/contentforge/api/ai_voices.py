from __future__ import annotations
"""Curated TTS voice CRUD API endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from contentforge.database import get_db
from contentforge.models.ai_voice import AIVoice
from contentforge.schemas.ai_voice import AIVoiceCreate, AIVoiceRead, AIVoiceUpdate

logger = logging.getLogger(__name__)

router = APIRouter()

DUPLICATE_MESSAGE = "A voice with this voice_id already exists for this provider"


async def _ensure_unique(
    db: AsyncSession,
    provider: str,
    voice_id: str,
    exclude_id: int | None = None,
) -> None:
    query = select(AIVoice.id).where(
        AIVoice.provider == provider,
        AIVoice.voice_id == voice_id,
    )
    if exclude_id is not None:
        query = query.where(AIVoice.id != exclude_id)
    if (await db.execute(query)).first() is not None:
        raise HTTPException(status_code=409, detail=DUPLICATE_MESSAGE)


async def _flush_unique(db: AsyncSession) -> None:
    """Flush pending changes; a concurrent insert of the same voice is a 409."""
    try:
        await db.flush()
    except IntegrityError as e:
        await db.rollback()
        logger.warning("Voice uniqueness violated on flush: %s", e.orig)
        raise HTTPException(status_code=409, detail=DUPLICATE_MESSAGE) from e


def _serialize(voice: AIVoice) -> dict:
    return AIVoiceRead.model_validate(voice).model_dump(mode="json")


@router.get("")
async def list_voices(provider: str | None = None, db: AsyncSession = Depends(get_db)):
    """List voices ordered by provider then name, optionally for one provider."""
    query = select(AIVoice).order_by(AIVoice.provider.asc(), AIVoice.name.asc())
    if provider:
        query = query.where(AIVoice.provider == provider)
    result = await db.execute(query)
    return {"voices": [_serialize(v) for v in result.scalars().all()]}


@router.post("", status_code=201)
async def create_voice(data: AIVoiceCreate, db: AsyncSession = Depends(get_db)):
    if not data.name or not data.provider or not data.voice_id:
        raise HTTPException(
            status_code=400,
            detail="Missing required fields: name, provider, and voice_id are required",
        )
    await _ensure_unique(db, data.provider, data.voice_id)

    voice = AIVoice(name=data.name, provider=data.provider, voice_id=data.voice_id)
    db.add(voice)
    await _flush_unique(db)
    await db.refresh(voice)
    logger.info("Created voice %s/%s", voice.provider, voice.voice_id)
    return {"voice": _serialize(voice)}


@router.put("")
async def update_voice(data: AIVoiceUpdate, db: AsyncSession = Depends(get_db)):
    if not data.id or not data.name or not data.provider or not data.voice_id:
        raise HTTPException(
            status_code=400,
            detail="Missing required fields: id, name, provider, and voice_id are required",
        )
    await _ensure_unique(db, data.provider, data.voice_id, exclude_id=data.id)

    voice = await db.get(AIVoice, data.id)
    if not voice:
        raise HTTPException(status_code=404, detail="AI voice not found")

    voice.name = data.name
    voice.provider = data.provider
    voice.voice_id = data.voice_id
    await _flush_unique(db)
    await db.refresh(voice)
    return {"voice": _serialize(voice)}


@router.delete("")
async def delete_voice(id: int | None = None, db: AsyncSession = Depends(get_db)):
    if id is None:
        raise HTTPException(status_code=400, detail="Missing required parameter: id")
    voice = await db.get(AIVoice, id)
    if voice:
        await db.delete(voice)
    return {"message": "AI voice deleted successfully"}
