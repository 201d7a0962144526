from __future__ import annotations
"""Saved prompt CRUD API endpoints."""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from contentforge.database import get_db
from contentforge.models.prompt import Prompt
from contentforge.schemas.prompt import PromptRead, PromptWrite

router = APIRouter()


def _clean(value: str | None) -> str | None:
    """Trim a string; blank becomes None."""
    if value is None:
        return None
    return value.strip() or None


def _apply(prompt: Prompt, data: PromptWrite) -> None:
    if not data.prompt or not data.prompt.strip():
        raise HTTPException(status_code=400, detail="Prompt name is required")
    prompt.prompt = data.prompt.strip()
    prompt.title = _clean(data.title)
    prompt.theme = _clean(data.theme)
    prompt.audience = _clean(data.audience)
    prompt.additional_context = _clean(data.additional_context)
    prompt.pov = data.pov or None
    prompt.format = data.format or None


@router.get("", response_model=list[PromptRead])
async def list_prompts(db: AsyncSession = Depends(get_db)):
    """List all prompts (newest first)."""
    result = await db.execute(select(Prompt).order_by(Prompt.created_at.desc(), Prompt.id.desc()))
    return result.scalars().all()


@router.post("", response_model=PromptRead, status_code=201)
async def create_prompt(data: PromptWrite, db: AsyncSession = Depends(get_db)):
    prompt = Prompt()
    _apply(prompt, data)
    db.add(prompt)
    await db.flush()
    await db.refresh(prompt)
    return prompt


@router.patch("", response_model=PromptRead)
async def update_prompt(
    data: PromptWrite,
    id: int | None = None,
    db: AsyncSession = Depends(get_db),
):
    """Replace a prompt's fields (``?id=``)."""
    if id is None:
        raise HTTPException(status_code=400, detail="Prompt ID is required")
    prompt = await db.get(Prompt, id)
    if not prompt:
        raise HTTPException(status_code=404, detail="Prompt not found")

    _apply(prompt, data)
    await db.flush()
    await db.refresh(prompt)
    return prompt


@router.delete("")
async def delete_prompt(id: int | None = None, db: AsyncSession = Depends(get_db)):
    if id is None:
        raise HTTPException(status_code=400, detail="Prompt ID is required")
    prompt = await db.get(Prompt, id)
    if prompt:
        await db.delete(prompt)
    return {"success": True}
