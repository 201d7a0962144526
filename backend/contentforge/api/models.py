"""Model listing API: script-writing LLMs and generation providers."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter

from contentforge.services.provider_registry import REGISTRIES

router = APIRouter(prefix="/models", tags=["Models"])

LLM_MODELS: list[dict[str, str]] = [
    {"id": "gpt-5", "owned_by": "openai"},
    {"id": "gpt-5-mini", "owned_by": "openai"},
    {"id": "gpt-5-nano", "owned_by": "openai"},
    {"id": "gpt-4o", "owned_by": "openai"},
    {"id": "gpt-4o-mini", "owned_by": "openai"},
    {"id": "gpt-4.1", "owned_by": "openai"},
    {"id": "gpt-4.1-mini", "owned_by": "openai"},
    {"id": "gpt-4.1-nano", "owned_by": "openai"},
    {"id": "claude-opus-4-20250514", "owned_by": "anthropic"},
    {"id": "claude-sonnet-4-20250514", "owned_by": "anthropic"},
    {"id": "claude-3-7-sonnet-20250219", "owned_by": "anthropic"},
]


@router.get("")
async def list_llm_models() -> list[dict[str, str]]:
    """Static list of LLM ids offered for script writing."""
    return LLM_MODELS


@router.get("/generation")
async def list_generation_models() -> dict[str, Any]:
    """All generation features with their providers and allowed models."""
    return {feature: registry.to_dict() for feature, registry in REGISTRIES.items()}
