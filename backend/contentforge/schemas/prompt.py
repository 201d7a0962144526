from __future__ import annotations
"""Pydantic v2 schemas for Prompt model."""

from datetime import datetime

from pydantic import AliasChoices, BaseModel, Field


class PromptWrite(BaseModel):
    """Schema for creating or replacing a prompt.

    ``prompt`` is validated by the route so a blank value yields a 400
    rather than a schema error.
    """

    prompt: str | None = None
    title: str | None = None
    theme: str | None = None
    audience: str | None = None
    additional_context: str | None = None
    pov: str | None = Field(None, validation_alias=AliasChoices("POV", "pov"))
    format: str | None = None


class PromptRead(BaseModel):
    """Schema for reading a prompt."""

    id: int
    prompt: str
    title: str | None = None
    theme: str | None = None
    audience: str | None = None
    additional_context: str | None = None
    pov: str | None = Field(None, serialization_alias="POV")
    format: str | None = None
    created_at: datetime | None = None

    model_config = {"from_attributes": True}
