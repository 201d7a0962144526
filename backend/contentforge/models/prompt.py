from __future__ import annotations
"""Prompt ORM model: saved script-generation prompts."""

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from contentforge.database import Base


class Prompt(Base):
    """A reusable prompt with the audience/theme context it was written for."""

    __tablename__ = "prompts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    prompt: Mapped[str] = mapped_column(Text, nullable=False)
    title: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    theme: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    audience: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    additional_context: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    pov: Mapped[Optional[str]] = mapped_column("POV", String(100), nullable=True)
    format: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
