from __future__ import annotations
"""Request/response schemas for the provider generation routes.

Required fields are declared optional here and checked by the routes, so a
missing prompt or image is reported as a 400 with a readable message.
"""

from pydantic import BaseModel, Field


class FalTextToVideoRequest(BaseModel):
    prompt: str | None = None
    model: str = "hailuo-02-pro"
    duration: int = 5
    aspect_ratio: str = "16:9"
    fps: int | None = 24
    seed: int | None = None


class FalImageToVideoRequest(BaseModel):
    prompt: str | None = None
    image_url: str | None = None
    model: str = "wan-v2.2-5b"
    duration: int = 5
    fps: int | None = 24
    seed: int | None = None


class FalTextToImageRequest(BaseModel):
    prompt: str | None = None
    model: str = "flux-dev"
    aspect_ratio: str = "16:9"


class ReplicateTextToVideoRequest(BaseModel):
    prompt: str | None = None
    duration: int = 5
    model: str = "bytedance/seedance-1-lite"


class ReplicateImageToVideoRequest(ReplicateTextToVideoRequest):
    image: str | None = Field(None, description="Base64 image or data URL")


class GoogleTextToVideoRequest(BaseModel):
    prompt: str | None = None
    model: str = "veo-3.0-generate-preview"


class GoogleImageToVideoRequest(GoogleTextToVideoRequest):
    image_url: str | None = None


class GoogleTextToImageRequest(BaseModel):
    prompt: str | None = None
    model: str = "imagen-3.0-generate-002"
    aspect_ratio: str | None = None

