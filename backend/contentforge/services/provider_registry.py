"""Declarative provider registry for the dispatch routes.

One registry per generation feature (text-to-video, image-to-video,
text-to-image) maps a provider key to its display label, the models it
accepts and the sub-route that implements it. The dispatcher validates
against the registry and forwards to ``endpoint``.

Usage:
    from contentforge.services.provider_registry import TEXT_TO_VIDEO
    spec = TEXT_TO_VIDEO.validate("fal", model="hailuo-02-pro")
    spec.endpoint  # "/api/text-to-video/providers/fal"
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from contentforge.services.providers.fal import (
    FAL_IMAGE_TO_VIDEO_MODELS,
    FAL_TEXT_TO_IMAGE_MODELS,
    FAL_TEXT_TO_VIDEO_MODELS,
)
from contentforge.services.providers.google_genai import IMAGEN_MODELS, VEO_MODELS
from contentforge.services.providers.replicate import REPLICATE_VIDEO_MODELS

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Types
# ---------------------------------------------------------------------------

class UnknownProviderError(ValueError):
    """Provider key is not registered for the feature."""

    def __init__(self, provider: str, available: list[str]):
        super().__init__(f"Invalid provider. Available providers: {', '.join(available)}")
        self.provider = provider
        self.available = available


class UnknownModelError(ValueError):
    """Model is not in the provider's allow-list."""

    def __init__(self, provider: str, model: str, available: list[str]):
        super().__init__(
            f"Invalid model for {provider}. Available models: {', '.join(available)}"
        )
        self.provider = provider
        self.model = model
        self.available = available


@dataclass(frozen=True)
class ProviderSpec:
    """Dispatch descriptor for one provider of one feature."""
    name: str
    label: str
    models: tuple[str, ...]
    endpoint: str


# ---------------------------------------------------------------------------
# Registry class
# ---------------------------------------------------------------------------

class DispatchRegistry:
    """In-memory provider table for a single generation feature."""

    def __init__(self, feature: str, default_provider: str) -> None:
        self.feature = feature
        self.default_provider = default_provider
        self._providers: dict[str, ProviderSpec] = {}

    def register(self, spec: ProviderSpec) -> None:
        self._providers[spec.name] = spec

    def get(self, name: str) -> ProviderSpec | None:
        return self._providers.get(name)

    def names(self) -> list[str]:
        """Provider keys in registration order."""
        return list(self._providers)

    def validate(self, provider: Any, model: Any = None) -> ProviderSpec:
        """Return the provider spec or raise UnknownProviderError / UnknownModelError.

        Values arrive straight from request JSON, so non-string keys are
        rejected as unknown rather than looked up.
        """
        spec = self._providers.get(provider) if isinstance(provider, str) else None
        if spec is None:
            raise UnknownProviderError(provider, self.names())
        if model is not None and (not isinstance(model, str) or model not in spec.models):
            raise UnknownModelError(provider, model, list(spec.models))
        return spec

    def to_dict(self) -> dict[str, Any]:
        """Serialize as ``{provider: {name, models, endpoint}}`` for API responses."""
        return {
            spec.name: {
                "name": spec.label,
                "models": list(spec.models),
                "endpoint": spec.endpoint,
            }
            for spec in self._providers.values()
        }


# ---------------------------------------------------------------------------
# Build the registries
# ---------------------------------------------------------------------------

TEXT_TO_VIDEO = DispatchRegistry("text-to-video", default_provider="replicate")
TEXT_TO_VIDEO.register(ProviderSpec(
    "replicate", "Replicate",
    tuple(REPLICATE_VIDEO_MODELS),
    "/api/text-to-video/providers/replicate",
))
TEXT_TO_VIDEO.register(ProviderSpec(
    "fal", "FAL AI",
    tuple(FAL_TEXT_TO_VIDEO_MODELS),
    "/api/text-to-video/providers/fal",
))
TEXT_TO_VIDEO.register(ProviderSpec(
    "google", "Google GenAI (Veo)",
    tuple(VEO_MODELS),
    "/api/text-to-video/providers/google",
))

IMAGE_TO_VIDEO = DispatchRegistry("image-to-video", default_provider="replicate")
IMAGE_TO_VIDEO.register(ProviderSpec(
    "replicate", "Replicate",
    tuple(REPLICATE_VIDEO_MODELS),
    "/api/image-to-video/providers/replicate",
))
IMAGE_TO_VIDEO.register(ProviderSpec(
    "fal", "FAL AI",
    tuple(FAL_IMAGE_TO_VIDEO_MODELS),
    "/api/image-to-video/providers/fal",
))
IMAGE_TO_VIDEO.register(ProviderSpec(
    "google", "Google GenAI (Veo)",
    tuple(VEO_MODELS),
    "/api/image-to-video/providers/google",
))

TEXT_TO_IMAGE = DispatchRegistry("text-to-image", default_provider="google")
TEXT_TO_IMAGE.register(ProviderSpec(
    "google", "Google GenAI",
    tuple(IMAGEN_MODELS),
    "/api/text-to-image/providers/google",
))
TEXT_TO_IMAGE.register(ProviderSpec(
    "fal", "FAL AI",
    tuple(FAL_TEXT_TO_IMAGE_MODELS),
    "/api/text-to-image/providers/fal",
))

REGISTRIES: dict[str, DispatchRegistry] = {
    r.feature: r for r in (TEXT_TO_VIDEO, IMAGE_TO_VIDEO, TEXT_TO_IMAGE)
}
