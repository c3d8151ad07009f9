from __future__ import annotations

from types import SimpleNamespace
from typing import Optional

from app.application.interfaces import IMetadataAdapters, IVisionModel
from app.infrastructure.adapters import (
    AiohttpImageFetcher,
    PydanticAIVisionModel,
    WorkersAIVisionModel,
)
from app.core.config import settings


def get_vision_model(provider: Optional[str] = None) -> IVisionModel:
    """Pick the vision model adapter named by settings.vision_provider."""
    provider = provider or settings.vision_provider
    if provider == "openai":
        return PydanticAIVisionModel()
    if provider == "workers_ai":
        return WorkersAIVisionModel()
    raise ValueError(f"Unknown vision provider: {provider}")


def get_metadata_adapter_bundle(*, provider: Optional[str] = None) -> IMetadataAdapters:
    """Provide the adapters container for the metadata use case."""
    return SimpleNamespace(
        fetcher=AiohttpImageFetcher(),
        vision_model=get_vision_model(provider),
    )
