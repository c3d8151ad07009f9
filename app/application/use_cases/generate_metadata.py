from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional

from app.application.interfaces import IMetadataAdapters
from app.application.models import GenerationOptions, ImagePayload, MetadataKind
from app.application.services import (
    ImageAcquirer,
    ModelInvoker,
    build_prompts,
    normalize_metadata,
    outcome_text,
    slugify_filename,
)
from app.core.exceptions import EmptyImageError

logger = logging.getLogger(__name__)


class GenerateMetadataUseCase:
    """Acquire -> prompt -> invoke -> normalize, for one request of one kind.

    Stateless; a new instance per request is fine. Failures propagate as
    ``ImageMetadataError`` subclasses and are rendered by the presentation
    layer.
    """

    def __init__(self, adapters: IMetadataAdapters) -> None:
        self._acquirer = ImageAcquirer(adapters.fetcher)
        self._invoker = ModelInvoker(adapters.vision_model)

    async def execute(
        self,
        kind: MetadataKind,
        *,
        content_type: Optional[str],
        body: bytes,
        language: Optional[str] = None,
        query: Optional[Mapping[str, Any]] = None,
    ) -> Dict[str, Any]:
        payload, document = await self._acquirer.acquire(content_type, body)
        if payload.size == 0:
            raise EmptyImageError()

        options = GenerationOptions.from_sources(document, query)
        system_prompt, user_prompt = build_prompts(kind, language, options)
        logger.debug(
            "Generating %s for %d-byte %s image", kind.value, payload.size, payload.content_type
        )
        outcome = await self._invoker.invoke(system_prompt, user_prompt, payload)
        return self._shape(kind, outcome, payload)

    @staticmethod
    def _shape(kind: MetadataKind, outcome, payload: ImagePayload) -> Dict[str, Any]:
        if kind is MetadataKind.METADATA:
            return normalize_metadata(outcome, payload.content_type)
        if kind is MetadataKind.FILENAME:
            return {"result": slugify_filename(outcome_text(outcome), payload.content_type)}
        return {"result": outcome_text(outcome)}
