from __future__ import annotations

import logging
import time
from typing import Any, Mapping

from app.application.interfaces import IVisionModel
from app.application.models import ImagePayload, ModelOutcome, StructuredOutcome, TextOutcome
from app.core.exceptions import ModelInvocationError

logger = logging.getLogger(__name__)

RESPONSE_KEY = "response"


def to_outcome(raw: Any) -> ModelOutcome:
    """Collapse the model's reply into a structured or a text outcome.

    A mapping without a ``response`` key is taken as the structured answer
    itself. Otherwise the nested ``response`` value (or the bare reply) is
    unwrapped: objects stay structured, ``None``/empty become ``""`` and
    everything else is stringified and stripped.
    """
    if isinstance(raw, Mapping):
        if RESPONSE_KEY not in raw:
            return StructuredOutcome(dict(raw))
        nested = raw[RESPONSE_KEY]
    else:
        nested = raw

    if isinstance(nested, Mapping):
        return StructuredOutcome(dict(nested))
    if nested is None or nested == "":
        return TextOutcome("")
    return TextOutcome(str(nested).strip())


class ModelInvoker:
    """Single-attempt call of the vision model with reply-shape normalization."""

    def __init__(self, model: IVisionModel) -> None:
        self._model = model

    async def invoke(
        self, system_prompt: str, user_prompt: str, image: ImagePayload
    ) -> ModelOutcome:
        messages = [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_prompt},
        ]
        provider = getattr(self._model, "provider", type(self._model).__name__)
        start = time.perf_counter()
        try:
            raw = await self._model.run(messages, image)
        except ModelInvocationError:
            logger.error("Vision model %s failed after %.2fs", provider, time.perf_counter() - start)
            raise
        except Exception as e:  # noqa: BLE001
            logger.error("Vision model %s raised %r", provider, e)
            raise ModelInvocationError(f"Model invocation failed: {e}", provider) from e

        logger.info(
            "Vision model %s answered in %.2fs", provider, time.perf_counter() - start
        )
        return to_outcome(raw)
