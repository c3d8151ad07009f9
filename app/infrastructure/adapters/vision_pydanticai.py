from __future__ import annotations

import logging
import os
from typing import Any, List, Mapping, Optional

from pydantic_ai import Agent, BinaryContent  # type: ignore

from app.application.interfaces import IVisionModel
from app.application.models import ImagePayload
from app.core.config import settings
from app.core.exceptions import ModelInvocationError

logger = logging.getLogger(__name__)

FALLBACK_MEDIA_TYPE = "image/jpeg"


def image_media_type(content_type: str) -> str:
    """Media type to declare to the model; generic binary is sent as JPEG."""
    media_type = (content_type or "").split(";", 1)[0].strip().lower()
    return media_type if media_type.startswith("image/") else FALLBACK_MEDIA_TYPE


class PydanticAIVisionModel(IVisionModel):
    """Vision model implemented via pydantic-ai + OpenAI model.

    The agent is created per call because the system prompt differs per
    request kind. The text output is wrapped as ``{"response": text}`` so it
    matches the reply shape of the other providers.
    """

    provider = "openai"

    def __init__(self, model_name: Optional[str] = None, api_key: Optional[str] = None) -> None:
        self._model_name = model_name or settings.ai_pydantic_model
        self._api_key = api_key or settings.openai_api_key
        if self._api_key:
            os.environ.setdefault("OPENAI_API_KEY", self._api_key)

    async def run(self, messages: List[Mapping[str, str]], image: ImagePayload) -> Any:
        if not self._api_key:
            raise ModelInvocationError(
                "OpenAI is not configured: set OPENAI_API_KEY", self.provider
            )

        system_prompt = "\n".join(m["content"] for m in messages if m["role"] == "system")
        user_prompt = "\n".join(m["content"] for m in messages if m["role"] == "user")

        logger.info("PydanticAIVisionModel: running agent with model=%s", self._model_name)
        agent = Agent(self._model_name, output_type=str, system_prompt=system_prompt)
        result = await agent.run(
            [
                user_prompt,
                BinaryContent(data=image.data, media_type=image_media_type(image.content_type)),
            ]
        )
        return {"response": result.output}
