from __future__ import annotations

import logging
from typing import Any, List, Mapping, Optional

import aiohttp

from app.application.interfaces import IVisionModel
from app.application.models import ImagePayload
from app.core.config import settings
from app.core.exceptions import ModelInvocationError

logger = logging.getLogger(__name__)


class WorkersAIVisionModel(IVisionModel):
    """Cloudflare Workers AI vision model over its REST API.

    The image travels as a JSON array of byte values, which is what the
    llama-3.2 vision models accept. The returned value is the ``result``
    object of the API envelope, i.e. ``{"response": ...}``.
    """

    provider = "workers_ai"

    def __init__(
        self,
        *,
        account_id: Optional[str] = None,
        api_token: Optional[str] = None,
        model: Optional[str] = None,
        max_tokens: Optional[int] = None,
    ) -> None:
        self._account_id = account_id or settings.cloudflare_account_id
        self._api_token = api_token or settings.cloudflare_api_token
        self._model = model or settings.workers_ai_model
        self._max_tokens = max_tokens or settings.workers_ai_max_tokens

    @property
    def run_url(self) -> str:
        base = settings.workers_ai_base_url.rstrip("/")
        return f"{base}/accounts/{self._account_id}/ai/run/{self._model}"

    async def run(self, messages: List[Mapping[str, str]], image: ImagePayload) -> Any:
        if not self._account_id or not self._api_token:
            raise ModelInvocationError(
                "Workers AI is not configured: set CLOUDFLARE_ACCOUNT_ID and CLOUDFLARE_API_TOKEN",
                self.provider,
            )

        payload = {
            "messages": list(messages),
            "image": list(image.data),
            "max_tokens": self._max_tokens,
        }
        headers = {"Authorization": f"Bearer {self._api_token}"}
        logger.info("Calling Workers AI model %s", self._model)

        try:
            async with aiohttp.ClientSession() as session:
                async with session.post(self.run_url, json=payload, headers=headers) as response:
                    body = await response.json(content_type=None)
                    if not isinstance(body, dict):
                        raise ValueError(f"unexpected body type {type(body).__name__}")
                    if response.status >= 400 or not body.get("success", False):
                        errors = body.get("errors") or response.reason
                        raise ModelInvocationError(
                            f"Workers AI request failed ({response.status}): {errors}",
                            self.provider,
                        )
        except aiohttp.ClientError as e:
            raise ModelInvocationError(f"Workers AI request failed: {e}", self.provider) from e
        except ValueError as e:
            raise ModelInvocationError(
                f"Workers AI returned an unreadable response: {e}", self.provider
            ) from e

        return body.get("result")
