from __future__ import annotations

from typing import Any, List, Mapping, Protocol

from app.application.models import ImagePayload


class IVisionModel(Protocol):
    """External vision-language model capability.

    Implementations serialize the image into whatever transport form their
    backend expects and return the raw reply, normally a wrapper mapping
    with a ``response`` key holding either an object or text.
    """

    provider: str

    async def run(self, messages: List[Mapping[str, str]], image: ImagePayload) -> Any:
        ...
