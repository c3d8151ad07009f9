from .image_fetcher_aiohttp import AiohttpImageFetcher
from .vision_workers_ai import WorkersAIVisionModel
from .vision_pydanticai import PydanticAIVisionModel

__all__ = [
    "AiohttpImageFetcher",
    "WorkersAIVisionModel",
    "PydanticAIVisionModel",
]
