from __future__ import annotations

from typing import Protocol, runtime_checkable

from .image_fetcher import IImageFetcher
from .vision_model import IVisionModel


@runtime_checkable
class IMetadataAdapters(Protocol):
    fetcher: IImageFetcher
    vision_model: IVisionModel
