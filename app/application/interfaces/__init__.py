from .image_fetcher import FetchedResource, IImageFetcher
from .vision_model import IVisionModel
from .metadata_adapters import IMetadataAdapters

__all__ = [
    "FetchedResource",
    "IImageFetcher",
    "IVisionModel",
    "IMetadataAdapters",
]
