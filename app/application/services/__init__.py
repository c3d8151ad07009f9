from .image_acquirer import ImageAcquirer
from .model_invoker import ModelInvoker, to_outcome
from .prompt_builder import build_prompts
from .response_normalizer import (
    extension_for,
    normalize_metadata,
    outcome_text,
    slugify_filename,
)

__all__ = [
    "ImageAcquirer",
    "ModelInvoker",
    "to_outcome",
    "build_prompts",
    "extension_for",
    "normalize_metadata",
    "outcome_text",
    "slugify_filename",
]
