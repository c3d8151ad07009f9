"""
Output languages supported by the vision model
"""

from types import MappingProxyType
from typing import Mapping, Optional

DEFAULT_LANGUAGE = "en"

LANGUAGES: Mapping[str, str] = MappingProxyType(
    {
        "en": "English",
        "de": "German",
        "fr": "French",
        "it": "Italian",
        "pt": "Portuguese",
        "hi": "Hindi",
        "es": "Spanish",
        "th": "Thai",
        "ja": "Japanese",
        "ko": "Korean",
        "zh": "Chinese",
    }
)


def resolve_language_code(code: Optional[str]) -> str:
    """Return `code` if supported, else the default (English). Never raises."""
    if code and code in LANGUAGES:
        return code
    return DEFAULT_LANGUAGE


def resolve_language_name(code: Optional[str]) -> str:
    return LANGUAGES[resolve_language_code(code)]
