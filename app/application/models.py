from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Union


class MetadataKind(str, Enum):
    """Requested output kind; the value is the endpoint path segment."""

    METADATA = "optimize"
    ALT_TEXT = "alt-text"
    CAPTION = "caption"
    DESCRIPTION = "description"
    FOCUS_KEYWORD = "focus-keyword"
    TITLE = "title"
    FILENAME = "filename"


@dataclass(frozen=True, slots=True)
class ImagePayload:
    """Raw image bytes plus the media type they were declared with."""

    data: bytes = field(repr=False)
    content_type: str = ""

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass(frozen=True, slots=True)
class StructuredOutcome:
    data: Dict[str, Any]


@dataclass(frozen=True, slots=True)
class TextOutcome:
    text: str


ModelOutcome = Union[StructuredOutcome, TextOutcome]


_TEXT_OPTIONS = ("keyword", "context", "tone", "prefix", "suffix")
_FALSE_VALUES = {"0", "false", "no", "off"}


def _as_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value)
    return text if text.strip() else None


def _as_flag(value: Any, default: bool) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() not in _FALSE_VALUES


@dataclass(frozen=True, slots=True)
class GenerationOptions:
    """Optional steering for the full-metadata prompt."""

    keyword: Optional[str] = None
    context: Optional[str] = None
    tone: Optional[str] = None
    prefix: Optional[str] = None
    suffix: Optional[str] = None
    tags: bool = True

    @classmethod
    def from_sources(
        cls,
        body: Optional[Mapping[str, Any]] = None,
        query: Optional[Mapping[str, Any]] = None,
    ) -> "GenerationOptions":
        """Merge options from a JSON body and query parameters; body wins."""
        body = body or {}
        query = query or {}
        values: Dict[str, Any] = {}
        for name in _TEXT_OPTIONS:
            values[name] = _as_text(body.get(name)) or _as_text(query.get(name))
        raw_tags = body.get("tags") if body.get("tags") is not None else query.get("tags")
        values["tags"] = _as_flag(raw_tags, default=True)
        return cls(**values)
