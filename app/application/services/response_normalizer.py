from __future__ import annotations

import json
import logging
import re
from typing import Any, Dict, Optional, Tuple

from app.application.models import ModelOutcome, StructuredOutcome
from app.core.exceptions import MalformedModelOutputError

logger = logging.getLogger(__name__)

# Checked in order against the lowercased content type; first hit wins.
EXTENSION_RULES: Tuple[Tuple[str, str], ...] = (
    ("png", "png"),
    ("webp", "webp"),
    ("gif", "gif"),
    ("avif", "avif"),
)
DEFAULT_EXTENSION = "jpg"

FOCUS_KEYWORD = "focus-keyword"
FOCUS_KEYWORD_ALIASES: Tuple[str, ...] = ("focus_keyword", "keyword")

_DISALLOWED_CHARS = re.compile(r"[^a-z0-9\s-]")
_WHITESPACE_RUN = re.compile(r"\s+")
_HYPHEN_RUN = re.compile(r"-+")


def extension_for(content_type: Optional[str]) -> str:
    """Map a media type to a file extension; anything unrecognized is jpg."""
    ct = (content_type or "").lower()
    for needle, extension in EXTENSION_RULES:
        if needle in ct:
            return extension
    return DEFAULT_EXTENSION


def outcome_text(outcome: ModelOutcome) -> str:
    """Text view of an outcome; structured replies become compact JSON."""
    if isinstance(outcome, StructuredOutcome):
        return json.dumps(outcome.data, ensure_ascii=False, separators=(",", ":"))
    return outcome.text


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Non-standard JSON constant: {name}")


def extract_json_object(text: str) -> Dict[str, Any]:
    """Parse the outermost {...} region of a possibly noisy model reply.

    ``NaN`` and ``Infinity`` constants count as malformed output.
    """
    start = text.find("{")
    end = text.rfind("}")
    candidate = text[start : end + 1] if start != -1 and end != -1 else text
    try:
        parsed = json.loads(candidate, parse_constant=_reject_constant)
    except ValueError as e:
        logger.warning("Model output is not valid JSON: %s", e)
        raise MalformedModelOutputError(text) from e
    if not isinstance(parsed, dict):
        logger.warning("Model output parsed to %s, expected an object", type(parsed).__name__)
        raise MalformedModelOutputError(text)
    return parsed


def normalize_metadata(outcome: ModelOutcome, content_type: Optional[str]) -> Dict[str, Any]:
    """Turn a full-metadata reply into the public result shape.

    - a string ``filename`` gets ``.<ext>`` appended unless already present;
      a missing or null filename stays missing
    - ``focus-keyword`` is back-filled from ``focus_keyword`` then ``keyword``,
      and both aliases are always dropped
    - every other field is passed through untouched
    """
    if isinstance(outcome, StructuredOutcome):
        result = dict(outcome.data)
    else:
        result = extract_json_object(outcome.text)

    extension = extension_for(content_type)
    if "filename" in result and result["filename"] is None:
        del result["filename"]
    filename = result.get("filename")
    if isinstance(filename, str) and not filename.endswith(f".{extension}"):
        result["filename"] = f"{filename}.{extension}"

    if FOCUS_KEYWORD not in result:
        for alias in FOCUS_KEYWORD_ALIASES:
            if result.get(alias) is not None:
                result[FOCUS_KEYWORD] = result[alias]
                break
    for alias in FOCUS_KEYWORD_ALIASES:
        result.pop(alias, None)

    return result


def slugify_filename(text: str, content_type: Optional[str]) -> str:
    """Lowercase, hyphen-separated ``[a-z0-9-]`` slug plus the derived extension."""
    slug = text.strip().lower()
    slug = _DISALLOWED_CHARS.sub("", slug)
    slug = _WHITESPACE_RUN.sub("-", slug)
    slug = _HYPHEN_RUN.sub("-", slug)
    return f"{slug}.{extension_for(content_type)}"
