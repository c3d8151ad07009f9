from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional, Tuple
from urllib.parse import urlsplit

from app.application.interfaces import IImageFetcher
from app.application.models import ImagePayload
from app.core.config import settings
from app.core.exceptions import (
    InvalidRequestBodyError,
    InvalidUrlError,
    MissingFieldError,
    NotAnImageError,
    PayloadTooLargeError,
    UnsupportedContentTypeError,
    UnsupportedProtocolError,
    UpstreamFetchError,
)

logger = logging.getLogger(__name__)

JSON_MEDIA_TYPE = "application/json"
OCTET_STREAM = "application/octet-stream"
ALLOWED_SCHEMES = ("http", "https")


def is_image_content_type(content_type: Optional[str]) -> bool:
    ct = (content_type or "").strip().lower()
    return ct.startswith("image/") or OCTET_STREAM in ct


class ImageAcquirer:
    """Resolve image bytes from a JSON body carrying a URL or a raw binary body.

    URL mode is selected by a JSON content type, binary mode by ``image/*`` or
    ``application/octet-stream``; matching is case-insensitive. The size
    policy is applied after either mode. Empty payloads are *not* rejected
    here; the caller reports those as a client error.
    """

    def __init__(self, fetcher: IImageFetcher, *, max_size: Optional[int] = None) -> None:
        self._fetcher = fetcher
        self._max_size = max_size if max_size is not None else settings.max_image_size

    async def acquire(
        self, content_type: Optional[str], body: bytes
    ) -> Tuple[ImagePayload, Dict[str, Any]]:
        """Return the payload and the parsed JSON body ({} in binary mode)."""
        declared = content_type or ""
        normalized = declared.lower()

        if JSON_MEDIA_TYPE in normalized:
            document = self._parse_body(body)
            payload = await self._from_url(document)
        elif is_image_content_type(normalized):
            document = {}
            payload = ImagePayload(data=bytes(body), content_type=declared)
            logger.debug("Binary upload: %d bytes (%s)", payload.size, declared)
        else:
            raise UnsupportedContentTypeError(declared)

        self._check_size(payload)
        return payload, document

    @staticmethod
    def _parse_body(body: bytes) -> Dict[str, Any]:
        try:
            document = json.loads(body or b"null")
        except (ValueError, UnicodeDecodeError) as e:
            raise InvalidRequestBodyError(f"Invalid request body: {e}") from e
        if not isinstance(document, dict):
            raise InvalidRequestBodyError()
        return document

    async def _from_url(self, document: Dict[str, Any]) -> ImagePayload:
        raw_url = document.get("url")
        if not raw_url:
            raise MissingFieldError("url")
        url = self.validate_url(raw_url)

        logger.debug("Fetching remote image %s", url)
        resource = await self._fetcher.fetch(url)
        if not resource.ok:
            logger.warning(
                "Remote image fetch failed: %s %s (%s)", resource.status, resource.reason, url
            )
            raise UpstreamFetchError(resource.reason or str(resource.status), resource.status)

        if not is_image_content_type(resource.content_type):
            raise NotAnImageError(resource.content_type)

        return ImagePayload(data=resource.body, content_type=resource.content_type)

    @staticmethod
    def validate_url(raw_url: Any) -> str:
        """Check URL syntax and restrict to http/https before any network call."""
        if not isinstance(raw_url, str):
            raise InvalidUrlError(repr(raw_url))
        candidate = raw_url.strip()
        try:
            parts = urlsplit(candidate)
        except ValueError as e:
            raise InvalidUrlError(candidate) from e
        if not parts.scheme:
            raise InvalidUrlError(candidate)
        scheme = parts.scheme.lower()
        if scheme not in ALLOWED_SCHEMES:
            raise UnsupportedProtocolError(scheme)
        if not parts.hostname:
            raise InvalidUrlError(candidate)
        return candidate

    def _check_size(self, payload: ImagePayload) -> None:
        if payload.size > self._max_size:
            raise PayloadTooLargeError(payload.size, self._max_size)
