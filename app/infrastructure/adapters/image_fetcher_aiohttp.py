from __future__ import annotations

import logging
from typing import Optional

import aiohttp

from app.application.interfaces import FetchedResource, IImageFetcher
from app.core.config import settings
from app.core.exceptions import PayloadTooLargeError, UpstreamFetchError

logger = logging.getLogger(__name__)


def _declared_length(headers) -> Optional[int]:
    value = headers.get("Content-Length")
    try:
        return int(value) if value is not None else None
    except ValueError:
        return None


class AiohttpImageFetcher(IImageFetcher):
    """GET a remote image into memory with aiohttp.

    One attempt, no retries. No client-side timeout is configured beyond
    aiohttp's session default; cancellation of the calling task aborts the
    request. Only 2xx responses count as success. A declared Content-Length
    above ``max_size`` is rejected before the body is read.
    """

    def __init__(
        self,
        timeout: aiohttp.ClientTimeout | None = None,
        max_size: Optional[int] = None,
    ) -> None:
        self._timeout = timeout
        self._max_size = max_size if max_size is not None else settings.max_image_size

    async def fetch(self, url: str) -> FetchedResource:
        session_kwargs = {"timeout": self._timeout} if self._timeout is not None else {}
        try:
            async with aiohttp.ClientSession(**session_kwargs) as session:
                async with session.get(url) as response:
                    content_type = response.headers.get("Content-Type", "")
                    if not 200 <= response.status < 300:
                        return FetchedResource(
                            ok=False,
                            status=response.status,
                            reason=response.reason or "",
                            content_type=content_type,
                        )
                    declared = _declared_length(response.headers)
                    if declared is not None and declared > self._max_size:
                        logger.warning("Refusing %s: declared %d bytes", url, declared)
                        raise PayloadTooLargeError(declared, self._max_size)
                    body = await response.read()
                    logger.debug("Fetched %s (%d bytes, %s)", url, len(body), content_type)
                    return FetchedResource(
                        ok=True,
                        status=response.status,
                        reason=response.reason or "",
                        content_type=content_type,
                        body=body,
                    )
        except aiohttp.ClientError as e:
            logger.error("Failed to fetch %s: %s", url, e)
            raise UpstreamFetchError(str(e) or type(e).__name__) from e
