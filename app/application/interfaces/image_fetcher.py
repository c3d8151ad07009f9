from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol


@dataclass(frozen=True, slots=True)
class FetchedResource:
    """Outcome of a single GET against a caller-supplied URL."""

    ok: bool
    status: int
    reason: str
    content_type: str
    body: bytes = field(default=b"", repr=False)


class IImageFetcher(Protocol):
    """Outbound HTTP client used to pull a remote image in URL mode."""

    async def fetch(self, url: str) -> FetchedResource:
        """Issue exactly one GET. Transport failures raise UpstreamFetchError;
        non-success statuses are returned with ok=False."""
        ...
