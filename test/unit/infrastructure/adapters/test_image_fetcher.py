import types

import pytest

import app.infrastructure.adapters.image_fetcher_aiohttp as fa
from app.core.exceptions import PayloadTooLargeError, UpstreamFetchError
from app.infrastructure.adapters.image_fetcher_aiohttp import AiohttpImageFetcher

ClientError = type("ClientError", (Exception,), {})


class DummyResponse:
    def __init__(self, status=200, reason="OK", headers=None, body=b""):
        self.status = status
        self.reason = reason
        self.headers = headers or {}
        self._body = body
        self.read_calls = 0

    async def read(self):
        self.read_calls += 1
        return self._body

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        return False


def _patch_session(monkeypatch, response=None, error=None):
    calls = {"urls": []}

    class DummySession:
        def __init__(self, *a, **k):
            pass

        async def __aenter__(self):
            return self

        async def __aexit__(self, exc_type, exc, tb):
            return False

        def get(self, url):
            calls["urls"].append(url)
            if error is not None:
                raise error
            return response

    monkeypatch.setattr(
        fa,
        "aiohttp",
        types.SimpleNamespace(ClientSession=DummySession, ClientError=ClientError),
    )
    return calls


@pytest.mark.adapters
@pytest.mark.asyncio
async def test_fetch_returns_body_and_content_type(monkeypatch):
    response = DummyResponse(headers={"Content-Type": "image/png"}, body=b"png-bytes")
    calls = _patch_session(monkeypatch, response=response)

    resource = await AiohttpImageFetcher().fetch("https://example.com/a.png")

    assert calls["urls"] == ["https://example.com/a.png"]
    assert resource.ok is True
    assert resource.status == 200
    assert resource.content_type == "image/png"
    assert resource.body == b"png-bytes"


@pytest.mark.adapters
@pytest.mark.asyncio
async def test_fetch_reports_non_success_without_reading_body(monkeypatch):
    response = DummyResponse(status=404, reason="Not Found", headers={"Content-Type": "text/html"})
    _patch_session(monkeypatch, response=response)

    resource = await AiohttpImageFetcher().fetch("https://example.com/missing.png")

    assert resource.ok is False
    assert resource.status == 404
    assert resource.reason == "Not Found"
    assert resource.body == b""
    assert response.read_calls == 0


@pytest.mark.adapters
@pytest.mark.asyncio
async def test_fetch_transport_error_raises_upstream_error(monkeypatch):
    _patch_session(monkeypatch, error=ClientError("Cannot connect to host example.com"))

    with pytest.raises(UpstreamFetchError) as exc_info:
        await AiohttpImageFetcher().fetch("https://example.com/a.png")

    assert "Cannot connect to host" in exc_info.value.message
    assert exc_info.value.status is None


@pytest.mark.adapters
@pytest.mark.asyncio
@pytest.mark.parametrize("status,reason", [(304, "Not Modified"), (101, "Switching Protocols")])
async def test_fetch_treats_non_2xx_as_failure(monkeypatch, status, reason):
    response = DummyResponse(status=status, reason=reason, headers={"Content-Type": "image/png"})
    _patch_session(monkeypatch, response=response)

    resource = await AiohttpImageFetcher().fetch("https://example.com/cached.png")

    assert resource.ok is False
    assert resource.status == status
    assert response.read_calls == 0


@pytest.mark.adapters
@pytest.mark.asyncio
async def test_fetch_rejects_declared_length_over_limit(monkeypatch):
    response = DummyResponse(headers={"Content-Type": "image/png", "Content-Length": "11"})
    _patch_session(monkeypatch, response=response)

    with pytest.raises(PayloadTooLargeError) as exc_info:
        await AiohttpImageFetcher(max_size=10).fetch("https://example.com/huge.png")

    assert exc_info.value.size == 11
    assert exc_info.value.limit == 10
    assert response.read_calls == 0


@pytest.mark.adapters
@pytest.mark.asyncio
async def test_fetch_reads_body_when_declared_length_fits(monkeypatch):
    response = DummyResponse(
        headers={"Content-Type": "image/png", "Content-Length": "10"}, body=b"0123456789"
    )
    _patch_session(monkeypatch, response=response)

    resource = await AiohttpImageFetcher(max_size=10).fetch("https://example.com/ok.png")

    assert resource.ok is True
    assert resource.body == b"0123456789"
