import types

import pytest

import app.infrastructure.adapters.vision_workers_ai as wa
from app.application.models import ImagePayload
from app.core.exceptions import ModelInvocationError
from app.infrastructure.adapters.vision_workers_ai import WorkersAIVisionModel

ClientError = type("ClientError", (Exception,), {})
MESSAGES = [
    {"role": "system", "content": "You are a helpful assistant."},
    {"role": "user", "content": "Describe. Language: English."},
]
IMAGE = ImagePayload(data=b"\x01\x02\xff", content_type="image/jpeg")


class DummyResponse:
    def __init__(self, status, body, reason="OK"):
        self.status = status
        self.reason = reason
        self._body = body

    async def json(self, content_type=None):
        return self._body

    async def __aenter__(self):
        return self

    async def __aexit__(self, *a):
        return False


def _patch_session(monkeypatch, response):
    sent = {}

    class DummySession:
        async def __aenter__(self):
            return self

        async def __aexit__(self, *a):
            return False

        def post(self, url, json=None, headers=None):
            sent.update(url=url, json=json, headers=headers)
            return response

    monkeypatch.setattr(
        wa,
        "aiohttp",
        types.SimpleNamespace(ClientSession=lambda *a, **k: DummySession(), ClientError=ClientError),
    )
    return sent


def _model():
    return WorkersAIVisionModel(account_id="acc123", api_token="tok", model="@cf/test/vision")


@pytest.mark.adapters
@pytest.mark.asyncio
async def test_run_posts_messages_and_image_bytes(monkeypatch):
    sent = _patch_session(
        monkeypatch, DummyResponse(200, {"success": True, "result": {"response": "a cat"}})
    )

    reply = await _model().run(MESSAGES, IMAGE)

    assert reply == {"response": "a cat"}
    assert sent["url"].endswith("/accounts/acc123/ai/run/@cf/test/vision")
    assert sent["headers"] == {"Authorization": "Bearer tok"}
    assert sent["json"]["messages"] == MESSAGES
    assert sent["json"]["image"] == [1, 2, 255]


@pytest.mark.adapters
@pytest.mark.asyncio
async def test_run_raises_on_api_failure(monkeypatch):
    body = {"success": False, "errors": [{"code": 10000, "message": "Authentication error"}]}
    _patch_session(monkeypatch, DummyResponse(401, body, reason="Unauthorized"))

    with pytest.raises(ModelInvocationError) as exc_info:
        await _model().run(MESSAGES, IMAGE)
    assert "401" in exc_info.value.message
    assert "Authentication error" in exc_info.value.message


@pytest.mark.adapters
@pytest.mark.asyncio
async def test_run_requires_credentials():
    model = WorkersAIVisionModel(account_id="", api_token="", model="@cf/test/vision")
    model._account_id = ""
    model._api_token = ""
    with pytest.raises(ModelInvocationError):
        await model.run(MESSAGES, IMAGE)
