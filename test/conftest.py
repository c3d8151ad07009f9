"""
Shared test configuration and fixtures for the metadata service.
"""

import logging
import os
from datetime import datetime
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import AsyncMock

# Keep the app from writing data/app.log during tests
os.environ.setdefault("LOG_FILE", "")

import pytest

from app.application.interfaces import FetchedResource
from app.application.models import ImagePayload

logger = logging.getLogger(__name__)

DEFAULT_MODEL_REPLY = {
    "response": (
        '{"language": "English", "alt-text": "A test image", "title": "Test Title", '
        '"caption": "Test Caption", "description": "Test Description", '
        '"filename": "test-image", "focus-keyword": "test"}'
    )
}


def setup_logging():
    """Send test logs to console and test/test_output/logs/test_run.log."""
    log_dir = Path("test/test_output/logs")
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "test_run.log"

    formatter = logging.Formatter(
        "[%(asctime)s] %(levelname)-8s [%(name)s:%(lineno)d] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    file_handler = logging.FileHandler(filename=log_file, mode="a", encoding="utf-8")
    file_handler.setFormatter(formatter)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    logging.getLogger("asyncio").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("app").setLevel(logging.DEBUG)

    return log_file


def pytest_configure(config):  # pylint: disable=unused-argument
    log_file = setup_logging()
    logging.getLogger("pytest").info("Log file: %s", log_file)


@pytest.fixture(autouse=True)
def log_test_name(request):
    """Log test name when test starts and finishes."""
    test_logger = logging.getLogger(request.node.nodeid)
    test_logger.info("Starting test: %s", request.node.name)
    start_time = datetime.now()

    def log_test_end():
        duration = (datetime.now() - start_time).total_seconds()
        if hasattr(request.node, "rep_call") and request.node.rep_call.failed:
            test_logger.error("Test failed after %.2fs", duration)
        else:
            test_logger.info("Test finished after %.2fs", duration)

    request.addfinalizer(log_test_end)


@pytest.hookimpl(tryfirst=True, hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """Add test result to report object."""
    outcome = yield
    rep = outcome.get_result()
    setattr(item, f"rep_{rep.when}", rep)


def image_resource(content_type: str = "image/jpeg", body: bytes = b"\x89fake-image") -> FetchedResource:
    return FetchedResource(ok=True, status=200, reason="OK", content_type=content_type, body=body)


@pytest.fixture
def make_resource():
    """Factory for successful FetchedResource values."""
    return image_resource


@pytest.fixture
def fake_adapters():
    """AsyncMock-based fetcher and vision model.

    - fetcher.fetch returns a small JPEG resource unless reconfigured
    - vision_model.run returns DEFAULT_MODEL_REPLY unless reconfigured
    """

    class Fetcher:
        async def fetch(self, url: str) -> FetchedResource:
            return image_resource()

    class VisionModel:
        provider = "fake"

        async def run(self, messages, image: ImagePayload):
            return DEFAULT_MODEL_REPLY

    fetcher = Fetcher()
    vision_model = VisionModel()
    fetcher.fetch = AsyncMock(side_effect=fetcher.fetch)  # type: ignore
    vision_model.run = AsyncMock(side_effect=vision_model.run)  # type: ignore

    return SimpleNamespace(fetcher=fetcher, vision_model=vision_model)


@pytest.fixture
def client(fake_adapters):
    """TestClient wired to fake_adapters through the use-case dependency."""
    from fastapi.testclient import TestClient

    from app.application.use_cases.generate_metadata import GenerateMetadataUseCase
    from app.presentation.api.v1.dependencies.metadata import get_generate_metadata_use_case
    from app.presentation.main import app

    app.dependency_overrides[get_generate_metadata_use_case] = (
        lambda: GenerateMetadataUseCase(fake_adapters)
    )
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def last_user_prompt(fake_adapters):
    """Return the user prompt of the most recent vision model call."""

    def _read() -> str:
        messages = fake_adapters.vision_model.run.call_args.args[0]
        return next(m["content"] for m in messages if m["role"] == "user")

    return _read
