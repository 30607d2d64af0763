"""
ModulePush Test Configuration.

Pytest fixtures and configuration.
Requires Python 3.11+.
"""

import threading
from collections.abc import Callable, Generator
from pathlib import Path

import httpx
import pytest
import structlog

from uploader.client import UploadClient
from uploader.models import Credentials
from utils.config import get_settings

UPLOAD_URL = "https://example.test/api/user/code"


@pytest.fixture(autouse=True)
def fresh_settings() -> Generator[None, None, None]:
    """Drop cached settings and logging config between tests."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
    structlog.reset_defaults()


@pytest.fixture
def credentials() -> Credentials:
    """Test account credentials."""
    return Credentials(email="user@example.com", password="hunter2")


@pytest.fixture
def script_dir(tmp_path: Path) -> Path:
    """A directory with two script modules and one unrelated file."""
    root = tmp_path / "scripts"
    root.mkdir()
    (root / "a.js").write_text("x")
    (root / "sub").mkdir()
    (root / "sub" / "b.js").write_text("y")
    (root / "readme.txt").write_text("not a module")
    return root


class RecordingEndpoint:
    """Fake upload endpoint that records every request it receives."""

    def __init__(self, status_code: int = 200) -> None:
        self.status_code = status_code
        self.requests: list[httpx.Request] = []
        self.error: Exception | None = None
        self.received = threading.Event()
        self.on_request: Callable[[], None] | None = None

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        self.received.set()
        if self.on_request is not None:
            self.on_request()
        if self.error is not None:
            raise self.error
        return httpx.Response(self.status_code, text="ignored")

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


@pytest.fixture
def endpoint() -> RecordingEndpoint:
    """A fake endpoint answering 200."""
    return RecordingEndpoint()


@pytest.fixture
def upload_url() -> str:
    """URL the test clients post to."""
    return UPLOAD_URL


@pytest.fixture
def make_client(
    credentials: Credentials,
    upload_url: str,
) -> Generator[Callable[[RecordingEndpoint], UploadClient], None, None]:
    """Factory for upload clients wired to a fake endpoint."""
    clients: list[UploadClient] = []

    def factory(fake: RecordingEndpoint) -> UploadClient:
        client = UploadClient(credentials, url=upload_url, transport=fake.transport)
        clients.append(client)
        return client

    yield factory

    for client in clients:
        client.close()
