"""
Tests for Upload Client.

Requires Python 3.11+.
"""

import base64
import json

import httpx
import pytest

from uploader.client import CONTENT_TYPE, UploadClient
from uploader.models import Credentials, UploadRequest
from utils.errors import TransportError, UploadRejectedError


class TestCredentials:
    """Test cases for Credentials."""

    def test_authorization_header(self, credentials: Credentials):
        expected = base64.b64encode(b"user@example.com:hunter2").decode()
        assert credentials.authorization_header() == f"Basic {expected}"

    def test_password_hidden_from_repr(self, credentials: Credentials):
        assert "hunter2" not in repr(credentials)


class TestUploadRequest:
    """Test cases for UploadRequest."""

    def test_wire_shape(self):
        request = UploadRequest(modules={"main": "module.exports = 1;"})
        assert json.loads(request.to_json()) == {
            "branch": "default",
            "modules": {"main": "module.exports = 1;"},
        }

    def test_snapshot_is_independent(self):
        modules = {"main": "a"}
        request = UploadRequest(modules=modules)
        modules["other"] = "b"
        assert dict(request.modules) == {"main": "a"}

    def test_non_ascii_is_utf8(self):
        request = UploadRequest(modules={"main": "// héllo"})
        assert "héllo".encode("utf-8") in request.to_json()


class TestUploadClient:
    """Test cases for UploadClient."""

    def test_empty_modules_sends_nothing(self, make_client, endpoint):
        client = make_client(endpoint)

        assert client.upload({}) is False
        assert endpoint.requests == []

    def test_successful_upload(self, make_client, endpoint, credentials: Credentials, upload_url: str):
        client = make_client(endpoint)

        assert client.upload({"a": "x", "sub/b": "y"}) is True

        assert len(endpoint.requests) == 1
        request = endpoint.requests[0]
        assert request.method == "POST"
        assert str(request.url) == upload_url
        assert request.headers["Authorization"] == credentials.authorization_header()
        assert request.headers["Content-Type"] == CONTENT_TYPE
        assert json.loads(request.content) == {
            "branch": "default",
            "modules": {"a": "x", "sub/b": "y"},
        }

    @pytest.mark.parametrize("status_code", [201, 401, 500])
    def test_non_200_is_rejected(self, make_client, endpoint, status_code: int):
        endpoint.status_code = status_code
        client = make_client(endpoint)

        with pytest.raises(UploadRejectedError) as exc_info:
            client.upload({"main": "x"})

        assert exc_info.value.status_code == status_code
        assert str(status_code) in str(exc_info.value)

    def test_connection_failure(self, make_client, endpoint):
        endpoint.error = httpx.ConnectError("connection refused")
        client = make_client(endpoint)

        with pytest.raises(TransportError) as exc_info:
            client.upload({"main": "x"})

        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)

    def test_timeout_is_transport_error(self, make_client, endpoint):
        endpoint.error = httpx.ReadTimeout("timed out")
        client = make_client(endpoint)

        with pytest.raises(TransportError):
            client.upload({"main": "x"})

    def test_settings_defaults(self, monkeypatch: pytest.MonkeyPatch, credentials: Credentials, endpoint):
        monkeypatch.setenv("UPLOAD_URL", "https://other.test/code")
        monkeypatch.setenv("UPLOAD_BRANCH", "sim")

        with UploadClient(credentials, transport=endpoint.transport) as client:
            client.upload({"main": "x"})

        assert str(endpoint.requests[0].url) == "https://other.test/code"
        assert json.loads(endpoint.requests[0].content)["branch"] == "sim"
