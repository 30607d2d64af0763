"""
ModulePush Upload Client.

Sends the collected module set to the remote code endpoint.
Requires Python 3.11+.
"""

from typing import Any, Mapping

import httpx

from uploader.models import Credentials, UploadRequest
from utils.config import get_settings
from utils.errors import TransportError, UploadRejectedError
from utils.logger import LoggerMixin

CONTENT_TYPE = "application/json; charset=utf-8"


class UploadClient(LoggerMixin):
    """
    Synchronous client for the code upload endpoint.

    Every call to upload() is a single POST with no retry. Retrying is
    left to the caller, which simply waits for the next change.
    """

    def __init__(
        self,
        credentials: Credentials,
        url: str | None = None,
        branch: str | None = None,
        timeout: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """
        Initialize the upload client.

        Args:
            credentials: Account credentials for Basic auth
            url: Upload endpoint (defaults to settings)
            branch: Target branch (defaults to settings)
            timeout: Request timeout in seconds (defaults to settings)
            transport: Optional httpx transport, mainly for tests
        """
        settings = get_settings().upload

        self._credentials = credentials
        self._url = url or settings.url
        self._branch = branch or settings.branch
        self._http = httpx.Client(
            timeout=timeout or settings.timeout_seconds,
            transport=transport,
        )

    @property
    def url(self) -> str:
        """Upload endpoint URL."""
        return self._url

    @property
    def branch(self) -> str:
        """Branch the modules are uploaded to."""
        return self._branch

    def upload(self, modules: Mapping[str, str]) -> bool:
        """
        Upload a module set.

        Args:
            modules: Mapping of module name to source text

        Returns:
            True if a request was sent, False if there was nothing to send

        Raises:
            TransportError: If the HTTP exchange could not complete
            UploadRejectedError: If the endpoint answered with a non-200 status
        """
        if not modules:
            return False

        request = UploadRequest(modules=modules, branch=self._branch)
        headers = {
            "Authorization": self._credentials.authorization_header(),
            "Content-Type": CONTENT_TYPE,
        }

        try:
            response = self._http.post(self._url, content=request.to_json(), headers=headers)
        except httpx.TransportError as e:
            raise TransportError(f"{type(e).__name__}: {e}") from e

        if response.status_code != 200:
            raise UploadRejectedError(response.status_code)

        self.log.debug(
            "upload_accepted",
            url=self._url,
            branch=self._branch,
            modules=len(request.modules),
        )
        return True

    def close(self) -> None:
        """Close the underlying HTTP connection pool."""
        self._http.close()

    def __enter__(self) -> "UploadClient":
        """Context manager entry."""
        return self

    def __exit__(self, *args: Any) -> None:
        """Context manager exit."""
        self.close()
