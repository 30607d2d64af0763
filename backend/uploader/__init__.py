"""
ModulePush Uploader Package.

HTTP client for the remote code endpoint.
Requires Python 3.11+.
"""

from uploader.models import Credentials, UploadRequest, DEFAULT_BRANCH
from uploader.client import UploadClient, CONTENT_TYPE

__all__ = [
    "Credentials",
    "UploadRequest",
    "DEFAULT_BRANCH",
    "UploadClient",
    "CONTENT_TYPE",
]
