"""
ModulePush Upload Data Models.

Requires Python 3.11+.
"""

import base64
import json
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

DEFAULT_BRANCH = "default"


@dataclass(frozen=True)
class Credentials:
    """Account credentials used for every upload."""

    email: str
    password: str = field(repr=False)

    def authorization_header(self) -> str:
        """Basic auth header value derived from email:password."""
        token = base64.b64encode(f"{self.email}:{self.password}".encode("utf-8"))
        return f"Basic {token.decode('ascii')}"


@dataclass(frozen=True)
class UploadRequest:
    """A single upload: one branch and a snapshot of its modules."""

    modules: Mapping[str, str]
    branch: str = DEFAULT_BRANCH

    def __post_init__(self) -> None:
        # Snapshot so later changes to the caller's dict are not sent
        object.__setattr__(self, "modules", MappingProxyType(dict(self.modules)))

    def to_dict(self) -> dict[str, object]:
        """Convert to the wire shape."""
        return {"branch": self.branch, "modules": dict(self.modules)}

    def to_json(self) -> bytes:
        """Serialize to UTF-8 encoded JSON."""
        return json.dumps(self.to_dict(), ensure_ascii=False).encode("utf-8")
