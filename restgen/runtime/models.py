"""
Request and response models used by generated code.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional


class HTTPMethod(Enum):
    """Enumeration of supported HTTP methods."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    PATCH = "PATCH"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"


@dataclass
class Request:
    """Represents an HTTP request."""

    method: HTTPMethod
    path: str
    headers: Dict[str, str] = field(default_factory=dict)
    body: Optional[bytes] = None
    query_params: Optional[Dict[str, str]] = None
    path_params: Optional[Dict[str, str]] = None

    def get_header(self, name: str) -> str:
        """Get a header value, matching the name case-insensitively."""
        lowered = name.lower()
        for key, value in self.headers.items():
            if key.lower() == lowered:
                return value
        return ""

    def get_content_type(self) -> Optional[str]:
        """Get the Content-Type header without its parameters."""
        content_type = self.get_header("Content-Type")
        if not content_type:
            return None
        return content_type.split(";")[0].strip()


@dataclass
class Response:
    """Represents an HTTP response."""

    status_code: int
    body: Optional[bytes] = None
    headers: Dict[str, str] = field(default_factory=dict)

    def __post_init__(self):
        if self.status_code != 204:
            self.headers["Content-Length"] = str(len(self.body) if self.body else 0)
