"""HTTP transport adapters."""

from authflow.adapters.http.fake import FakeHttpTransport
from authflow.adapters.http.httpx_transport import HttpxTransport

__all__ = ["HttpxTransport", "FakeHttpTransport"]
