"""Fake HTTP transport for testing.

Returns seeded responses in order and records every request for
assertions. No network access.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Mapping, Optional

from authflow.core.protocols.http import (
    RequestParameters,
    TransportOptions,
    TransportResponse,
    parameter_pairs,
)


@dataclass(frozen=True)
class RecordedRequest:
    """One call made through the fake."""

    uri: str
    pairs: list[tuple[str, str]]
    method: str
    headers: dict[str, str]
    options: TransportOptions

    @property
    def parameters(self) -> dict[str, str]:
        """Parameters by key; the last value wins for repeated keys."""
        return dict(self.pairs)


class FakeHttpTransport:
    """Test implementation of HttpTransport.

    Usage::

        fake = FakeHttpTransport()
        fake.seed(200, "oauth_token=abc&oauth_token_secret=xyz")
        token = await provider.request_auth_token()

        assert fake.call_count == 1
        assert fake.last_request.method == "POST"
    """

    def __init__(self) -> None:
        """Initialize with no seeded responses."""
        self._responses: deque[TransportResponse] = deque()
        self._error: Optional[Exception] = None
        self.requests: list[RecordedRequest] = []

    # -- seeding helpers --

    def seed(
        self,
        status_code: int,
        body: str = "",
        headers: Optional[Mapping[str, str]] = None,
    ) -> None:
        """Queue a response; responses are returned in seeding order."""
        self._responses.append(
            TransportResponse(status_code=status_code, body=body, headers=dict(headers or {}))
        )

    def set_error(self, error: Exception) -> None:
        """Raise ``error`` from every subsequent request."""
        self._error = error

    def clear_error(self) -> None:
        self._error = None

    # -- HttpTransport --

    async def request(
        self,
        uri: str,
        parameters: RequestParameters,
        method: str,
        headers: Mapping[str, str],
        options: TransportOptions,
    ) -> TransportResponse:
        self.requests.append(
            RecordedRequest(
                uri=uri,
                pairs=parameter_pairs(parameters),
                method=method,
                headers=dict(headers),
                options=options,
            )
        )
        if self._error is not None:
            raise self._error
        if not self._responses:
            raise AssertionError(f"No seeded response for {method} {uri}")
        return self._responses.popleft()

    # -- test helpers --

    @property
    def call_count(self) -> int:
        return len(self.requests)

    @property
    def last_request(self) -> RecordedRequest:
        return self.requests[-1]
