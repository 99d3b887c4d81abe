"""HTTP transport protocol.

The flow controllers never talk to the network directly. They hand a fully
signed request to an ``HttpTransport`` and get back status code, body and
headers. Uses :class:`typing.Protocol` so implementations don't need to
inherit.

Usage::

    from authflow.core.protocols.http import HttpTransport, TransportOptions


    async def fetch(transport: HttpTransport) -> str:
        response = await transport.request(
            "https://api.example.com/oauth/request_token",
            {},
            "POST",
            {"Authorization": header},
            TransportOptions(),
        )
        return response.body
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Mapping, Optional, Protocol, Tuple, Union, runtime_checkable

RequestParameters = Union[Mapping[str, str], Iterable[Tuple[str, str]]]


def parameter_pairs(parameters: RequestParameters) -> list[tuple[str, str]]:
    """Flatten request parameters to ordered pairs, keeping repeated keys."""
    items = parameters.items() if isinstance(parameters, Mapping) else parameters
    return [(str(k), str(v)) for k, v in items]


@dataclass(frozen=True, slots=True)
class TransportOptions:
    """Per-request transport settings."""

    accept_gzip: bool = True
    verify_tls: bool = True
    http_version: str = "1.1"
    include_headers: bool = True
    timeout: Optional[float] = None


@dataclass(frozen=True, slots=True)
class TransportResponse:
    """What the core needs back from a request."""

    status_code: int
    body: str
    headers: Mapping[str, str] = field(default_factory=dict)

    @property
    def content_type(self) -> str:
        """Media type of the body without parameters, lower-cased."""
        for key, value in self.headers.items():
            if key.lower() == "content-type":
                return value.split(";", 1)[0].strip().lower()
        return ""


@runtime_checkable
class HttpTransport(Protocol):
    """Issue a single HTTP request."""

    async def request(
        self,
        uri: str,
        parameters: RequestParameters,
        method: str,
        headers: Mapping[str, str],
        options: TransportOptions,
    ) -> TransportResponse:
        """Send the request and return status code, body and headers.

        GET and DELETE carry ``parameters`` in the query string; other
        methods send them as an ``application/x-www-form-urlencoded`` body.
        ``parameters`` may be a mapping or a sequence of pairs; repeated
        keys are sent once per pair.

        Raises:
            TransportError: If no response was received.
        """
        ...
