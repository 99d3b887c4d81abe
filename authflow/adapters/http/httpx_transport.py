"""httpx-backed implementation of the HttpTransport protocol.

A fresh ``httpx.AsyncClient`` is opened per request because TLS verification
is a client-level setting in httpx and may differ between calls.
"""

from typing import Mapping, Optional

import httpx

from authflow.core.config import settings
from authflow.core.exceptions import TransportError
from authflow.core.logging import logger
from authflow.core.protocols.http import (
    RequestParameters,
    TransportOptions,
    TransportResponse,
    parameter_pairs,
)

_QUERY_METHODS = frozenset({"GET", "DELETE", "HEAD"})

transport_logger = logger.with_prefix("HttpxTransport: ").with_context(component="http")


def _form_fields(pairs: list[tuple[str, str]]) -> dict[str, list[str]]:
    """Group pairs by key; httpx only takes a mapping for form bodies."""
    fields: dict[str, list[str]] = {}
    for key, value in pairs:
        fields.setdefault(key, []).append(value)
    return fields


class HttpxTransport:
    """Send requests with httpx.

    Attributes:
        timeout: Default request timeout in seconds, used when the
            per-request options do not carry one.
    """

    def __init__(self, timeout: Optional[float] = None) -> None:
        """Initialize the transport.

        Args:
            timeout: Seconds before a request is abandoned. Defaults to
                ``settings.HTTP_TIMEOUT_SECONDS``.
        """
        self.timeout = timeout if timeout is not None else settings.HTTP_TIMEOUT_SECONDS

    async def request(
        self,
        uri: str,
        parameters: RequestParameters,
        method: str,
        headers: Mapping[str, str],
        options: TransportOptions,
    ) -> TransportResponse:
        """Send one request and collect status code, body and headers.

        Raises:
            TransportError: On timeouts, connection failures and TLS errors.
        """
        method = method.upper()
        if options.http_version != "1.1":
            raise ValueError(f"Unsupported HTTP version: {options.http_version}")
        request_headers = dict(headers)
        if options.accept_gzip:
            request_headers.setdefault("Accept-Encoding", "gzip")

        pairs = parameter_pairs(parameters)
        query = pairs if method in _QUERY_METHODS else None
        form = _form_fields(pairs) if method not in _QUERY_METHODS else None

        timeout = options.timeout if options.timeout is not None else self.timeout
        verify = options.verify_tls and settings.VERIFY_TLS

        try:
            async with httpx.AsyncClient(
                verify=verify,
                http1=True,
                http2=False,
                timeout=timeout,
            ) as client:
                response = await client.request(
                    method,
                    uri,
                    params=query,
                    data=form,
                    headers=request_headers,
                )
        except httpx.TimeoutException as e:
            transport_logger.error(f"{method} {uri} timed out after {timeout}s")
            raise TransportError(f"Request to {uri} timed out", uri=uri) from e
        except httpx.TransportError as e:
            transport_logger.error(f"{method} {uri} failed: {type(e).__name__}: {e}")
            raise TransportError(f"Request to {uri} failed: {e}", uri=uri) from e

        transport_logger.debug(f"{method} {uri} -> {response.status_code}")

        return TransportResponse(
            status_code=response.status_code,
            body=response.text,
            headers=dict(response.headers) if options.include_headers else {},
        )
