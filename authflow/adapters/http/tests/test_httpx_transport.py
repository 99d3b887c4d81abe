"""Unit tests for HttpxTransport.

Uses unittest.mock to patch httpx.AsyncClient so we can simulate
responses, timeouts and connection errors without real network calls.
"""

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from authflow.adapters.http.httpx_transport import HttpxTransport
from authflow.core.exceptions import TransportError
from authflow.core.protocols.http import HttpTransport, TransportOptions

CLIENT_PATH = "authflow.adapters.http.httpx_transport.httpx.AsyncClient"


def _mock_response(status_code: int = 200, text: str = "", headers=None) -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.text = text
    response.headers = headers or {}
    return response


def _patch_client(mock_cls, *, response=None, side_effect=None) -> AsyncMock:
    mock_client = AsyncMock()
    mock_client.request = AsyncMock(return_value=response, side_effect=side_effect)
    mock_cls.return_value.__aenter__ = AsyncMock(return_value=mock_client)
    mock_cls.return_value.__aexit__ = AsyncMock(return_value=False)
    return mock_client


@pytest.fixture
def transport() -> HttpxTransport:
    return HttpxTransport(timeout=5.0)


class TestHttpxTransport:
    """Tests for HttpxTransport.request()."""

    def test_satisfies_protocol(self, transport):
        assert isinstance(transport, HttpTransport)

    @pytest.mark.asyncio
    async def test_get_sends_parameters_as_query(self, transport):
        with patch(CLIENT_PATH) as mock_cls:
            client = _patch_client(mock_cls, response=_mock_response(200, "ok"))

            await transport.request(
                "https://api.example.com/r", {"a": "1"}, "get", {}, TransportOptions()
            )

            client.request.assert_called_once_with(
                "GET",
                "https://api.example.com/r",
                params=[("a", "1")],
                data=None,
                headers={"Accept-Encoding": "gzip"},
            )

    @pytest.mark.asyncio
    async def test_post_sends_parameters_as_form(self, transport):
        with patch(CLIENT_PATH) as mock_cls:
            client = _patch_client(mock_cls, response=_mock_response(200, "ok"))

            await transport.request(
                "https://api.example.com/r",
                {"status": "hi"},
                "POST",
                {"Authorization": "OAuth x"},
                TransportOptions(accept_gzip=False),
            )

            client.request.assert_called_once_with(
                "POST",
                "https://api.example.com/r",
                params=None,
                data={"status": ["hi"]},
                headers={"Authorization": "OAuth x"},
            )

    @pytest.mark.asyncio
    async def test_repeated_keys_are_all_sent(self, transport):
        pairs = [("tag", "a"), ("tag", "b"), ("q", "x")]
        with patch(CLIENT_PATH) as mock_cls:
            client = _patch_client(mock_cls, response=_mock_response())

            await transport.request(
                "https://api.example.com/r", pairs, "GET", {}, TransportOptions()
            )
            assert client.request.call_args.kwargs["params"] == pairs

            await transport.request(
                "https://api.example.com/r", pairs, "POST", {}, TransportOptions()
            )
            assert client.request.call_args.kwargs["data"] == {"tag": ["a", "b"], "q": ["x"]}

    @pytest.mark.asyncio
    async def test_client_options(self, transport):
        with patch(CLIENT_PATH) as mock_cls:
            _patch_client(mock_cls, response=_mock_response())

            await transport.request(
                "https://api.example.com/r", {}, "GET", {}, TransportOptions(verify_tls=False)
            )

            mock_cls.assert_called_once_with(verify=False, http1=True, http2=False, timeout=5.0)

    @pytest.mark.asyncio
    async def test_per_request_timeout_overrides_default(self, transport):
        with patch(CLIENT_PATH) as mock_cls:
            _patch_client(mock_cls, response=_mock_response())

            await transport.request(
                "https://api.example.com/r", {}, "GET", {}, TransportOptions(timeout=1.5)
            )

            assert mock_cls.call_args.kwargs["timeout"] == 1.5

    @pytest.mark.asyncio
    async def test_returns_status_body_and_headers(self, transport):
        with patch(CLIENT_PATH) as mock_cls:
            _patch_client(
                mock_cls,
                response=_mock_response(
                    401, "denied", {"content-type": "text/plain; charset=utf-8"}
                ),
            )

            response = await transport.request(
                "https://api.example.com/r", {}, "GET", {}, TransportOptions()
            )

            assert response.status_code == 401
            assert response.body == "denied"
            assert response.content_type == "text/plain"

    @pytest.mark.asyncio
    async def test_headers_dropped_when_not_requested(self, transport):
        with patch(CLIENT_PATH) as mock_cls:
            _patch_client(mock_cls, response=_mock_response(200, "", {"x-a": "1"}))

            response = await transport.request(
                "https://api.example.com/r",
                {},
                "GET",
                {},
                TransportOptions(include_headers=False),
            )

            assert response.headers == {}

    @pytest.mark.asyncio
    async def test_non_2xx_is_returned_not_raised(self, transport):
        with patch(CLIENT_PATH) as mock_cls:
            _patch_client(mock_cls, response=_mock_response(500, "boom"))

            response = await transport.request(
                "https://api.example.com/r", {}, "POST", {}, TransportOptions()
            )

            assert response.status_code == 500

    @pytest.mark.asyncio
    async def test_timeout_raises_transport_error(self, transport):
        with patch(CLIENT_PATH) as mock_cls:
            _patch_client(mock_cls, side_effect=httpx.TimeoutException("timed out"))

            with pytest.raises(TransportError) as exc_info:
                await transport.request(
                    "https://slow.example.com/r", {}, "GET", {}, TransportOptions()
                )

            assert exc_info.value.retryable is True
            assert exc_info.value.uri == "https://slow.example.com/r"
            assert "timed out" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_connection_error_raises_transport_error(self, transport):
        with patch(CLIENT_PATH) as mock_cls:
            _patch_client(mock_cls, side_effect=httpx.ConnectError("DNS failure"))

            with pytest.raises(TransportError) as exc_info:
                await transport.request(
                    "https://nonexistent.example.com/r", {}, "GET", {}, TransportOptions()
                )

            assert "DNS failure" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_unsupported_http_version(self, transport):
        with patch(CLIENT_PATH) as mock_cls:
            with pytest.raises(ValueError):
                await transport.request(
                    "https://api.example.com/r",
                    {},
                    "GET",
                    {},
                    TransportOptions(http_version="2"),
                )

            mock_cls.assert_not_called()


def test_default_timeout_from_settings():
    from authflow.core.config import settings

    assert HttpxTransport().timeout == settings.HTTP_TIMEOUT_SECONDS
