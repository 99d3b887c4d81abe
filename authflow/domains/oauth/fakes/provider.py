"""Fake OAuth provider for testing code that consumes the capability set."""

from typing import Any, Mapping, Optional

from authflow.domains.oauth.protocols import AnyAccessToken
from authflow.domains.oauth.types import AccessToken


class FakeOAuthProvider:
    """In-memory fake for OAuthProviderProtocol.

    Returns a seeded URL, token and identity. Records calls.
    """

    def __init__(self, name: str = "fake") -> None:
        self._name = name
        self._auth_url = f"https://{name}.example.com/authorize"
        self._token: AnyAccessToken = AccessToken(token=f"{name}-token")
        self._identity: dict[str, Any] = {}
        self._calls: list[tuple[Any, ...]] = []
        self._should_raise: Optional[Exception] = None

    # -- seeding helpers --

    def seed_auth_url(self, url: str) -> None:
        self._auth_url = url

    def seed_token(self, token: AnyAccessToken) -> None:
        self._token = token

    def seed_identity(self, identity: dict[str, Any]) -> None:
        self._identity = dict(identity)

    def set_error(self, error: Exception) -> None:
        self._should_raise = error

    @property
    def calls(self) -> list[tuple[Any, ...]]:
        return list(self._calls)

    # -- OAuthProviderProtocol --

    @property
    def name(self) -> str:
        return self._name

    async def make_auth_url(self) -> str:
        self._calls.append(("make_auth_url",))
        if self._should_raise:
            raise self._should_raise
        return self._auth_url

    async def exchange_for_token(self, params: Mapping[str, str]) -> AnyAccessToken:
        self._calls.append(("exchange_for_token", dict(params)))
        if self._should_raise:
            raise self._should_raise
        return self._token

    async def fetch_identity(self, access_token: AnyAccessToken) -> dict[str, Any]:
        self._calls.append(("fetch_identity", access_token))
        if self._should_raise:
            raise self._should_raise
        return dict(self._identity)
