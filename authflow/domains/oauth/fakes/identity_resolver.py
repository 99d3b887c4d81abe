"""Fake identity resolver for testing."""

from typing import Any, Optional

from authflow.domains.oauth.protocols import AnyAccessToken, OAuthProviderProtocol


class FakeIdentityResolver:
    """In-memory fake for IdentityResolverProtocol.

    Seed the identity document to return and inspect recorded calls for
    assertions.
    """

    def __init__(self, identity: Optional[dict[str, Any]] = None) -> None:
        self._identity = dict(identity or {})
        self._calls: list[tuple[str, AnyAccessToken]] = []
        self._should_raise: Optional[Exception] = None

    def seed_identity(self, identity: dict[str, Any]) -> None:
        self._identity = dict(identity)

    def set_error(self, error: Exception) -> None:
        self._should_raise = error

    @property
    def calls(self) -> list[tuple[str, AnyAccessToken]]:
        return list(self._calls)

    async def fetch_identity(
        self, provider: OAuthProviderProtocol, access_token: AnyAccessToken
    ) -> dict[str, Any]:
        self._calls.append((provider.name, access_token))
        if self._should_raise:
            raise self._should_raise
        return dict(self._identity)
