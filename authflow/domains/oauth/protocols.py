"""Protocols for the OAuth domain."""

from typing import Any, Mapping, Optional, Protocol, Union, runtime_checkable

from authflow.domains.oauth.types import AccessToken, OAuth1AccessToken

AnyAccessToken = Union[AccessToken, OAuth1AccessToken]


@runtime_checkable
class OAuthProviderProtocol(Protocol):
    """What every identity provider can do, regardless of OAuth version."""

    @property
    def name(self) -> str:
        """Provider short name."""
        ...

    async def make_auth_url(self) -> str:
        """URL to send the user to for authorization."""
        ...

    async def exchange_for_token(self, params: Mapping[str, str]) -> AnyAccessToken:
        """Turn the callback parameters into an access token."""
        ...

    async def fetch_identity(self, access_token: AnyAccessToken) -> dict[str, Any]:
        """Fetch the user's identity with a previously obtained token."""
        ...


@runtime_checkable
class IdentityResolverProtocol(Protocol):
    """Provider-specific identity lookup.

    Implementations know the provider's user endpoint and field mapping;
    the flow controllers only hand over themselves and the token.
    ``provider`` is the OAuth1Provider or OAuth2Provider doing the flow, so
    OAuth1 resolvers can use its ``oauth_request`` to sign API calls.
    """

    async def fetch_identity(
        self, provider: OAuthProviderProtocol, access_token: AnyAccessToken
    ) -> dict[str, Any]:
        """Return the raw identity document for ``access_token``."""
        ...


class ProviderRegistryProtocol(Protocol):
    """Lookup of configured providers by name."""

    def get(self, name: str) -> OAuthProviderProtocol:
        """Return the provider registered as ``name``."""
        ...

    def list_names(self) -> list[str]:
        """Names of all registered providers."""
        ...

    def find(self, name: str) -> Optional[OAuthProviderProtocol]:
        """Return the provider or None."""
        ...
