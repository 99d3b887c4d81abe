"""Behaviour shared by the OAuth1 and OAuth2 flow controllers."""

from typing import Any, Generic, Optional, TypeVar

from authflow.core.config import settings
from authflow.core.exceptions import ConfigurationError
from authflow.core.logging import ContextualLogger
from authflow.core.logging import logger as default_logger
from authflow.core.protocols.http import HttpTransport, TransportOptions
from authflow.domains.oauth.config import BaseProviderConfig
from authflow.domains.oauth.exceptions import IdentityNotSupported
from authflow.domains.oauth.protocols import AnyAccessToken, IdentityResolverProtocol
from authflow.domains.oauth.types import Consumer

ConfigT = TypeVar("ConfigT", bound=BaseProviderConfig)


class BaseOAuthProvider(Generic[ConfigT]):
    """Configuration, transport and identity plumbing for one provider.

    Instances keep no per-flow state; flow progress lives in the state
    values the controllers return.
    """

    # gzip, verified TLS, HTTP/1.1, headers returned with the body
    transport_options = TransportOptions(
        accept_gzip=True,
        verify_tls=True,
        http_version="1.1",
        include_headers=True,
    )

    log_prefix = "OAuth"

    def __init__(
        self,
        config: ConfigT,
        transport: HttpTransport,
        *,
        identity_resolver: Optional[IdentityResolverProtocol] = None,
        logger: Optional[ContextualLogger] = None,
    ) -> None:
        """Bind the provider to its configuration and transport.

        Args:
            config: Endpoints and credentials. A missing ``redirect_uri``
                falls back to ``settings.REDIRECT_URI``.
            transport: HTTP collaborator used for every provider call.
            identity_resolver: Optional provider-specific identity lookup.
            logger: Base logger; provider context is added to it.

        Raises:
            ConfigurationError: If neither the config nor the settings name a
                redirect base.
        """
        if config.redirect_uri is None and settings.REDIRECT_URI:
            config = config.model_copy(update={"redirect_uri": settings.REDIRECT_URI})
        if not config.redirect_uri:
            raise ConfigurationError(f"No redirect URI configured for provider: {config.name}")
        self.config: ConfigT = config
        self.consumer = Consumer(config.consumer_key, config.consumer_secret)
        self.transport = transport
        self.identity_resolver = identity_resolver
        self.logger = (logger or default_logger).with_prefix(
            f"{self.log_prefix}[{config.name}]: "
        ).with_context(provider=config.name)

    @property
    def name(self) -> str:
        return self.config.name

    @property
    def redirect_url(self) -> str:
        return self.config.redirect_url

    @property
    def scope(self) -> list[str]:
        return list(self.config.scope)

    @property
    def fields(self) -> list[str]:
        return list(self.config.fields)

    async def fetch_identity(self, access_token: AnyAccessToken) -> dict[str, Any]:
        """Delegate to the configured identity resolver.

        Raises:
            IdentityNotSupported: If no resolver was configured.
        """
        if self.identity_resolver is None:
            raise IdentityNotSupported(self.name)
        return await self.identity_resolver.fetch_identity(self, access_token)
