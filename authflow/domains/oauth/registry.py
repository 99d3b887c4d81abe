"""Provider registry: in-memory lookup built once at startup.

Providers are selected by configuration, not subclassing: each
``ProviderConfig`` becomes an ``OAuth1Provider`` or ``OAuth2Provider``
according to its ``oauth_version``.
"""

from pathlib import Path
from typing import Iterable, Mapping, Optional, Union

from pydantic import ValidationError

from authflow.core.config import settings
from authflow.core.exceptions import ConfigurationError, unpack_validation_error
from authflow.core.logging import logger
from authflow.core.protocols.http import HttpTransport
from authflow.domains.oauth.config import (
    OAuth1ProviderConfig,
    OAuth2ProviderConfig,
    ProviderConfig,
    provider_configs_adapter,
)
from authflow.domains.oauth.exceptions import ProviderNotFound
from authflow.domains.oauth.oauth1_service import OAuth1Provider
from authflow.domains.oauth.oauth2_service import OAuth2Provider
from authflow.domains.oauth.protocols import IdentityResolverProtocol, ProviderRegistryProtocol

registry_logger = logger.with_prefix("ProviderRegistry: ").with_context(
    component="provider_registry"
)

Provider = Union[OAuth1Provider, OAuth2Provider]


def load_provider_configs(path: Union[str, Path]) -> list[ProviderConfig]:
    """Read a JSON list of provider configurations.

    Raises:
        ConfigurationError: If the file is missing or does not validate.
    """
    path = Path(path)
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(f"Cannot read provider configuration {path}: {e}") from e
    try:
        return provider_configs_adapter.validate_json(raw)
    except ValidationError as e:
        registry_logger.error(f"Invalid provider configuration in {path}")
        raise ConfigurationError(
            f"Invalid provider configuration in {path}: {unpack_validation_error(e)}"
        ) from e


class ProviderRegistry(ProviderRegistryProtocol):
    """In-memory provider registry keyed by provider name."""

    def __init__(
        self,
        transport: HttpTransport,
        identity_resolvers: Optional[Mapping[str, IdentityResolverProtocol]] = None,
    ) -> None:
        """Initialize with empty entries.

        Args:
            transport: HTTP collaborator shared by every provider.
            identity_resolvers: Optional resolver per provider name.
        """
        self._transport = transport
        self._identity_resolvers = dict(identity_resolvers or {})
        self._providers: dict[str, Provider] = {}

    def register(self, config: ProviderConfig) -> Provider:
        """Create and register the provider for ``config``.

        Raises:
            ConfigurationError: If the name is already registered, or
                no redirect base is configured for it.
        """
        if config.name in self._providers:
            raise ConfigurationError(f"Duplicate provider name: {config.name}")

        resolver = self._identity_resolvers.get(config.name)
        if isinstance(config, OAuth1ProviderConfig):
            provider: Provider = OAuth1Provider(
                config, self._transport, identity_resolver=resolver
            )
        elif isinstance(config, OAuth2ProviderConfig):
            provider = OAuth2Provider(config, self._transport, identity_resolver=resolver)
        else:
            raise ConfigurationError(f"Unsupported provider configuration: {type(config)!r}")

        self._providers[config.name] = provider
        return provider

    def build(self, configs: Optional[Iterable[ProviderConfig]] = None) -> None:
        """Register ``configs``, or the ones in ``settings.PROVIDERS_FILE``.

        Called once at startup. After this, all lookups are dict reads.
        """
        if configs is None:
            if settings.PROVIDERS_FILE is None:
                raise ConfigurationError("No provider configurations given")
            configs = load_provider_configs(settings.PROVIDERS_FILE)

        for config in configs:
            self.register(config)

        registry_logger.info(f"Built provider registry with {len(self._providers)} entries.")

    def get(self, name: str) -> Provider:
        """Get a provider by name.

        Raises:
            ProviderNotFound: If no provider with the given name is registered.
        """
        try:
            return self._providers[name]
        except KeyError:
            raise ProviderNotFound(name) from None

    def find(self, name: str) -> Optional[Provider]:
        return self._providers.get(name)

    def list_names(self) -> list[str]:
        return sorted(self._providers)
