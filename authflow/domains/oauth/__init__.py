"""OAuth 1.0a / OAuth 2.0 authorization flows."""

from authflow.domains.oauth.config import (
    OAuth1ProviderConfig,
    OAuth2ProviderConfig,
    ProviderConfig,
)
from authflow.domains.oauth.exceptions import (
    IdentityNotSupported,
    InvalidAccessToken,
    InvalidArgument,
    MalformedTokenResponse,
    OAuthError,
    ProviderNotFound,
    SigningFailure,
    TransportError,
    UnexpectedStatusCode,
)
from authflow.domains.oauth.oauth1_service import OAuth1Provider
from authflow.domains.oauth.oauth2_service import OAuth2Provider
from authflow.domains.oauth.registry import ProviderRegistry
from authflow.domains.oauth.types import (
    AccessToken,
    Consumer,
    FlowStage,
    OAuth1AccessToken,
    OAuth1FlowState,
    OAuth2FlowState,
    SignedRequest,
    Token,
)

__all__ = [
    "AccessToken",
    "Consumer",
    "FlowStage",
    "IdentityNotSupported",
    "InvalidAccessToken",
    "InvalidArgument",
    "MalformedTokenResponse",
    "OAuth1AccessToken",
    "OAuth1FlowState",
    "OAuth1Provider",
    "OAuth1ProviderConfig",
    "OAuth2FlowState",
    "OAuth2Provider",
    "OAuth2ProviderConfig",
    "OAuthError",
    "ProviderConfig",
    "ProviderNotFound",
    "ProviderRegistry",
    "SignedRequest",
    "SigningFailure",
    "Token",
    "TransportError",
    "UnexpectedStatusCode",
]
