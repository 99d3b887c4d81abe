"""OAuth domain exceptions.

Flow controllers raise these instead of letting transport or parsing
details bubble up. ``retryable`` separates transient failures (nothing was
received, re-run the whole step) from protocol errors (the provider answered
and the answer is unusable).
"""

from typing import Optional

from authflow.core.exceptions import AuthFlowException, NotFoundException, TransportError

__all__ = [
    "OAuthError",
    "UnexpectedStatusCode",
    "MalformedTokenResponse",
    "InvalidAccessToken",
    "InvalidArgument",
    "SigningFailure",
    "IdentityNotSupported",
    "ProviderNotFound",
    "TransportError",
]

# ---------------------------------------------------------------------------
# Base
# ---------------------------------------------------------------------------


class OAuthError(AuthFlowException):
    """Base exception for all OAuth flow errors."""

    retryable = False

    def __init__(self, message: str = "OAuth error"):
        """Initialize with message."""
        self.message = message
        super().__init__(self.message)


# ---------------------------------------------------------------------------
# Provider responses
# ---------------------------------------------------------------------------


class UnexpectedStatusCode(OAuthError):
    """A token endpoint answered with something other than HTTP 200."""

    def __init__(self, status_code: int, body: str = "", message: Optional[str] = None):
        """Initialize with the provider's status code and response body."""
        self.status_code = status_code
        self.body = body
        super().__init__(message or f"Unexpected response code {status_code}")


class MalformedTokenResponse(OAuthError):
    """OAuth1 token response without ``oauth_token`` / ``oauth_token_secret``."""

    def __init__(self, message: str = "It is not a valid token response"):
        """Initialize with message."""
        super().__init__(message)


class InvalidAccessToken(OAuthError):
    """OAuth2 token response without ``access_token``."""

    def __init__(self, message: str = "Invalid access token"):
        """Initialize with message."""
        super().__init__(message)


# ---------------------------------------------------------------------------
# Caller / programming errors
# ---------------------------------------------------------------------------


class InvalidArgument(OAuthError, ValueError):
    """The caller passed a missing, empty or non-string value."""

    def __init__(self, message: str = "Invalid argument"):
        """Initialize with message."""
        super().__init__(message)


class SigningFailure(OAuthError):
    """The request signer could not produce a signature.

    Only reachable with broken inputs (e.g. non-string secrets); treat as a
    programming error.
    """

    def __init__(self, message: str = "Failed to sign request"):
        """Initialize with message."""
        super().__init__(message)


class IdentityNotSupported(OAuthError):
    """The provider has no identity resolver configured."""

    def __init__(self, provider: str):
        """Initialize with the provider name."""
        self.provider = provider
        super().__init__(f"No identity resolver configured for provider: {provider}")


class ProviderNotFound(NotFoundException):
    """No provider is registered under the requested name."""

    def __init__(self, name: str):
        """Initialize with the missing provider name."""
        self.name = name
        super().__init__(f"OAuth provider not configured: {name}")
