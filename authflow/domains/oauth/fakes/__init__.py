"""In-memory fakes for the OAuth domain."""

from authflow.domains.oauth.fakes.identity_resolver import FakeIdentityResolver
from authflow.domains.oauth.fakes.provider import FakeOAuthProvider

__all__ = ["FakeIdentityResolver", "FakeOAuthProvider"]
