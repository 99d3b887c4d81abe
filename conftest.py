"""Root conftest for pytest configuration and shared fixtures.

This conftest is loaded before both testpaths (tests/ and the colocated
authflow/**/tests/ directories), making its fixtures available everywhere.
"""

import os

import pytest

# Register pytest-asyncio plugin at the root level
pytest_plugins = ("pytest_asyncio",)

# ---------------------------------------------------------------------------
# Environment variables. Must be set before any authflow module import
# Uses setdefault so real env vars are never overridden.
# ---------------------------------------------------------------------------
os.environ.setdefault("AUTHFLOW_REDIRECT_URI", "https://app.example.com/auth")
os.environ.setdefault("AUTHFLOW_LOG_LEVEL", "DEBUG")


# ---------------------------------------------------------------------------
# Shared fake fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def fake_http_transport():
    """Fake HttpTransport that returns seeded responses and records requests."""
    from authflow.adapters.http.fake import FakeHttpTransport

    return FakeHttpTransport()


@pytest.fixture
def fake_identity_resolver():
    """Fake IdentityResolver that returns a seeded identity document."""
    from authflow.domains.oauth.fakes.identity_resolver import FakeIdentityResolver

    return FakeIdentityResolver({"id": "42", "name": "Test User"})


@pytest.fixture
def fixed_clock_signer():
    """Factory for OAuth1Signer with a pinned nonce and timestamp."""
    from authflow.domains.oauth.signing import OAuth1Signer

    def _make(consumer, nonce: str = "fixed-nonce", timestamp: str = "1191242096"):
        return OAuth1Signer(consumer, nonce_factory=lambda: nonce, clock=lambda: timestamp)

    return _make
