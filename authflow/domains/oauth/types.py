"""Value types for the OAuth domain.

These live in a separate module to avoid circular imports between
service implementations and protocol definitions. Every type here is
immutable: a flow moves forward by producing a new value, never by
changing an existing one.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Mapping, Optional


@dataclass(frozen=True, slots=True)
class Consumer:
    """Application credentials registered with the provider."""

    key: str
    secret: str = field(repr=False)


@dataclass(frozen=True, slots=True)
class Token:
    """OAuth1 token: either temporary request credentials or an access token."""

    key: str
    secret: str = field(default="", repr=False)


EMPTY_TOKEN = Token("", "")


@dataclass(frozen=True, slots=True)
class OAuth1AccessToken(Token):
    """OAuth1 access token with the optional user id some providers return."""

    user_id: Optional[str] = None
    extra: Mapping[str, str] = field(default_factory=dict, hash=False)


@dataclass(frozen=True, slots=True)
class AccessToken:
    """OAuth2 bearer credential."""

    token: str = field(repr=False)
    user_id: Optional[str] = None
    extra: Mapping[str, str] = field(default_factory=dict, hash=False)


ParameterPairs = tuple[tuple[str, str], ...]


@dataclass(frozen=True, slots=True)
class SignedRequest:
    """An OAuth1 request ready to hand to the transport.

    ``parameters`` is every signed pair (URI query first) plus
    ``oauth_signature``. ``request_parameters`` is what travels beside the
    ``Authorization`` header; together they are exactly the signed multiset.
    Both keep repeated keys.
    """

    method: str
    uri: str
    parameters: ParameterPairs
    request_parameters: ParameterPairs
    authorization_header: str
    base_string: str

    @property
    def signature(self) -> str:
        return self.oauth_parameters["oauth_signature"]

    @property
    def oauth_parameters(self) -> dict[str, str]:
        """The ``oauth_*`` subset, including the signature."""
        return {k: v for k, v in self.parameters if k.startswith("oauth_")}


class FlowStage(str, Enum):
    """Where an authorization flow currently stands."""

    UNAUTHENTICATED = "unauthenticated"
    REQUEST_TOKEN_OBTAINED = "request_token_obtained"
    AUTHORIZATION_PENDING = "authorization_pending"
    ACCESS_TOKEN_OBTAINED = "access_token_obtained"


@dataclass(frozen=True, slots=True)
class OAuth1FlowState:
    """State of one OAuth1 flow, returned to and passed back by the caller.

    ``token`` holds the request token until the exchange succeeds.
    """

    stage: FlowStage = FlowStage.UNAUTHENTICATED
    token: Token = EMPTY_TOKEN
    authorize_url: Optional[str] = None
    access_token: Optional[OAuth1AccessToken] = None

    def advance(self, stage: FlowStage, **changes) -> "OAuth1FlowState":
        return replace(self, stage=stage, **changes)


@dataclass(frozen=True, slots=True)
class OAuth2FlowState:
    """State of one OAuth2 flow."""

    stage: FlowStage = FlowStage.UNAUTHENTICATED
    authorize_url: Optional[str] = None
    state: Optional[str] = None
    access_token: Optional[AccessToken] = None

    def advance(self, stage: FlowStage, **changes) -> "OAuth2FlowState":
        return replace(self, stage=stage, **changes)
