"""Provider endpoint configuration.

One ``ProviderConfig`` per identity provider. ``oauth_version`` selects the
flow controller: ``"1"`` for OAuth 1.0/1.0a, ``"2"`` for OAuth 2.0.
"""

from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator


class BaseProviderConfig(BaseModel):
    """Settings shared by OAuth1 and OAuth2 providers."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(min_length=1, description="Provider short name, e.g. 'twitter'")
    base_uri: str = Field(description="API base URI, used by identity resolvers")
    authorize_uri: str
    access_token_uri: str
    consumer_key: str = Field(description="Application key / OAuth2 client_id")
    consumer_secret: str = Field(repr=False, description="Application secret / client_secret")
    redirect_uri: Optional[str] = Field(
        default=None, description="Callback base; defaults to settings.REDIRECT_URI"
    )
    scope: list[str] = Field(default_factory=list)
    fields: list[str] = Field(default_factory=list)

    @field_validator("redirect_uri")
    @classmethod
    def strip_trailing_slash(cls, v: Optional[str]) -> Optional[str]:
        """Store the redirect base without a trailing slash."""
        return v.rstrip("/") if v else v

    @property
    def redirect_url(self) -> str:
        """Callback URL for this provider: ``<redirect_uri>/<name>/``."""
        return f"{self.redirect_uri or ''}/{self.name}/"

    @property
    def scope_inline(self) -> str:
        return ",".join(self.scope)

    @property
    def fields_inline(self) -> str:
        return ",".join(self.fields)


class OAuth1ProviderConfig(BaseProviderConfig):
    """OAuth 1.0 / 1.0a provider."""

    oauth_version: Literal["1"] = "1"
    request_token_uri: str
    oauth1_version: Literal["1.0", "1.0a"] = Field(
        default="1.0a", description="'1.0a' sends oauth_callback with the request token call"
    )
    request_token_method: Literal["GET", "POST"] = "POST"
    request_token_parameters: dict[str, str] = Field(default_factory=dict)
    request_token_headers: dict[str, str] = Field(default_factory=dict)
    realm: Optional[str] = None


class OAuth2ProviderConfig(BaseProviderConfig):
    """OAuth 2.0 authorization-code provider."""

    oauth_version: Literal["2"] = "2"


ProviderConfig = Annotated[
    Union[OAuth1ProviderConfig, OAuth2ProviderConfig],
    Field(discriminator="oauth_version"),
]

provider_configs_adapter: TypeAdapter[list[ProviderConfig]] = TypeAdapter(list[ProviderConfig])
