"""OAuth2 flow controller for the authorization-code grant."""

from typing import Mapping, Optional
from urllib.parse import urlencode

from authflow.domains.oauth.base import BaseOAuthProvider
from authflow.domains.oauth.config import OAuth2ProviderConfig
from authflow.domains.oauth.exceptions import (
    InvalidAccessToken,
    InvalidArgument,
    UnexpectedStatusCode,
)
from authflow.domains.oauth.parsers import parse_access_token_oauth2
from authflow.domains.oauth.types import AccessToken, FlowStage, OAuth2FlowState


class OAuth2Provider(BaseOAuthProvider[OAuth2ProviderConfig]):
    """Builds authorization URLs and exchanges codes for access tokens."""

    log_prefix = "OAuth2"

    def get_auth_url_parameters(self) -> dict[str, str]:
        return {
            "client_id": self.consumer.key,
            "redirect_uri": self.redirect_url,
        }

    def build_authorization_url(self, state: Optional[str] = None) -> str:
        """Authorization URL; no network access.

        ``scope`` is added when the provider has scopes configured, ``state``
        when one is given.
        """
        params = self.get_auth_url_parameters()
        if self.config.scope:
            params["scope"] = self.config.scope_inline
        if state is not None:
            params["state"] = state
        return f"{self.config.authorize_uri}?{urlencode(params)}"

    async def make_auth_url(self, state: Optional[str] = None) -> str:
        """Return the URL to send the user to."""
        return self.build_authorization_url(state)

    async def begin(self, state: Optional[str] = None) -> OAuth2FlowState:
        """Start a flow; the returned state goes back into :meth:`complete`.

        Args:
            state: Opaque value the provider echoes back on the callback.
                When set, :meth:`complete` rejects callbacks that do not
                carry it.
        """
        return OAuth2FlowState().advance(
            FlowStage.AUTHORIZATION_PENDING,
            authorize_url=self.build_authorization_url(state),
            state=state,
        )

    def _token_request_uri(self, code: str) -> str:
        parameters = {
            "client_id": self.consumer.key,
            "client_secret": self.consumer.secret,
            "code": code,
            "grant_type": "authorization_code",
            "redirect_uri": self.redirect_url,
        }
        separator = "&" if "?" in self.config.access_token_uri else "?"
        return f"{self.config.access_token_uri}{separator}{urlencode(parameters)}"

    async def get_access_token(self, code: str) -> AccessToken:
        """Exchange an authorization code for an access token.

        Args:
            code: The ``code`` parameter from the authorization callback.

        Returns:
            The parsed access token.

        Raises:
            InvalidArgument: If ``code`` is not a non-empty string. Raised
                before any request is made.
            UnexpectedStatusCode: If the token endpoint does not answer 200.
            InvalidAccessToken: If the response lacks ``access_token``.
            TransportError: If the request could not be sent.
        """
        if not isinstance(code, str) or not code:
            raise InvalidArgument("Parameter code must be a non-empty string")

        self.logger.info(f"Exchanging authorization code at {self.config.access_token_uri}")
        response = await self.transport.request(
            self._token_request_uri(code),
            {},
            "POST",
            {},
            self.transport_options,
        )

        if response.status_code != 200:
            self.logger.error(
                f"Token endpoint returned {response.status_code}: {response.body}"
            )
            raise UnexpectedStatusCode(response.status_code, response.body)

        try:
            access_token = parse_access_token_oauth2(response.body, response.content_type)
        except InvalidAccessToken:
            self.logger.error("Token endpoint response has no access_token")
            raise

        self.logger.info("Successfully obtained OAuth2 access token")
        return access_token

    async def get_access_token_by_request_parameters(
        self, params: Mapping[str, str]
    ) -> AccessToken:
        """Exchange the ``code`` from the callback parameters.

        Raises:
            InvalidArgument: If the callback carries ``error`` or no ``code``.
        """
        if "code" not in params and params.get("error"):
            description = params.get("error_description") or params["error"]
            self.logger.warning(f"Authorization was not granted: {params['error']}")
            raise InvalidArgument(f"Authorization failed: {description}")
        return await self.get_access_token(params.get("code"))

    async def complete(
        self, flow: OAuth2FlowState, params: Mapping[str, str]
    ) -> OAuth2FlowState:
        """Finish a flow started with :meth:`begin`.

        Raises:
            InvalidArgument: If ``flow`` has a state value and the callback
                does not echo it back.
        """
        if flow.state is not None and params.get("state") != flow.state:
            self.logger.warning("Callback state does not match the pending flow")
            raise InvalidArgument("state does not match the pending authorization")
        access_token = await self.get_access_token_by_request_parameters(params)
        return flow.advance(FlowStage.ACCESS_TOKEN_OBTAINED, access_token=access_token)

    async def exchange_for_token(self, params: Mapping[str, str]) -> AccessToken:
        return await self.get_access_token_by_request_parameters(params)
