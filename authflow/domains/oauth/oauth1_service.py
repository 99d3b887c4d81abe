"""OAuth1 flow controller for providers that use the OAuth 1.0 protocol.

Handles the 3-legged OAuth1 flow:
1. Obtain temporary credentials (request token)
2. Redirect user for authorization
3. Exchange for access token

Flow progress is carried by ``OAuth1FlowState`` values. The provider itself
holds only configuration, so one instance can serve concurrent flows.

Reference: RFC 5849 - The OAuth 1.0 Protocol
"""

from typing import Mapping, Optional
from urllib.parse import urlencode

from authflow.core.logging import ContextualLogger
from authflow.core.protocols.http import HttpTransport, RequestParameters, TransportResponse
from authflow.domains.oauth.base import BaseOAuthProvider
from authflow.domains.oauth.config import OAuth1ProviderConfig
from authflow.domains.oauth.exceptions import (
    InvalidArgument,
    MalformedTokenResponse,
    UnexpectedStatusCode,
)
from authflow.domains.oauth.parsers import parse_access_token_oauth1, parse_request_token
from authflow.domains.oauth.protocols import IdentityResolverProtocol
from authflow.domains.oauth.signing import OAuth1Signer
from authflow.domains.oauth.types import (
    EMPTY_TOKEN,
    FlowStage,
    OAuth1AccessToken,
    OAuth1FlowState,
    Token,
)

_REUSABLE_STAGES = (FlowStage.REQUEST_TOKEN_OBTAINED, FlowStage.AUTHORIZATION_PENDING)


def _require_string(params: Mapping[str, str], name: str) -> str:
    value = params.get(name)
    if not isinstance(value, str) or not value:
        raise InvalidArgument(f"Parameter {name} must be a non-empty string")
    return value


class OAuth1Provider(BaseOAuthProvider[OAuth1ProviderConfig]):
    """Drives the OAuth1 request-token / authorize / access-token exchange."""

    log_prefix = "OAuth1"

    def __init__(
        self,
        config: OAuth1ProviderConfig,
        transport: HttpTransport,
        *,
        signer: Optional[OAuth1Signer] = None,
        identity_resolver: Optional[IdentityResolverProtocol] = None,
        logger: Optional[ContextualLogger] = None,
    ) -> None:
        """Initialize the provider.

        Args:
            config: OAuth1 endpoints and consumer credentials.
            transport: HTTP collaborator.
            signer: Request signer; built from the consumer when omitted.
                Pass one with a fixed nonce/clock for reproducible requests.
            identity_resolver: Optional provider-specific identity lookup.
            logger: Base logger.
        """
        super().__init__(config, transport, identity_resolver=identity_resolver, logger=logger)
        self.signer = signer or OAuth1Signer(self.consumer, realm=config.realm)

    # ------------------------------------------------------------------
    # Signed requests
    # ------------------------------------------------------------------

    async def oauth_request(
        self,
        uri: str,
        method: str = "GET",
        parameters: Optional[RequestParameters] = None,
        headers: Optional[Mapping[str, str]] = None,
        token: Token = EMPTY_TOKEN,
    ) -> TransportResponse:
        """Sign a request with the consumer and ``token`` and send it.

        The OAuth parameters travel in the ``Authorization`` header; the
        remaining parameters are sent as query string or form body.
        Caller headers override the generated ``Authorization`` header.
        """
        signed = self.signer.sign(method, uri, parameters, token)

        request_headers = {"Authorization": signed.authorization_header, **dict(headers or {})}
        request_headers["Accept"] = "application/json"
        request_headers["Content-Type"] = "application/x-www-form-urlencoded"

        return await self.transport.request(
            signed.uri,
            signed.request_parameters,
            signed.method,
            request_headers,
            self.transport_options,
        )

    # ------------------------------------------------------------------
    # Step 1: temporary credentials
    # ------------------------------------------------------------------

    async def request_auth_token(self) -> Token:
        """Obtain temporary credentials (request token) from the provider.

        Under OAuth 1.0a the callback URL is sent as ``oauth_callback``.

        Returns:
            The request token.

        Raises:
            UnexpectedStatusCode: If the endpoint does not answer 200.
            MalformedTokenResponse: If the body lacks token or secret.
            TransportError: If the request could not be sent.
        """
        parameters = dict(self.config.request_token_parameters)
        if self.config.oauth1_version == "1.0a":
            parameters["oauth_callback"] = self.redirect_url

        self.logger.info(
            f"Requesting OAuth1 temporary credentials from {self.config.request_token_uri}"
        )
        response = await self.oauth_request(
            self.config.request_token_uri,
            self.config.request_token_method,
            parameters,
            self.config.request_token_headers,
        )

        if response.status_code != 200:
            self.logger.error(
                f"Request token endpoint returned {response.status_code}: {response.body}"
            )
            raise UnexpectedStatusCode(response.status_code, response.body)

        try:
            token = parse_request_token(response.body)
        except MalformedTokenResponse:
            self.logger.error("Invalid request token response from OAuth1 provider")
            raise

        self.logger.info("Successfully obtained OAuth1 temporary credentials")
        return token

    async def obtain_request_token(
        self, flow: Optional[OAuth1FlowState] = None
    ) -> OAuth1FlowState:
        """Move a flow to ``REQUEST_TOKEN_OBTAINED``.

        A request token already on ``flow`` is kept; otherwise a new one is
        requested.
        """
        flow = flow or OAuth1FlowState()
        if flow.stage in _REUSABLE_STAGES and flow.token.key:
            return flow
        token = await self.request_auth_token()
        return OAuth1FlowState().advance(FlowStage.REQUEST_TOKEN_OBTAINED, token=token)

    # ------------------------------------------------------------------
    # Step 2: user authorization
    # ------------------------------------------------------------------

    def build_authorization_url(self, token: Token) -> str:
        """Authorize URL for a request token."""
        return f"{self.config.authorize_uri}?{urlencode({'oauth_token': token.key})}"

    async def begin(self, flow: Optional[OAuth1FlowState] = None) -> OAuth1FlowState:
        """Start (or resume) a flow and move it to ``AUTHORIZATION_PENDING``.

        Store the returned state until the provider redirects back, then
        pass it to :meth:`complete`.
        """
        flow = await self.obtain_request_token(flow)
        return flow.advance(
            FlowStage.AUTHORIZATION_PENDING,
            authorize_url=self.build_authorization_url(flow.token),
        )

    async def make_auth_url(self, flow: Optional[OAuth1FlowState] = None) -> str:
        """Return the URL to send the user to.

        Requests a token first unless ``flow`` already carries one. Use
        :meth:`begin` instead when the request token secret must be kept for
        the exchange.
        """
        return (await self.begin(flow)).authorize_url

    # ------------------------------------------------------------------
    # Step 3: access token
    # ------------------------------------------------------------------

    async def get_access_token_by_request_parameters(
        self,
        params: Mapping[str, str],
        flow: Optional[OAuth1FlowState] = None,
    ) -> OAuth1AccessToken:
        """Exchange the callback's ``oauth_token`` and ``oauth_verifier``.

        The request token secret is taken from ``flow`` when given; without
        a flow the exchange is signed with an empty token secret.

        Raises:
            InvalidArgument: If a callback parameter is missing, or the
                returned ``oauth_token`` is not the one on ``flow``.
        """
        oauth_token = _require_string(params, "oauth_token")
        oauth_verifier = _require_string(params, "oauth_verifier")

        secret = ""
        if flow is not None and flow.token.key:
            if flow.token.key != oauth_token:
                self.logger.warning("Callback oauth_token does not match the pending flow")
                raise InvalidArgument("oauth_token does not match the pending request token")
            secret = flow.token.secret

        return await self.get_access_token(Token(oauth_token, secret), oauth_verifier)

    async def get_access_token(self, token: Token, verifier: str) -> OAuth1AccessToken:
        """Exchange temporary credentials for access token credentials.

        Args:
            token: The authorized request token.
            verifier: ``oauth_verifier`` from the authorization callback.

        Returns:
            The access token, with ``user_id`` when the provider sends one.

        Raises:
            InvalidArgument: If ``verifier`` is not a non-empty string.
            UnexpectedStatusCode: If the endpoint does not answer 200.
            MalformedTokenResponse: If the body lacks token or secret.
            TransportError: If the request could not be sent.
        """
        if not isinstance(verifier, str) or not verifier:
            raise InvalidArgument("Parameter oauth_verifier must be a non-empty string")

        parameters = dict(self.config.request_token_parameters)
        parameters["oauth_verifier"] = verifier

        self.logger.info(
            f"Exchanging OAuth1 temporary credentials for access token at "
            f"{self.config.access_token_uri}"
        )
        response = await self.oauth_request(
            self.config.access_token_uri,
            self.config.request_token_method,
            parameters,
            self.config.request_token_headers,
            token=token,
        )

        if response.status_code != 200:
            self.logger.error(
                f"Access token endpoint returned {response.status_code}: {response.body}"
            )
            raise UnexpectedStatusCode(response.status_code, response.body)

        try:
            access_token = parse_access_token_oauth1(response.body)
        except MalformedTokenResponse:
            self.logger.error("Invalid access token response from OAuth1 provider")
            raise

        self.logger.info("Successfully obtained OAuth1 access token")
        return access_token

    async def complete(
        self, flow: OAuth1FlowState, params: Mapping[str, str]
    ) -> OAuth1FlowState:
        """Finish a flow started with :meth:`begin`.

        Returns a new state in ``ACCESS_TOKEN_OBTAINED``. On failure the
        exception propagates and ``flow`` is still valid for a retry.
        """
        access_token = await self.get_access_token_by_request_parameters(params, flow)
        return flow.advance(
            FlowStage.ACCESS_TOKEN_OBTAINED,
            token=access_token,
            access_token=access_token,
        )

    async def exchange_for_token(self, params: Mapping[str, str]) -> OAuth1AccessToken:
        return await self.get_access_token_by_request_parameters(params)
