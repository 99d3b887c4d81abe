"""OAuth 1.0a request signing (HMAC-SHA1).

Builds the signature base string from a canonicalized request and signs it:

    base string = METHOD & enc(normalized URL) & enc(normalized parameters)
    signing key = enc(consumer_secret) & enc(token_secret)
    signature   = base64(HMAC-SHA1(signing key, base string))

Reference: RFC 5849 - The OAuth 1.0 Protocol, section 3.4
"""

import base64
import hashlib
import hmac
import secrets
import time
from typing import Callable, Mapping, Optional, Tuple
from urllib.parse import parse_qsl, quote, unquote, urlsplit

from authflow.core.protocols.http import RequestParameters, parameter_pairs
from authflow.domains.oauth.exceptions import SigningFailure
from authflow.domains.oauth.types import EMPTY_TOKEN, Consumer, SignedRequest, Token

SIGNATURE_METHOD = "HMAC-SHA1"
OAUTH_VERSION = "1.0"

_DEFAULT_PORTS = {"http": 80, "https": 443}


def percent_encode(value) -> str:
    """Percent-encode a value according to RFC 3986.

    Encodes all characters except unreserved: A-Z, a-z, 0-9, -, ., _, ~
    """
    return quote(str(value), safe="~")


def percent_decode(value: str) -> str:
    """Inverse of :func:`percent_encode`."""
    return unquote(value)


def generate_nonce() -> str:
    """Generate a cryptographically secure random nonce."""
    return secrets.token_urlsafe(32)


def get_timestamp() -> str:
    """Get current Unix timestamp as string."""
    return str(int(time.time()))


def normalize_url(uri: str) -> str:
    """Return scheme://host[:port]/path with the query and fragment removed.

    Scheme and host are lower-cased and default ports dropped (RFC 5849
    section 3.4.1.2).
    """
    parts = urlsplit(uri)
    scheme = parts.scheme.lower()
    host = (parts.hostname or "").lower()
    if ":" in host:
        host = f"[{host}]"
    port = parts.port
    if port is not None and _DEFAULT_PORTS.get(scheme) != port:
        host = f"{host}:{port}"
    return f"{scheme}://{host}{parts.path or '/'}"


def query_parameters(uri: str) -> list[Tuple[str, str]]:
    """Parameters carried in the URI query string."""
    return parse_qsl(urlsplit(uri).query, keep_blank_values=True)


def normalize_parameters(params: RequestParameters) -> str:
    """Encode, sort and join request parameters.

    Entries are sorted by encoded key, then by encoded value for repeated
    keys. ``oauth_signature`` is never part of the signed set.
    """
    encoded = sorted(
        (percent_encode(k), percent_encode(v))
        for k, v in parameter_pairs(params)
        if k != "oauth_signature"
    )
    return "&".join(f"{k}={v}" for k, v in encoded)


def build_signature_base_string(method: str, uri: str, params: RequestParameters) -> str:
    """Build the signature base string per RFC 5849.

    Format: HTTP_METHOD&URL&NORMALIZED_PARAMS

    Query parameters on ``uri`` are included in the normalized parameters.
    """
    all_params = query_parameters(uri) + parameter_pairs(params)
    parts = [
        method.upper(),
        percent_encode(normalize_url(uri)),
        percent_encode(normalize_parameters(all_params)),
    ]
    return "&".join(parts)


def sign_hmac_sha1(base_string: str, consumer_secret: str, token_secret: str = "") -> str:
    """Sign the base string using HMAC-SHA1.

    Signing key: percent_encode(consumer_secret)&percent_encode(token_secret)

    Raises:
        SigningFailure: If the inputs cannot be encoded.
    """
    if not isinstance(consumer_secret, str) or not isinstance(token_secret, str):
        raise SigningFailure("Consumer and token secrets must be strings")
    try:
        key = f"{percent_encode(consumer_secret)}&{percent_encode(token_secret)}"
        digest = hmac.new(key.encode("utf-8"), base_string.encode("utf-8"), hashlib.sha1).digest()
    except (TypeError, ValueError, AttributeError) as e:
        raise SigningFailure(f"Failed to sign request: {e}") from e
    return base64.b64encode(digest).decode("utf-8")


def build_authorization_header(params: Mapping[str, str], realm: Optional[str] = None) -> str:
    """Build OAuth1 Authorization header from the ``oauth_*`` parameters.

    Format: OAuth oauth_consumer_key="...", oauth_nonce="...", ...
    """
    param_strings = [] if realm is None else [f'realm="{realm}"']
    param_strings.extend(
        f'{percent_encode(k)}="{percent_encode(v)}"'
        for k, v in sorted(params.items())
        if k.startswith("oauth_")
    )
    return "OAuth " + ", ".join(param_strings)


class OAuth1Signer:
    """Signs requests on behalf of a consumer.

    ``nonce_factory`` and ``clock`` default to random nonces and the current
    time; pass fixed callables to get reproducible signatures.
    """

    def __init__(
        self,
        consumer: Consumer,
        *,
        nonce_factory: Callable[[], str] = generate_nonce,
        clock: Callable[[], str] = get_timestamp,
        realm: Optional[str] = None,
    ) -> None:
        self.consumer = consumer
        self._nonce_factory = nonce_factory
        self._clock = clock
        self._realm = realm

    def protocol_parameters(self, token: Token) -> dict[str, str]:
        """The oauth_* parameters every signed request carries."""
        params = {
            "oauth_consumer_key": self.consumer.key,
            "oauth_signature_method": SIGNATURE_METHOD,
            "oauth_timestamp": self._clock(),
            "oauth_nonce": self._nonce_factory(),
            "oauth_version": OAUTH_VERSION,
        }
        if token.key:
            params["oauth_token"] = token.key
        return params

    def sign(
        self,
        method: str,
        uri: str,
        parameters: Optional[RequestParameters] = None,
        token: Token = EMPTY_TOKEN,
    ) -> SignedRequest:
        """Sign a request.

        Caller parameters override protocol parameters of the same name, so
        ``oauth_callback`` and ``oauth_verifier`` travel in the header too.
        Repeated keys, in the URI query or the caller parameters, are signed
        and sent as they are.

        Raises:
            SigningFailure: If an ``oauth_*`` parameter appears more than once.
        """
        caller = [
            (k, v) for k, v in parameter_pairs(parameters or {}) if k != "oauth_signature"
        ]
        overridden = {k for k, _ in caller}
        signed = [
            (k, v) for k, v in self.protocol_parameters(token).items() if k not in overridden
        ]
        signed.extend(caller)

        query = query_parameters(uri)
        oauth_keys = [k for k, _ in query + signed if k.startswith("oauth_")]
        oauth_keys.append("oauth_signature")
        if len(oauth_keys) != len(set(oauth_keys)):
            raise SigningFailure("OAuth protocol parameters must not be repeated")

        base_string = build_signature_base_string(method, uri, signed)
        signature = sign_hmac_sha1(base_string, self.consumer.secret, token.secret)

        header_params = {k: v for k, v in signed if k.startswith("oauth_")}
        header_params["oauth_signature"] = signature
        return SignedRequest(
            method=method.upper(),
            uri=normalize_url(uri),
            parameters=tuple(query + signed + [("oauth_signature", signature)]),
            request_parameters=tuple(
                query + [(k, v) for k, v in signed if not k.startswith("oauth_")]
            ),
            authorization_header=build_authorization_header(header_params, realm=self._realm),
            base_string=base_string,
        )
