"""Token endpoint response parsers.

Pure functions: each decodes a response body, checks the required fields
and builds the matching token value. A body that fails validation never
produces a token.
"""

import json
from typing import Any, Optional
from urllib.parse import parse_qsl

from authflow.domains.oauth.exceptions import InvalidAccessToken, MalformedTokenResponse
from authflow.domains.oauth.types import AccessToken, OAuth1AccessToken, Token

_OAUTH1_FIELDS = ("oauth_token", "oauth_token_secret")


def parse_form(body: str) -> dict[str, str]:
    """Decode an ``application/x-www-form-urlencoded`` body.

    Repeated keys keep their last value, matching how providers are read
    elsewhere.
    """
    return dict(parse_qsl(body or "", keep_blank_values=True))


def _require_oauth1_fields(params: dict[str, str], what: str) -> None:
    missing = [name for name in _OAUTH1_FIELDS if name not in params]
    if missing:
        raise MalformedTokenResponse(f"It is not a {what}: missing {', '.join(missing)}")


def parse_request_token(body: str) -> Token:
    """Parse temporary credentials from a request-token response.

    Raises:
        MalformedTokenResponse: If ``oauth_token`` or ``oauth_token_secret``
            is absent.
    """
    params = parse_form(body)
    _require_oauth1_fields(params, "request token")
    return Token(params["oauth_token"], params["oauth_token_secret"])


def parse_access_token_oauth1(body: str) -> OAuth1AccessToken:
    """Parse OAuth1 access-token credentials.

    ``user_id`` is captured when present; any other provider fields
    (``screen_name``, ...) are kept in ``extra``.

    Raises:
        MalformedTokenResponse: If ``oauth_token`` or ``oauth_token_secret``
            is absent.
    """
    params = parse_form(body)
    _require_oauth1_fields(params, "valid access token")
    extra = {k: v for k, v in params.items() if k not in (*_OAUTH1_FIELDS, "user_id")}
    return OAuth1AccessToken(
        key=params["oauth_token"],
        secret=params["oauth_token_secret"],
        user_id=params.get("user_id"),
        extra=extra,
    )


def _looks_like_json(body: str, content_type: Optional[str]) -> bool:
    if content_type and content_type.endswith("json"):
        return True
    return body.lstrip().startswith("{")


def _decode_json(body: str) -> dict[str, Any]:
    try:
        decoded = json.loads(body)
    except json.JSONDecodeError as e:
        raise InvalidAccessToken("Provider API returned an unexpected response") from e
    if not isinstance(decoded, dict):
        raise InvalidAccessToken("Provider API returned an unexpected response")
    return decoded


def parse_access_token_oauth2(body: str, content_type: Optional[str] = None) -> AccessToken:
    """Parse an OAuth2 token response.

    The body is form-encoded per the classic flow; JSON bodies (what most
    current providers send) are accepted too.

    Args:
        body: Raw response body.
        content_type: Media type of the response, if known.

    Raises:
        InvalidAccessToken: If ``access_token`` is absent or empty.
    """
    body = body or ""
    if _looks_like_json(body, content_type):
        params = {k: str(v) for k, v in _decode_json(body).items() if v is not None}
    else:
        params = parse_form(body)

    if not params.get("access_token"):
        raise InvalidAccessToken("Provider API returned an unexpected response")

    extra = {k: v for k, v in params.items() if k not in ("access_token", "user_id")}
    return AccessToken(
        token=params["access_token"],
        user_id=params.get("user_id"),
        extra=extra,
    )
