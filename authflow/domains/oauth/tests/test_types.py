"""Tests for the immutable value types."""

import dataclasses

import pytest

from authflow.domains.oauth.types import (
    EMPTY_TOKEN,
    FlowStage,
    OAuth1FlowState,
    OAuth2FlowState,
    SignedRequest,
    Token,
)


def test_flow_state_defaults():
    flow = OAuth1FlowState()

    assert flow.stage == FlowStage.UNAUTHENTICATED
    assert flow.token == EMPTY_TOKEN
    assert flow.authorize_url is None
    assert OAuth2FlowState().state is None


def test_advance_returns_new_value():
    flow = OAuth1FlowState()

    advanced = flow.advance(FlowStage.REQUEST_TOKEN_OBTAINED, token=Token("t", "s"))

    assert advanced is not flow
    assert advanced.stage == FlowStage.REQUEST_TOKEN_OBTAINED
    assert flow.stage == FlowStage.UNAUTHENTICATED
    assert flow.token == EMPTY_TOKEN


def test_flow_state_is_frozen():
    with pytest.raises(dataclasses.FrozenInstanceError):
        OAuth2FlowState().stage = FlowStage.ACCESS_TOKEN_OBTAINED


def test_signed_request_keeps_repeated_keys():
    signed = SignedRequest(
        method="POST",
        uri="https://api.example.com/r",
        parameters=(
            ("tag", "a"),
            ("tag", "b"),
            ("oauth_nonce", "n"),
            ("oauth_signature", "sig"),
        ),
        request_parameters=(("tag", "a"), ("tag", "b")),
        authorization_header='OAuth oauth_nonce="n", oauth_signature="sig"',
        base_string="POST&...",
    )

    assert signed.signature == "sig"
    assert signed.request_parameters == (("tag", "a"), ("tag", "b"))
    assert signed.oauth_parameters == {"oauth_nonce": "n", "oauth_signature": "sig"}
