"""Tests for session token handling and identity resolution."""

from __future__ import annotations

from datetime import timedelta

import pytest

from compliance_feed.domain.entities import (
    ANONYMOUS_IDENTITY,
    ROLE_BUYER_ADMIN,
    SessionContext,
    resolve_identity_key,
)
from compliance_feed.infrastructure.security import (
    create_session_token,
    decode_session_token,
)


@pytest.mark.parametrize(
    ("context", "expected"),
    [
        (SessionContext(user_id="u-1", email="a@b"), "u-1"),
        (SessionContext(email="a@b"), "a@b"),
        (SessionContext(user_id="  ", email="a@b"), "a@b"),
        (SessionContext(), ANONYMOUS_IDENTITY),
        (None, ANONYMOUS_IDENTITY),
    ],
)
def test_identity_key_prefers_user_id_then_email(context, expected):
    assert resolve_identity_key(context) == expected


def test_token_round_trip_builds_the_session():
    token = create_session_token(user_id="b-1", email="buyer@y", role=ROLE_BUYER_ADMIN)

    context = decode_session_token(token)

    assert context.user_id == "b-1"
    assert context.email == "buyer@y"
    assert context.role == ROLE_BUYER_ADMIN
    assert context.access_token == token
    assert context.identity_key == "b-1"


def test_expired_token_is_rejected():
    token = create_session_token(email="late@x", expires_delta=timedelta(seconds=-5))

    with pytest.raises(ValueError):
        decode_session_token(token)


def test_garbage_token_is_rejected():
    with pytest.raises(ValueError):
        decode_session_token("not-a-token")
