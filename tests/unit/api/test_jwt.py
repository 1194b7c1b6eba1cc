"""
Unit tests for the signed, short-lived login challenge and OAuth state
"""

from datetime import datetime, timedelta
from uuid import uuid4

from account_security.api.utils.jwt import (
    create_oauth_state,
    create_two_factor_challenge,
    verify_oauth_state,
    verify_two_factor_challenge,
)

NOW = datetime(2026, 1, 15, 9, 0, 0)


def test_challenge_round_trip():
    user_id = uuid4()
    token = create_two_factor_challenge(user_id, NOW)

    assert verify_two_factor_challenge(token, NOW + timedelta(minutes=4)) == user_id


def test_challenge_expires_after_five_minutes():
    token = create_two_factor_challenge(uuid4(), NOW)

    assert verify_two_factor_challenge(token, NOW + timedelta(minutes=5)) is None


def test_tampered_challenge_is_rejected():
    token = create_two_factor_challenge(uuid4(), NOW)

    assert verify_two_factor_challenge(token[:-2] + "xx", NOW) is None
    assert verify_two_factor_challenge("not-a-jwt", NOW) is None


def test_oauth_state_is_not_a_challenge():
    state = create_oauth_state("google", "login", "nonce", NOW)

    assert verify_two_factor_challenge(state, NOW) is None


def test_oauth_state_is_bound_to_provider_and_action():
    user_id = uuid4()
    state = create_oauth_state("github", "connect", "nonce", NOW, user_id)

    payload = verify_oauth_state(state, "github", "connect", NOW)
    assert payload["user_id"] == str(user_id)
    assert verify_oauth_state(state, "google", "connect", NOW) is None
    assert verify_oauth_state(state, "github", "login", NOW) is None
    assert verify_oauth_state(state, "github", "connect", NOW + timedelta(minutes=11)) is None
