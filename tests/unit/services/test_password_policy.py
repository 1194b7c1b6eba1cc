"""
Unit tests for password strength rules and reuse detection
"""

from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest

from account_security.app.services.password_hasher import hash_password
from account_security.app.services.password_policy import (
    PasswordPolicy,
    validate_strength,
    violations_details,
)
from account_security.domain.entities import PasswordHistory, User


def codes(password):
    return [v.code for v in validate_strength(password)]


def test_strong_password_has_no_violations():
    assert validate_strength("Str0ng!Pass") == []


def test_short_password_reports_every_failed_rule():
    assert codes("Weak1") == ["too_short", "missing_symbol"]


def test_missing_character_classes():
    assert codes("alllowercase1!") == ["missing_uppercase"]
    assert codes("ALLUPPERCASE1!") == ["missing_lowercase"]
    assert codes("NoDigitsHere!") == ["missing_digit"]


def test_common_password_is_rejected_case_insensitively():
    assert "common_password" in codes("Password123")
    assert "common_password" in codes("PASSWORD123")


def test_violations_details_shape():
    details = violations_details(validate_strength("short"))

    assert [v["code"] for v in details["violations"]][0] == "too_short"
    assert all("message" in v for v in details["violations"])


@pytest.mark.asyncio
async def test_reuse_matches_any_kept_hash(mock_uow, clock):
    user = User(id=uuid4(), tenant_id=uuid4(), name="u", email="u@acme.com", password_hash="x")
    mock_uow.password_history = MagicMock()
    mock_uow.password_history.get_recent = AsyncMock(
        return_value=[
            PasswordHistory(user_id=user.id, password_hash=hash_password("Old1!Password")),
            PasswordHistory(user_id=user.id, password_hash=hash_password("Older1!Password")),
        ]
    )

    policy = PasswordPolicy(mock_uow, clock, depth=5)

    assert await policy.is_reused(user, "Older1!Password") is True
    assert await policy.is_reused(user, "Brand1!NewPass") is False
    mock_uow.password_history.get_recent.assert_awaited_with(user.id, 5)


@pytest.mark.asyncio
async def test_record_history_prunes_to_depth(mock_uow, clock):
    user = User(id=uuid4(), tenant_id=uuid4(), name="u", email="u@acme.com", password_hash="x")
    mock_uow.password_history = MagicMock()
    mock_uow.password_history.create = AsyncMock(side_effect=lambda entry: entry)
    mock_uow.password_history.prune = AsyncMock(return_value=1)

    entry = await PasswordPolicy(mock_uow, clock, depth=5).record_history(user, "hash")

    assert entry.password_hash == "hash"
    assert entry.created_at == clock.now()
    mock_uow.password_history.prune.assert_awaited_once_with(user.id, 5)
