from datetime import datetime, timedelta, timezone
from typing import Optional
from uuid import UUID

from jose import JWTError, jwt

from config import ApplicationConfig

TWO_FACTOR_SCOPE = "two_factor"
OAUTH_STATE_SCOPE = "oauth_state"


def _timestamp(value: datetime) -> int:
    return int(value.replace(tzinfo=timezone.utc).timestamp())


def _encode(payload: dict, now: datetime, lifetime: timedelta) -> str:
    payload = dict(payload, iat=_timestamp(now), exp=_timestamp(now + lifetime))
    return jwt.encode(payload, ApplicationConfig.JWT_SECRET, algorithm="HS256")


def _decode(token: str, scope: str, now: datetime) -> Optional[dict]:
    """
    Verify signature, scope and expiry.

    Expiry is checked against the caller's clock instead of the wall clock.
    """
    try:
        payload = jwt.decode(
            token,
            ApplicationConfig.JWT_SECRET,
            algorithms=["HS256"],
            options={"verify_exp": False},
        )
    except JWTError:
        return None

    if payload.get("scope") != scope:
        return None
    if not isinstance(payload.get("exp"), int) or payload["exp"] <= _timestamp(now):
        return None
    return payload


def create_two_factor_challenge(user_id: UUID, now: datetime) -> str:
    """
    Short-lived token proving the password step of a login succeeded.

    Only the two-factor verification operation accepts it.
    """
    return _encode(
        {"sub": str(user_id), "scope": TWO_FACTOR_SCOPE},
        now,
        timedelta(minutes=ApplicationConfig.TWO_FACTOR_CHALLENGE_MINUTES),
    )


def verify_two_factor_challenge(token: str, now: datetime) -> Optional[UUID]:
    payload = _decode(token, TWO_FACTOR_SCOPE, now)
    if payload is None:
        return None
    try:
        return UUID(payload["sub"])
    except (KeyError, ValueError):
        return None


def create_oauth_state(
    provider: str, action: str, nonce: str, now: datetime, user_id: Optional[UUID] = None
) -> str:
    return _encode(
        {
            "scope": OAUTH_STATE_SCOPE,
            "provider": provider,
            "action": action,
            "nonce": nonce,
            "user_id": str(user_id) if user_id else None,
        },
        now,
        timedelta(minutes=ApplicationConfig.OAUTH_STATE_MINUTES),
    )


def verify_oauth_state(token: str, provider: str, action: str, now: datetime) -> Optional[dict]:
    payload = _decode(token, OAUTH_STATE_SCOPE, now)
    if payload is None:
        return None
    if payload.get("provider") != provider or payload.get("action") != action:
        return None
    return payload
