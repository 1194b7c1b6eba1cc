"""
RFC 6238 time-based one-time passwords (HMAC-SHA1, 6 digits, 30 s step).
"""

import base64
import hashlib
import hmac
import secrets
import struct
from datetime import datetime, timezone
from urllib.parse import quote, urlencode

DIGITS = 6
PERIOD = 30


def generate_secret() -> str:
    """160-bit random secret, base32 without padding"""
    return base64.b32encode(secrets.token_bytes(20)).decode().rstrip("=")


def _decode_secret(secret: str) -> bytes:
    padded = secret.upper() + "=" * (-len(secret) % 8)
    return base64.b32decode(padded)


def time_step(at: datetime) -> int:
    # naive datetimes are UTC
    return int(at.replace(tzinfo=timezone.utc).timestamp()) // PERIOD


def code_at_step(secret: str, step: int) -> str:
    digest = hmac.new(_decode_secret(secret), struct.pack(">Q", step), hashlib.sha1).digest()
    offset = digest[-1] & 0x0F
    value = struct.unpack(">I", digest[offset : offset + 4])[0] & 0x7FFFFFFF
    return str(value % (10**DIGITS)).zfill(DIGITS)


def generate_code(secret: str, at: datetime) -> str:
    return code_at_step(secret, time_step(at))


def verify_code(secret: str, code: str, at: datetime, window: int = 0) -> bool:
    """Accept `code` at the current step or up to `window` steps either side"""
    code = (code or "").strip().replace(" ", "")
    if len(code) != DIGITS or not code.isdigit():
        return False

    current = time_step(at)
    return any(
        hmac.compare_digest(code_at_step(secret, current + offset), code)
        for offset in range(-window, window + 1)
    )


def provisioning_uri(secret: str, account: str, issuer: str) -> str:
    label = quote(f"{issuer}:{account}")
    query = urlencode(
        {
            "secret": secret,
            "issuer": issuer,
            "algorithm": "SHA1",
            "digits": DIGITS,
            "period": PERIOD,
        },
        quote_via=quote,
    )
    return f"otpauth://totp/{label}?{query}"
