"""
Unit tests for RFC 6238 codes and window tolerance
"""

from datetime import datetime, timedelta
from urllib.parse import parse_qs, urlparse

from account_security.app.services import totp

# RFC 6238 appendix B secret ("12345678901234567890" in base32)
RFC_SECRET = "GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ"


def test_rfc_reference_vectors():
    assert totp.generate_code(RFC_SECRET, datetime(1970, 1, 1, 0, 0, 59)) == "287082"
    assert totp.generate_code(RFC_SECRET, datetime(2005, 3, 18, 1, 58, 29)) == "081804"
    assert totp.generate_code(RFC_SECRET, datetime(2009, 2, 13, 23, 31, 30)) == "005924"


def test_generated_secret_is_unpadded_base32():
    secret = totp.generate_secret()

    assert len(secret) == 32
    assert "=" not in secret
    assert totp.generate_code(secret, datetime(2026, 1, 15)).isdigit()


def test_window_zero_accepts_only_current_step():
    secret = totp.generate_secret()
    now = datetime(2026, 1, 15, 9, 0, 0)
    previous = totp.generate_code(secret, now - timedelta(seconds=30))

    assert totp.verify_code(secret, totp.generate_code(secret, now), now, window=0)
    assert not totp.verify_code(secret, previous, now, window=0)


def test_window_two_accepts_two_steps_either_side():
    secret = totp.generate_secret()
    now = datetime(2026, 1, 15, 9, 0, 0)
    step = totp.time_step(now)

    for offset in (-2, -1, 0, 1, 2):
        assert totp.verify_code(secret, totp.code_at_step(secret, step + offset), now, window=2)

    for offset in (-3, 3):
        code = totp.code_at_step(secret, step + offset)
        # A far step can collide with a near one by chance; only assert when distinct
        near = {totp.code_at_step(secret, step + o) for o in range(-2, 3)}
        if code not in near:
            assert not totp.verify_code(secret, code, now, window=2)


def test_malformed_codes_are_rejected():
    secret = totp.generate_secret()
    now = datetime(2026, 1, 15, 9, 0, 0)

    assert not totp.verify_code(secret, "", now, window=2)
    assert not totp.verify_code(secret, "12345", now, window=2)
    assert not totp.verify_code(secret, "abcdef", now, window=2)


def test_code_with_spaces_is_accepted():
    secret = totp.generate_secret()
    now = datetime(2026, 1, 15, 9, 0, 0)
    code = totp.generate_code(secret, now)

    assert totp.verify_code(secret, f"{code[:3]} {code[3:]}", now)


def test_provisioning_uri():
    uri = totp.provisioning_uri("JBSWY3DPEHPK3PXP", "user@acme.com", "Fleet Platform")
    parsed = urlparse(uri)
    query = parse_qs(parsed.query)

    assert parsed.scheme == "otpauth"
    assert parsed.netloc == "totp"
    assert "user%40acme.com" in parsed.path
    assert query["secret"] == ["JBSWY3DPEHPK3PXP"]
    assert query["issuer"] == ["Fleet Platform"]
    assert query["digits"] == ["6"]
    assert query["period"] == ["30"]
