import pytest

from account_security.app.services.encryption import DecryptionError, SecretCipher


def test_encrypt_produces_fresh_ciphertext():
    cipher = SecretCipher(SecretCipher.generate_key())

    first = cipher.encrypt("JBSWY3DPEHPK3PXP")
    second = cipher.encrypt("JBSWY3DPEHPK3PXP")

    assert first != second
    assert cipher.decrypt(first) == "JBSWY3DPEHPK3PXP"


def test_decrypt_with_another_key_fails():
    ciphertext = SecretCipher(SecretCipher.generate_key()).encrypt("secret")

    with pytest.raises(DecryptionError):
        SecretCipher(SecretCipher.generate_key()).decrypt(ciphertext)


def test_default_key_comes_from_config():
    cipher = SecretCipher()

    assert cipher.decrypt(cipher.encrypt("value")) == "value"
