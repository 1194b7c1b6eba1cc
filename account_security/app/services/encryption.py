"""
Encryption of secrets at rest.

Second-factor secrets and recovery-code pools are stored as Fernet
ciphertext (AES-128-CBC + HMAC-SHA256, from the cryptography package).
"""

import logging
from typing import Optional

from cryptography.fernet import Fernet, InvalidToken

from config import ApplicationConfig

logger = logging.getLogger(__name__)


class DecryptionError(Exception):
    """Stored ciphertext could not be decrypted (corrupted or key changed)"""


class SecretCipher:
    """
    Symmetric cipher for values persisted on the users table.

    Never log plaintext values. Invalid ciphertext raises DecryptionError;
    it is an infrastructure failure, not a user-facing outcome.
    """

    def __init__(self, key: Optional[str] = None):
        self._fernet = Fernet((key or ApplicationConfig.ENCRYPTION_KEY).encode())

    def encrypt(self, plaintext: str) -> str:
        return self._fernet.encrypt(plaintext.encode()).decode()

    def decrypt(self, ciphertext: str) -> str:
        try:
            return self._fernet.decrypt(ciphertext.encode()).decode()
        except InvalidToken:
            logger.error("Decryption failed: invalid token or wrong key")
            raise DecryptionError("Failed to decrypt stored secret")

    @staticmethod
    def generate_key() -> str:
        return Fernet.generate_key().decode()
