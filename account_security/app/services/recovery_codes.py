"""
Recovery Code Vault

One-time backup codes for the second factor. The plaintext codes are
shown once; the stored pool is the Fernet ciphertext of a JSON list of
SHA-256 digests of the normalised codes.
"""

import hashlib
import json
import logging
import secrets
from typing import List, Optional

from account_security.app.services.encryption import SecretCipher
from account_security.app.services.unit_of_work import UnitOfWork
from account_security.domain.entities import User

logger = logging.getLogger(__name__)

POOL_SIZE = 8
CODE_LENGTH = 10
ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"
REGENERATE_ATTEMPTS = 3


def normalize(code: str) -> str:
    return (code or "").strip().replace("-", "").replace(" ", "").upper()


def digest(code: str) -> str:
    return hashlib.sha256(normalize(code).encode()).hexdigest()


class RecoveryCodeVault:
    """
    Business Rules:
    - Pools hold exactly 8 codes when generated
    - Matching is case-insensitive and exact
    - A matched code is removed with a compare-and-swap on the stored
      ciphertext, so two concurrent requests cannot both use it
    - Regenerating replaces the whole pool
    """

    def __init__(self, uow: UnitOfWork, cipher: SecretCipher):
        self.uow = uow
        self.cipher = cipher

    @staticmethod
    def generate() -> List[str]:
        return [
            "".join(secrets.choice(ALPHABET) for _ in range(CODE_LENGTH))
            for _ in range(POOL_SIZE)
        ]

    def seal(self, codes: List[str]) -> str:
        """Encrypt the digests of plaintext codes for storage"""
        return self._seal_digests([digest(code) for code in codes])

    def remaining(self, sealed: Optional[str]) -> int:
        return len(self._open(sealed))

    async def consume(self, user: User, candidate: str) -> bool:
        if not normalize(candidate):
            return False

        current = await self.uow.users.lock(user.id)
        if current is None:
            return False
        sealed = current.two_factor_recovery_codes
        digests = self._open(sealed)

        candidate_digest = digest(candidate)
        if candidate_digest not in digests:
            return False

        digests.remove(candidate_digest)
        swapped = await self.uow.users.replace_recovery_codes(
            user.id, sealed, self._seal_digests(digests)
        )
        if swapped:
            logger.info(f"Recovery code used for user {user.id}, {len(digests)} left")
        return swapped

    async def regenerate(self, user: User) -> Optional[List[str]]:
        """
        Replace the pool and return the new plaintext codes (shown once).

        Returns None when the stored pool kept changing underneath every
        attempt; nothing is replaced in that case.
        """
        codes = self.generate()
        sealed = self.seal(codes)
        for _ in range(REGENERATE_ATTEMPTS):
            current = await self.uow.users.lock(user.id)
            if current is None:
                return None
            if await self.uow.users.replace_recovery_codes(
                user.id, current.two_factor_recovery_codes, sealed
            ):
                return codes
        logger.warning(f"Recovery code pool for user {user.id} changed during regeneration")
        return None

    def _seal_digests(self, digests: List[str]) -> str:
        return self.cipher.encrypt(json.dumps(digests))

    def _open(self, sealed: Optional[str]) -> List[str]:
        if not sealed:
            return []
        return list(json.loads(self.cipher.decrypt(sealed)))
