"""
bcrypt adapters - Implement PasswordHasher and SaltGenerator protocols.

The salt is a full bcrypt salt string ("$2b$<cost>$<22 chars>"), so the
cost factor travels with the salt and hashing is deterministic for the
same (password, salt) pair.

bcrypt only reads the first 72 bytes of its input, and bcrypt >= 5 rejects
anything longer. Passwords are therefore reduced to the base64 of their
SHA-256 digest (44 bytes) before hashing, as passlib's bcrypt_sha256 does.
"""

import base64
import hashlib

import bcrypt


def _prehash(plaintext: str) -> bytes:
    return base64.b64encode(hashlib.sha256(plaintext.encode()).digest())


class BcryptSaltGenerator:
    """
    Implements SaltGenerator protocol via bcrypt.gensalt().

    Uses structural subtyping - no explicit inheritance from Protocol.
    """

    def __init__(self, rounds: int = 10) -> None:
        """
        Args:
            rounds: bcrypt cost factor (>= 10 for production use)
        """
        self._rounds = rounds

    def generate(self) -> str:
        return bcrypt.gensalt(rounds=self._rounds).decode()


class BcryptPasswordHasher:
    """Implements PasswordHasher protocol via SHA-256 pre-hashing and bcrypt.hashpw()."""

    def hash(self, plaintext: str, salt: str) -> str:
        """
        Hash a password of any length with a salt from BcryptSaltGenerator.

        A stored hash can be passed back as the salt to verify a candidate:
        `hash(candidate, stored) == stored`.

        Raises:
            ValueError: If salt is not a valid bcrypt salt
        """
        return bcrypt.hashpw(_prehash(plaintext), salt.encode()).decode()
