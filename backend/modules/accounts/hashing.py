"""
Password hashing.

bcrypt with a per-password salt and a configurable work factor. Passwords
are pre-hashed with SHA-256 so multi-byte input never runs into bcrypt's
72-byte limit.
"""

import base64
import hashlib

import bcrypt


class PasswordHasher:
    """One-way password hashing with salted, deliberately slow bcrypt."""

    def __init__(self, rounds: int = 12):
        """
        Args:
            rounds: bcrypt cost factor (log2 of the iteration count)
        """
        self._rounds = rounds

    @staticmethod
    def _prehash(password: str) -> bytes:
        digest = hashlib.sha256(password.encode("utf-8")).digest()
        return base64.b64encode(digest)

    def hash(self, password: str) -> str:
        """Hash a password; every call uses a fresh salt."""
        salt = bcrypt.gensalt(rounds=self._rounds)
        return bcrypt.hashpw(self._prehash(password), salt).decode("utf-8")

    def verify(self, password: str, hashed: str) -> bool:
        """Check a password against a stored hash."""
        try:
            return bcrypt.checkpw(self._prehash(password), hashed.encode("utf-8"))
        except ValueError:
            # Stored value is not a bcrypt hash
            return False
