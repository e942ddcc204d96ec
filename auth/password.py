"""
Password hashing and verification.

Uses bcrypt for password hashing with automatic
salting and configurable work factor.
"""

from __future__ import annotations

import hashlib
import secrets
from base64 import b64encode

import bcrypt

# bcrypt only consumes the first 72 bytes of its input
_BCRYPT_MAX_BYTES = 72


def _prepare(password: str) -> bytes:
    raw = password.encode()
    if len(raw) > _BCRYPT_MAX_BYTES:
        raw = b64encode(hashlib.sha256(raw).digest())
    return raw


class PasswordHasher:
    """bcrypt hasher with a fixed work factor."""

    def __init__(self, rounds: int = 12) -> None:
        self._rounds = rounds
        # checked when no account matches, so every login costs one bcrypt check
        self.dummy_hash = self.hash(secrets.token_urlsafe(16))

    def hash(self, password: str) -> str:
        """Hash a password with a fresh salt on every call."""
        return bcrypt.hashpw(_prepare(password), bcrypt.gensalt(rounds=self._rounds)).decode()

    def verify(self, password: str, password_hash: str) -> bool:
        """Constant-time comparison against a bcrypt hash."""
        if not isinstance(password, str) or not isinstance(password_hash, str):
            return False
        try:
            return bcrypt.checkpw(_prepare(password), password_hash.encode())
        except (ValueError, TypeError):
            return False
