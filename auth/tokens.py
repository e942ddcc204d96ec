"""
JWT-style token creation and verification.

Tokens are base64-encoded JSON payloads signed with HMAC-SHA256::

    <urlsafe-b64(payload)>.<hex hmac of the payload segment>

The payload carries ``account_id``, ``iat``, ``exp`` and a random ``jti``.
Nothing is persisted: a token is checked purely against its own signed
contents and the server secret (env var: ``JWT_SECRET``).
"""

from __future__ import annotations

import binascii
import hashlib
import hmac
import json
import time
import uuid
from base64 import urlsafe_b64decode, urlsafe_b64encode
from typing import Callable

from auth.errors import ConfigurationError, InvalidTokenError

Clock = Callable[[], float]


def _require_secret(secret: str | None) -> bytes:
    if not secret:
        raise ConfigurationError("token signing secret is not configured")
    return secret.encode()


def _sign(secret: bytes, segment: str) -> str:
    return hmac.new(secret, segment.encode(), hashlib.sha256).hexdigest()


class TokenIssuer:
    """Mints signed tokens with a fixed lifetime."""

    def __init__(
        self,
        secret: str,
        lifetime_seconds: int,
        clock: Clock = time.time,
    ) -> None:
        self._secret = _require_secret(secret)
        self._lifetime = int(lifetime_seconds)
        self._clock = clock

    def issue(self, account_id: str) -> str:
        """Create a signed token containing ``account_id`` and expiry."""
        issued_at = int(self._clock())
        payload = {
            "account_id": account_id,
            "iat": issued_at,
            "exp": issued_at + self._lifetime,
            "jti": uuid.uuid4().hex,
        }
        segment = urlsafe_b64encode(json.dumps(payload).encode()).decode()
        return segment + "." + _sign(self._secret, segment)


class TokenVerifier:
    """Checks signature and expiry, recovering the bound account id."""

    def __init__(self, secret: str, clock: Clock = time.time) -> None:
        self._secret = _require_secret(secret)
        self._clock = clock

    def verify(self, token: str) -> str:
        """
        Verify token and return ``account_id``.

        Raises ``InvalidTokenError`` on bad signature, malformed or expired
        tokens.
        """
        if not isinstance(token, str):
            raise InvalidTokenError("bad format")
        parts = token.split(".")
        if len(parts) != 2 or not parts[0] or not parts[1]:
            raise InvalidTokenError("bad format")
        segment, signature = parts

        if not hmac.compare_digest(signature.encode(), _sign(self._secret, segment).encode()):
            raise InvalidTokenError("bad signature")

        try:
            payload = json.loads(urlsafe_b64decode(segment.encode()))
        except (binascii.Error, ValueError) as exc:
            raise InvalidTokenError("bad payload") from exc

        if not isinstance(payload, dict):
            raise InvalidTokenError("bad payload")
        account_id = payload.get("account_id")
        expires_at = payload.get("exp")
        if not isinstance(account_id, str) or not account_id:
            raise InvalidTokenError("missing account_id")
        if isinstance(expires_at, bool) or not isinstance(expires_at, (int, float)):
            raise InvalidTokenError("missing exp")

        if self._clock() >= expires_at:
            raise InvalidTokenError("token expired")
        return account_id
