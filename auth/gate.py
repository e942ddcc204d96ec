"""
Access gate — admits or rejects a call based on its bearer token.

The gate is a plain pipeline stage: ``check`` returns a ``GateDecision``
and the FastAPI dependency in ``auth.dependencies`` turns a rejection
into an ``UnauthorizedError`` before any protected handler runs.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from auth.errors import InvalidTokenError
from auth.tokens import TokenVerifier

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "

MISSING_CREDENTIAL = "no token, authorization denied"
INVALID_CREDENTIAL = "token is not valid"


def parse_bearer(header_value: Optional[str]) -> Optional[str]:
    """Return the token from an ``Authorization`` header value, or ``None``."""
    if not header_value or not header_value.startswith(BEARER_PREFIX):
        return None
    token = header_value[len(BEARER_PREFIX):].strip()
    return token or None


@dataclass(frozen=True)
class GateDecision:
    admitted: bool
    account_id: Optional[str] = None
    reason: Optional[str] = None

    @classmethod
    def admit(cls, account_id: str) -> "GateDecision":
        return cls(admitted=True, account_id=account_id)

    @classmethod
    def reject(cls, reason: str) -> "GateDecision":
        return cls(admitted=False, reason=reason)


class AccessGate:
    def __init__(self, verifier: TokenVerifier) -> None:
        self._verifier = verifier

    def check(self, header_value: Optional[str]) -> GateDecision:
        token = parse_bearer(header_value)
        if token is None:
            return GateDecision.reject(MISSING_CREDENTIAL)
        try:
            account_id = self._verifier.verify(token)
        except InvalidTokenError as exc:
            logger.debug("Rejected bearer token: %s", exc)
            return GateDecision.reject(INVALID_CREDENTIAL)
        return GateDecision.admit(account_id)
