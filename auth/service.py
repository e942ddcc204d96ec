"""
Registration and login flow.

Orchestrates the credential store, the password hasher and the token
issuer. Unknown addresses and wrong passwords raise the same
``InvalidCredentialsError`` so callers cannot enumerate accounts.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Optional

from auth.errors import AccountExistsError, InvalidCredentialsError
from auth.password import PasswordHasher
from auth.store import AccountRecord, CredentialStore
from auth.tokens import TokenIssuer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthResult:
    account_id: str
    token: str


class AuthService:
    def __init__(
        self,
        *,
        store: CredentialStore,
        hasher: PasswordHasher,
        issuer: TokenIssuer,
    ) -> None:
        self._store = store
        self._hasher = hasher
        self._issuer = issuer

    async def register(self, handle: str, address: str, password: str) -> AuthResult:
        if await self._store.find_by_address(address) is not None:
            raise AccountExistsError()

        password_hash = await asyncio.to_thread(self._hasher.hash, password)
        account = await self._store.add(
            handle=handle,
            address=address,
            password_hash=password_hash,
        )
        logger.info("Registered account %s (%s)", account.handle, account.account_id)
        return AuthResult(account.account_id, self._issuer.issue(account.account_id))

    def _check_password(self, password: str, account: Optional[AccountRecord]) -> bool:
        # Unknown addresses still pay for one bcrypt check
        digest = account.password_hash if account is not None else self._hasher.dummy_hash
        matched = self._hasher.verify(password, digest)
        return matched and account is not None

    async def login(self, address: str, password: str) -> AuthResult:
        account = await self._store.find_by_address(address)
        if not await asyncio.to_thread(self._check_password, password, account):
            logger.warning("Failed login attempt")
            raise InvalidCredentialsError()

        logger.info("Login: %s (%s)", account.handle, account.account_id)
        return AuthResult(account.account_id, self._issuer.issue(account.account_id))
