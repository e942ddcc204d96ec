"""
Credential store — persistence for account records.

``SQLAlchemyCredentialStore`` relies on the database unique constraints
on ``handle`` and ``address``; a violation on insert (including a
concurrent duplicate registration) is reported as ``AccountExistsError``.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Protocol

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from auth.errors import AccountExistsError
from database.models import Account

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AccountRecord:
    account_id: str
    handle: str
    address: str
    password_hash: str
    created_at: Optional[datetime] = None


class CredentialStore(Protocol):
    async def find_by_address(self, address: str) -> Optional[AccountRecord]: ...
    async def find_by_id(self, account_id: str) -> Optional[AccountRecord]: ...
    async def add(self, handle: str, address: str, password_hash: str) -> AccountRecord: ...


def _to_record(row: Account) -> AccountRecord:
    return AccountRecord(
        account_id=str(row.account_id),
        handle=row.handle,
        address=row.address,
        password_hash=row.password_hash,
        created_at=row.created_at,
    )


class SQLAlchemyCredentialStore:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def find_by_address(self, address: str) -> Optional[AccountRecord]:
        result = await self._session.execute(
            select(Account).where(Account.address == address)
        )
        row = result.scalar_one_or_none()
        return _to_record(row) if row is not None else None

    async def find_by_id(self, account_id: str) -> Optional[AccountRecord]:
        try:
            uid = uuid.UUID(account_id)
        except (TypeError, ValueError):
            return None
        row = await self._session.get(Account, uid)
        return _to_record(row) if row is not None else None

    async def add(self, handle: str, address: str, password_hash: str) -> AccountRecord:
        row = Account(
            account_id=uuid.uuid4(),
            handle=handle,
            address=address,
            password_hash=password_hash,
        )
        self._session.add(row)
        try:
            await self._session.flush()
            await self._session.commit()
        except IntegrityError as exc:
            await self._session.rollback()
            logger.info("Unique constraint rejected account %s", handle)
            raise AccountExistsError() from exc
        return _to_record(row)
