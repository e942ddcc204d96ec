"""
REST API routes behind the access gate.
"""

from __future__ import annotations

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends

from auth.dependencies import get_credential_store, get_current_account_id
from auth.errors import AccountNotFoundError
from auth.store import CredentialStore

logger = logging.getLogger(__name__)

events_router = APIRouter(tags=["events"])
users_router = APIRouter(tags=["users"])


@events_router.get("/protected")
async def protected(
    account_id: str = Depends(get_current_account_id),
) -> Dict[str, Any]:
    """Example protected route."""
    return {"message": "This is a protected route", "accountId": account_id}


@users_router.get("/me")
async def current_account(
    account_id: str = Depends(get_current_account_id),
    store: CredentialStore = Depends(get_credential_store),
) -> Dict[str, Any]:
    """Profile of the authenticated account (never the password hash)."""
    account = await store.find_by_id(account_id)
    if account is None:
        raise AccountNotFoundError()
    return {
        "accountId": account.account_id,
        "username": account.handle,
        "email": account.address,
    }
