"""
FastAPI dependencies for authentication.

Components are built once in ``main.create_app`` and kept on
``app.state``; these dependencies hand them to route handlers.
``get_current_account_id`` is the access gate used across all protected
routes.
"""

from __future__ import annotations

from typing import Optional

from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from auth.errors import UnauthorizedError
from auth.gate import AccessGate
from auth.password import PasswordHasher
from auth.service import AuthService
from auth.store import CredentialStore, SQLAlchemyCredentialStore
from auth.tokens import TokenIssuer
from database.session import get_db_session


def get_password_hasher(request: Request) -> PasswordHasher:
    return request.app.state.password_hasher


def get_token_issuer(request: Request) -> TokenIssuer:
    return request.app.state.token_issuer


def get_access_gate(request: Request) -> AccessGate:
    return request.app.state.access_gate


async def get_credential_store(
    session: AsyncSession = Depends(get_db_session),
) -> CredentialStore:
    return SQLAlchemyCredentialStore(session)


async def get_auth_service(
    store: CredentialStore = Depends(get_credential_store),
    hasher: PasswordHasher = Depends(get_password_hasher),
    issuer: TokenIssuer = Depends(get_token_issuer),
) -> AuthService:
    return AuthService(store=store, hasher=hasher, issuer=issuer)


async def get_current_account_id(
    request: Request,
    authorization: Optional[str] = Header(None, alias="Authorization"),
    gate: AccessGate = Depends(get_access_gate),
) -> str:
    """
    Run the access gate on the Bearer token, returning the authenticated
    ``account_id`` and attaching it to ``request.state``.
    """
    decision = gate.check(authorization)
    if not decision.admitted:
        raise UnauthorizedError(decision.reason)
    request.state.account_id = decision.account_id
    return decision.account_id
