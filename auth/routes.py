"""
Auth API routes — register, login.

Route prefix: /api/auth
"""

from __future__ import annotations

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, status
from pydantic import AliasChoices, BaseModel, Field

from auth.dependencies import get_auth_service
from auth.errors import AuthError, ServerError
from auth.service import AuthResult, AuthService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


# ── Request / response schemas ─────────────────────────────────────────


class RegisterRequest(BaseModel):
    username: str = Field(
        ..., min_length=2, max_length=64,
        validation_alias=AliasChoices("username", "handle"),
    )
    email: str = Field(
        ..., min_length=3, max_length=255,
        validation_alias=AliasChoices("email", "address"),
    )
    password: str = Field(
        ..., min_length=1, max_length=128,
        validation_alias=AliasChoices("password", "plaintext"),
    )


class LoginRequest(BaseModel):
    email: str = Field(..., validation_alias=AliasChoices("email", "address"))
    password: str = Field(..., validation_alias=AliasChoices("password", "plaintext"))


class AuthResponse(BaseModel):
    account_id: str = Field(..., serialization_alias="accountId")
    token: str


def _to_response(result: AuthResult) -> Dict[str, Any]:
    return AuthResponse(account_id=result.account_id, token=result.token).model_dump(by_alias=True)


# ── Endpoints ──────────────────────────────────────────────────────────


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(
    req: RegisterRequest,
    service: AuthService = Depends(get_auth_service),
) -> Dict[str, Any]:
    """Register a new account."""
    try:
        result = await service.register(req.username, req.email, req.password)
    except AuthError:
        raise
    except Exception as exc:
        logger.exception("Registration failed")
        raise ServerError() from exc
    return _to_response(result)


@router.post("/login")
async def login(
    req: LoginRequest,
    service: AuthService = Depends(get_auth_service),
) -> Dict[str, Any]:
    """Login with email + password."""
    try:
        result = await service.login(req.email, req.password)
    except AuthError:
        raise
    except Exception as exc:
        logger.exception("Login failed")
        raise ServerError() from exc
    return _to_response(result)
