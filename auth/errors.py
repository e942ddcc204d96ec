"""
Error taxonomy for the credential flow and the access gate.

Every ``AuthError`` carries the HTTP status and the client-facing
message; the exception handlers in ``api.middleware`` render it as
``{"message": ...}`` without leaking internal detail.
"""

from __future__ import annotations

from fastapi import status


class ConfigurationError(RuntimeError):
    """Fatal startup misconfiguration (e.g. missing signing secret)."""


class InvalidTokenError(Exception):
    """Token rejected by the verifier (bad signature, malformed, expired)."""


class AuthError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = "server error"

    def __init__(self, message: str | None = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)


class AccountExistsError(AuthError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "account already exists"


class InvalidCredentialsError(AuthError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "invalid credentials"


class UnauthorizedError(AuthError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "token is not valid"


class AccountNotFoundError(AuthError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "account not found"


class ServerError(AuthError):
    pass
