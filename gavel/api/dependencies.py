"""
Gavel - API Dependencies
========================

FastAPI dependency injection utilities.

Author: Gavel contributors
"""

from typing import TYPE_CHECKING, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from gavel.api.errors import APIError, ErrorCode
from gavel.api.models.auth import TokenPayload
from gavel.api.services.auth import get_auth_service

if TYPE_CHECKING:
    from gavel.services.appeals import AppealService


# =============================================================================
# Security
# =============================================================================

security = HTTPBearer(auto_error=False)


# =============================================================================
# Appeal Service Reference
# =============================================================================

_appeal_service: Optional["AppealService"] = None


def set_appeal_service(service: Optional["AppealService"]) -> None:
    """Set the appeal service for dependency injection."""
    global _appeal_service
    _appeal_service = service


def is_appeal_service_ready() -> bool:
    """True once the bot has provided the appeal service."""
    return _appeal_service is not None


def get_appeal_service() -> "AppealService":
    """Get the appeal service, 503 until the bot has built it."""
    if _appeal_service is None:
        raise APIError(ErrorCode.SERVICE_NOT_READY)
    return _appeal_service


# =============================================================================
# Authentication Dependencies
# =============================================================================

async def require_auth(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> TokenPayload:
    """
    Require a valid authentication token.
    Raises 401 if not authenticated.
    """
    if credentials is None:
        raise APIError(
            ErrorCode.AUTH_MISSING_TOKEN,
            headers={"WWW-Authenticate": "Bearer"},
        )

    payload = get_auth_service().get_token_payload(credentials.credentials)
    if payload is None:
        raise APIError(
            ErrorCode.AUTH_INVALID_TOKEN,
            headers={"WWW-Authenticate": "Bearer"},
        )

    return payload


__all__ = [
    "security",
    "set_appeal_service",
    "get_appeal_service",
    "is_appeal_service_ready",
    "require_auth",
]
