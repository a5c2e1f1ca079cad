"""
Gavel - Auth Service
====================

JWT issuing and verification for the appeal API.

DESIGN:
    The Discord OAuth login itself happens outside this service. Its
    callback calls create_access_token() with the user's identity and
    hands the token to the appeal page, which sends it back as a Bearer
    token. The payload carries everything the API needs to attribute an
    appeal, so no session store is kept.

Author: Gavel contributors
"""

from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple

import jwt
from jwt.exceptions import ExpiredSignatureError, InvalidTokenError

from gavel.core.logger import logger
from gavel.api.config import APIConfig, get_api_config
from gavel.api.models.auth import TokenPayload


# =============================================================================
# Constants
# =============================================================================

TOKEN_TYPE_ACCESS = "access"


# =============================================================================
# Auth Service
# =============================================================================

class AuthService:
    """Issues and validates access tokens."""

    def __init__(self, config: Optional[APIConfig] = None) -> None:
        self._config = config or get_api_config()
        if not self._config.jwt_secret:
            logger.warning("JWT Secret Not Set", [
                ("Effect", "All API tokens will be rejected"),
            ])

    def create_access_token(
        self,
        user_id: int,
        username: str,
        discriminator: str = "0",
        avatar: Optional[str] = None,
    ) -> Tuple[str, datetime]:
        """
        Generate an access token for a Discord user.

        Returns:
            Tuple of (token, expires_at).
        """
        now = datetime.now(timezone.utc)
        expires_at = now + timedelta(hours=self._config.jwt_expiry_hours)

        payload = {
            "sub": str(user_id),  # JWT requires sub to be string
            "username": username,
            "discriminator": discriminator or "0",
            "avatar": avatar,
            "iat": now,
            "exp": expires_at,
            "type": TOKEN_TYPE_ACCESS,
        }

        token = jwt.encode(
            payload,
            self._config.jwt_secret,
            algorithm=self._config.jwt_algorithm,
        )

        logger.debug("Access Token Issued", [
            ("User", f"{username} ({user_id})"),
            ("Expires", expires_at.isoformat()),
        ])

        return token, expires_at

    def get_token_payload(self, token: str) -> Optional[TokenPayload]:
        """
        Decode and verify a token.

        Returns:
            The payload, or None if the token is missing, expired, forged
            or not an access token.
        """
        if not token or not self._config.jwt_secret:
            return None

        try:
            payload = jwt.decode(
                token,
                self._config.jwt_secret,
                algorithms=[self._config.jwt_algorithm],
            )
            if payload.get("type") != TOKEN_TYPE_ACCESS:
                return None

            return TokenPayload(
                sub=int(payload["sub"]),  # Convert string back to int
                username=payload["username"],
                discriminator=payload.get("discriminator") or "0",
                avatar=payload.get("avatar"),
                exp=datetime.fromtimestamp(payload["exp"], timezone.utc),
                iat=datetime.fromtimestamp(payload["iat"], timezone.utc),
                type=payload["type"],
            )

        except ExpiredSignatureError:
            logger.debug("Expired Token Rejected")
            return None
        except (InvalidTokenError, KeyError, ValueError, TypeError):
            logger.debug("Invalid Token Rejected")
            return None


# =============================================================================
# Singleton
# =============================================================================

_service: Optional[AuthService] = None


def init_auth_service(config: Optional[APIConfig] = None) -> AuthService:
    """Create the auth service, replacing any existing instance."""
    global _service
    _service = AuthService(config)
    return _service


def get_auth_service() -> AuthService:
    """Get the auth service singleton."""
    global _service
    if _service is None:
        _service = AuthService()
    return _service


__all__ = ["AuthService", "get_auth_service", "init_auth_service", "TOKEN_TYPE_ACCESS"]
