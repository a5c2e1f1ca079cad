"""
Gavel - Auth API Models
=======================

Token payload and identity response models.

Author: Gavel contributors
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class TokenPayload(BaseModel):
    """JWT token payload."""

    sub: int = Field(description="Subject (Discord user ID)")
    username: str = Field(description="Discord username")
    discriminator: str = Field(default="0", description="Legacy discriminator, '0' if migrated")
    avatar: Optional[str] = Field(None, description="Avatar hash")
    exp: datetime = Field(description="Expiration time")
    iat: datetime = Field(description="Issued at time")
    type: str = Field(default="access", description="Token type")


class MeResponse(BaseModel):
    """The logged-in user, as the appeal page displays them."""

    id: str
    username: str
    discriminator: str
    avatarUrl: Optional[str] = None


__all__ = ["TokenPayload", "MeResponse"]
