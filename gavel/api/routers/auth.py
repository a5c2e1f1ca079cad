"""
Gavel - Auth Router
===================

Identity of the logged-in user.

Author: Gavel contributors
"""

from fastapi import APIRouter, Depends

from gavel.api.dependencies import require_auth
from gavel.api.models.auth import MeResponse, TokenPayload
from gavel.services.appeals import Submitter


router = APIRouter(tags=["Auth"])


@router.get("/me", response_model=MeResponse)
async def me(payload: TokenPayload = Depends(require_auth)) -> MeResponse:
    """Return the caller's Discord identity from their token."""
    submitter = Submitter(
        user_id=payload.sub,
        username=payload.username,
        discriminator=payload.discriminator,
        avatar=payload.avatar,
    )
    return MeResponse(
        id=str(payload.sub),
        username=payload.username,
        discriminator=payload.discriminator,
        avatarUrl=submitter.avatar_url,
    )


__all__ = ["router"]
