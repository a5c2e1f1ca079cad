"""
Gavel - Appeals Router
======================

Appeal listing and submission for the logged-in user.

Author: Gavel contributors
"""

import sqlite3
from typing import List

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from gavel.core.logger import logger
from gavel.api.dependencies import get_appeal_service, require_auth
from gavel.api.errors import APIError, ErrorCode, REJECTION_CODES, error_response
from gavel.api.models.appeals import (
    AppealResponse,
    SubmitAppealRequest,
    SubmitAppealResponse,
)
from gavel.api.models.auth import TokenPayload
from gavel.services.appeals import AppealService, Submitter
from gavel.services.appeals.constants import MSG_SUBMITTED


router = APIRouter(tags=["Appeals"])


# =============================================================================
# Endpoints
# =============================================================================

@router.get("/my-appeals", response_model=List[AppealResponse])
async def my_appeals(
    payload: TokenPayload = Depends(require_auth),
    service: AppealService = Depends(get_appeal_service),
) -> List[AppealResponse]:
    """List the caller's appeals, newest first."""
    try:
        records = service.get_user_appeals(payload.sub)
    except sqlite3.Error as e:
        logger.error("My Appeals Query Failed", [
            ("User ID", str(payload.sub)),
            ("Error Type", type(e).__name__),
            ("Error", str(e)[:100]),
        ])
        raise APIError(ErrorCode.SERVER_DATABASE_ERROR)

    return [AppealResponse.from_record(record) for record in records]


@router.post("/submit-appeal")
async def submit_appeal(
    body: SubmitAppealRequest,
    payload: TokenPayload = Depends(require_auth),
    service: AppealService = Depends(get_appeal_service),
) -> JSONResponse:
    """
    Submit a new appeal.

    Returns 400 with a message for missing fields, a pending appeal or an
    active cooldown, and 500 when the appeal could not be stored or posted.
    """
    submitter = Submitter(
        user_id=payload.sub,
        username=payload.username,
        discriminator=payload.discriminator,
        avatar=payload.avatar,
    )

    result = await service.submit_appeal(
        submitter=submitter,
        punishment_kind=body.punishmentType,
        punishment_reason=body.punishmentReason,
        appeal_reason=body.appealReason,
        additional_notes=body.additionalInfo,
        evidence_links=body.screenshotLinks,
    )

    if result.rejection:
        return error_response(
            REJECTION_CODES[result.rejection.kind],
            message=result.rejection.message,
        )

    logger.tree("Appeal Submitted", [
        ("Case ID", result.appeal["case_id"]),
        ("User", f"{submitter.tag} ({submitter.user_id})"),
    ], emoji="📝")

    response = SubmitAppealResponse(message=MSG_SUBMITTED, caseId=result.appeal["case_id"])
    return JSONResponse(content=response.model_dump(mode="json"))


__all__ = ["router"]
