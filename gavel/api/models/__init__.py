"""
Gavel - API Models
==================

Pydantic models for API requests and responses.

Author: Gavel contributors
"""

from gavel.api.models.auth import MeResponse, TokenPayload
from gavel.api.models.appeals import (
    AppealResponse,
    SubmitAppealRequest,
    SubmitAppealResponse,
)

__all__ = [
    "MeResponse",
    "TokenPayload",
    "AppealResponse",
    "SubmitAppealRequest",
    "SubmitAppealResponse",
]
