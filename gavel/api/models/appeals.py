"""
Gavel - Appeal API Models
=========================

Request and response models for the appeal endpoints. Field names are
camelCase because they are the appeal page's JSON contract.

Author: Gavel contributors
"""

from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, Field

from gavel.core.database.models import AppealRecord


def _iso(ts: Optional[float]) -> Optional[datetime]:
    if ts is None:
        return None
    return datetime.fromtimestamp(ts, timezone.utc)


# =============================================================================
# Request Models
# =============================================================================

class SubmitAppealRequest(BaseModel):
    """
    Appeal submission body.

    Required fields are optional here so an empty value is reported as
    "Missing required fields." rather than a schema error.
    """

    punishmentType: Optional[str] = Field(None, description="Muted or Banned")
    punishmentReason: Optional[str] = Field(None, max_length=4000)
    appealReason: Optional[str] = Field(None, max_length=4000)
    additionalInfo: Optional[str] = Field(None, max_length=4000)
    screenshotLinks: Optional[List[str]] = Field(None, description="Up to 2 screenshot URLs")


# =============================================================================
# Response Models
# =============================================================================

class AppealResponse(BaseModel):
    """One appeal as returned by /my-appeals."""

    caseId: str
    userId: str
    userTag: str
    punishmentKind: str
    punishmentReason: str
    appealReason: str
    additionalNotes: str
    status: str
    submittedAt: datetime
    resolverId: Optional[str] = None
    resolverTag: Optional[str] = None
    resolvedAt: Optional[datetime] = None

    @classmethod
    def from_record(cls, record: AppealRecord) -> "AppealResponse":
        resolver_id = record.get("resolver_id")
        return cls(
            caseId=record["case_id"],
            userId=str(record["user_id"]),
            userTag=record["user_tag"],
            punishmentKind=record["punishment_kind"],
            punishmentReason=record["punishment_reason"],
            appealReason=record["appeal_reason"],
            additionalNotes=record.get("additional_notes") or "",
            status=record["status"],
            submittedAt=_iso(record["submitted_at"]),
            resolverId=str(resolver_id) if resolver_id is not None else None,
            resolverTag=record.get("resolver_tag"),
            resolvedAt=_iso(record.get("resolved_at")),
        )


class SubmitAppealResponse(BaseModel):
    """Successful submission."""

    message: str
    caseId: str


__all__ = ["SubmitAppealRequest", "AppealResponse", "SubmitAppealResponse"]
