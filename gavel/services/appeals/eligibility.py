"""
Gavel - Appeal Eligibility Mixin
================================

Field validation and the checks a submission must pass before it is stored.

Author: Gavel contributors
"""

import time
from typing import TYPE_CHECKING, List, Optional, Tuple

from gavel.core.constants import MAX_EVIDENCE_LINKS, SECONDS_PER_DAY
from gavel.core.database.models import PunishmentKind
from gavel.core.errors import AppealRejection, RejectionKind

from .constants import (
    MSG_INVALID_PUNISHMENT,
    MSG_MISSING_FIELDS,
    MSG_PENDING_EXISTS,
    MSG_THROTTLED,
)

if TYPE_CHECKING:
    from .service import AppealService


class EligibilityMixin:
    """Mixin for submission validation and eligibility."""

    def validate_fields(
        self: "AppealService",
        punishment_kind: Optional[str],
        punishment_reason: Optional[str],
        appeal_reason: Optional[str],
    ) -> Tuple[Optional[PunishmentKind], Optional[AppealRejection]]:
        """
        Check the required form fields.

        Returns:
            Tuple of (parsed punishment kind, rejection). Exactly one is set.
        """
        fields = (punishment_kind, punishment_reason, appeal_reason)
        if any(not value or not str(value).strip() for value in fields):
            return (None, AppealRejection(RejectionKind.VALIDATION, MSG_MISSING_FIELDS))

        kind = PunishmentKind.parse(punishment_kind)
        if kind is None:
            return (None, AppealRejection(RejectionKind.VALIDATION, MSG_INVALID_PUNISHMENT))

        return (kind, None)

    def check_eligibility(self: "AppealService", user_id: int) -> Optional[AppealRejection]:
        """
        Check whether the user may open a new appeal right now.

        Returns:
            None if eligible, otherwise the rejection to report.
        """
        if self.db.get_pending_appeal(user_id):
            return AppealRejection(RejectionKind.PENDING_EXISTS, MSG_PENDING_EXISTS)

        days = self.config.appeal_cooldown_days
        if days > 0:
            since = time.time() - days * SECONDS_PER_DAY
            if self.db.get_recent_rejection(user_id, since):
                return AppealRejection(
                    RejectionKind.THROTTLED,
                    MSG_THROTTLED.format(days=days),
                )

        return None

    @staticmethod
    def clean_evidence_links(links: Optional[List[object]]) -> List[str]:
        """Keep the first http(s) links, dropping blanks and anything else."""
        cleaned = []
        for link in links or []:
            if not isinstance(link, str):
                continue
            link = link.strip()
            if link.startswith(("https://", "http://")):
                cleaned.append(link)
            if len(cleaned) >= MAX_EVIDENCE_LINKS:
                break
        return cleaned


__all__ = ["EligibilityMixin"]
