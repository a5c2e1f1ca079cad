"""
Gavel - Appeal Creation Mixin
=============================

Submission of new appeals.

Author: Gavel contributors
"""

import asyncio
import sqlite3
from typing import TYPE_CHECKING, List, Optional

from gavel.core.errors import (
    AppealRejection,
    CaseIdExhaustedError,
    DependencyUnavailable,
    RejectionKind,
)
from gavel.core.logger import logger

from .constants import MSG_PENDING_EXISTS, MSG_UNAVAILABLE
from .results import SubmissionResult, Submitter

if TYPE_CHECKING:
    from .service import AppealService


class CreateMixin:
    """Mixin for appeal creation methods."""

    def _submit_lock(self: "AppealService", user_id: int) -> asyncio.Lock:
        """Lock serializing one user's submissions."""
        lock = self._submit_locks.get(user_id)
        if lock is None:
            lock = asyncio.Lock()
            self._submit_locks[user_id] = lock
        return lock

    async def submit_appeal(
        self: "AppealService",
        submitter: Submitter,
        punishment_kind: Optional[str],
        punishment_reason: Optional[str],
        appeal_reason: Optional[str],
        additional_notes: Optional[str] = "",
        evidence_links: Optional[List[object]] = None,
    ) -> SubmissionResult:
        """
        Validate, store and publish a new appeal.

        Args:
            submitter: Authenticated user submitting the appeal.
            punishment_kind: "Muted" or "Banned" (any case).
            punishment_reason: Why the user was punished.
            appeal_reason: Why the punishment should be revoked.
            additional_notes: Optional free text.
            evidence_links: Optional screenshot URLs.

        Returns:
            SubmissionResult with the stored appeal and/or a rejection.
        """
        kind, rejection = self.validate_fields(punishment_kind, punishment_reason, appeal_reason)
        if rejection:
            logger.debug("Appeal Rejected", [
                ("User ID", str(submitter.user_id)),
                ("Reason", rejection.message),
            ])
            return SubmissionResult(rejection=rejection)

        async with self._submit_lock(submitter.user_id):
            rejection = self.check_eligibility(submitter.user_id)
            if rejection:
                logger.tree("Appeal Submission Refused", [
                    ("User", f"{submitter.tag} ({submitter.user_id})"),
                    ("Kind", rejection.kind.value),
                ], emoji="🚫")
                return SubmissionResult(rejection=rejection)

            try:
                appeal = self.db.create_appeal(
                    user_id=submitter.user_id,
                    user_tag=submitter.tag,
                    punishment_kind=kind.value,
                    punishment_reason=punishment_reason.strip(),
                    appeal_reason=appeal_reason.strip(),
                    additional_notes=(additional_notes or "").strip(),
                    max_attempts=self.config.case_id_max_attempts,
                )
            except sqlite3.IntegrityError:
                # Another process inserted a pending appeal first
                return SubmissionResult(
                    rejection=AppealRejection(RejectionKind.PENDING_EXISTS, MSG_PENDING_EXISTS)
                )
            except CaseIdExhaustedError:
                return SubmissionResult(
                    rejection=AppealRejection(RejectionKind.UNAVAILABLE, MSG_UNAVAILABLE)
                )
            except sqlite3.Error as e:
                logger.error("Appeal Storage Failed", [
                    ("User ID", str(submitter.user_id)),
                    ("Error Type", type(e).__name__),
                    ("Error", str(e)[:100]),
                ])
                return SubmissionResult(
                    rejection=AppealRejection(RejectionKind.UNAVAILABLE, MSG_UNAVAILABLE)
                )

        try:
            await self.gateway.post_appeal(
                appeal,
                submitter,
                self.clean_evidence_links(evidence_links),
            )
        except DependencyUnavailable as e:
            logger.error("Appeal Not Posted", [
                ("Case ID", appeal["case_id"]),
                ("User ID", str(submitter.user_id)),
                ("Reason", e.reason),
            ])
            return SubmissionResult(
                appeal=appeal,
                rejection=AppealRejection(RejectionKind.UNAVAILABLE, e.reason),
            )

        return SubmissionResult(appeal=appeal)


__all__ = ["CreateMixin"]
