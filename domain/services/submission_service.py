from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple
from uuid import UUID, uuid4

from domain.models.identity import Caller, PRIVILEGED_ROLES, Role
from domain.models.submission import (
    NewSubmission,
    Submission,
    SubmissionChanges,
    SubmissionFile,
    SubmissionFilter,
    SubmissionStatus,
    SubmissionView,
)
from domain.ports.repository import RepositoryPort
from domain.services.submission_views import build_submission_view
from domain.exceptions import (
    NotRegisteredForHackathon,
    SubmissionAccessDenied,
    SubmissionNotFound,
    TeamMismatch,
    UserNotFound,
)

DEFAULT_FILE_NAME = "Unknown"
DEFAULT_FILE_TYPE = "application/octet-stream"


def derive_status(is_draft: bool, now: datetime) -> Tuple[SubmissionStatus, Optional[datetime]]:
    """submitted_at is set exactly when the submission is not a draft."""
    if is_draft:
        return SubmissionStatus.DRAFT, None
    return SubmissionStatus.SUBMITTED, now


class SubmissionService:
    def __init__(self, repository: RepositoryPort):
        self.repository = repository
        self.logger = logging.getLogger(__name__)

    def create_submission(self, user_id: UUID, draft: NewSubmission) -> SubmissionView:
        if self.repository.get_user_summary(user_id) is None:
            raise UserNotFound(user_id)

        participant = self.repository.get_participant(user_id, draft.hackathon_id)
        if participant is None:
            raise NotRegisteredForHackathon(draft.hackathon_id)

        team_id = draft.team_id or participant.team_id
        if draft.team_id is not None and draft.team_id != participant.team_id:
            raise TeamMismatch(draft.team_id)

        now = datetime.utcnow()
        status, submitted_at = derive_status(draft.is_draft, now)
        submission = Submission(
            id=uuid4(),
            hackathon_id=draft.hackathon_id,
            participant_id=participant.id,
            title=draft.title,
            status=status,
            created_at=now,
            updated_at=now,
            team_id=team_id,
            description=draft.description,
            repo_url=draft.repository_url,
            demo_url=draft.live_url,
            submitted_at=submitted_at,
        )
        files = [
            SubmissionFile(
                id=uuid4(),
                submission_id=submission.id,
                file_name=f.name or DEFAULT_FILE_NAME,
                file_url=f.url or "",
                file_type=f.type or DEFAULT_FILE_TYPE,
                file_size=f.size or 0,
            )
            for f in draft.files
        ]
        self.repository.create_submission(submission, files)
        self.logger.info(
            f"Submission {submission.id} created by {user_id} for hackathon "
            f"{draft.hackathon_id} ({status.value}, {len(files)} file(s))"
        )
        return self._view(submission.id)

    def list_submissions(self, filters: SubmissionFilter, caller: Caller) -> List[SubmissionView]:
        # An explicit user_id filter wins over role scoping; judges and admins are unrestricted.
        scoped = filters
        if filters.user_id is None:
            if caller.role == Role.PARTICIPANT:
                scoped = replace(filters, user_id=caller.user_id)
            elif caller.role == Role.ORGANIZER and filters.hackathon_id is None:
                organized = self.repository.list_hackathon_ids_by_organizer(caller.user_id)
                if not organized:
                    return []
                scoped = replace(filters, hackathon_ids=organized)

        return [build_submission_view(s) for s in self.repository.list_submissions(scoped)]

    def get_submission(self, submission_id: UUID, caller: Caller) -> SubmissionView:
        submission = self.repository.get_submission_by_id(submission_id)
        if submission is None:
            raise SubmissionNotFound(submission_id)

        is_owner = submission.participant is not None and submission.participant.user_id == caller.user_id
        if caller.role not in PRIVILEGED_ROLES and not is_owner:
            raise SubmissionAccessDenied()
        return build_submission_view(submission)

    def update_submission(
        self, user_id: UUID, submission_id: UUID, changes: SubmissionChanges
    ) -> SubmissionView:
        """
        Partial update. Status and submitted_at are re-derived only when
        is_draft is given; an update without it keeps the current status
        instead of falling back to SUBMITTED.
        """
        self._get_owned(user_id, submission_id, "update")

        values: Dict[str, Any] = {}
        if changes.title is not None:
            values["title"] = changes.title
        if changes.description is not None:
            values["description"] = changes.description
        if changes.repository_url is not None:
            values["repo_url"] = changes.repository_url
        if changes.live_url is not None:
            values["demo_url"] = changes.live_url
        if changes.is_draft is not None:
            values["status"], values["submitted_at"] = derive_status(changes.is_draft, datetime.utcnow())

        if not self.repository.update_submission_owned(submission_id, user_id, values):
            self._get_owned(user_id, submission_id, "update")
            raise SubmissionNotFound(submission_id)

        self.logger.info(f"Submission {submission_id} updated by {user_id}: {sorted(values)}")
        return self._view(submission_id)

    def delete_submission(self, user_id: UUID, submission_id: UUID) -> Dict[str, str]:
        if not self.repository.delete_submission_owned(submission_id, user_id):
            self._get_owned(user_id, submission_id, "delete")
            raise SubmissionNotFound(submission_id)
        self.logger.info(f"Submission {submission_id} deleted by {user_id}")
        return {"message": "Submission deleted successfully"}

    # =========================
    # Private helpers
    # =========================

    def _get_owned(self, user_id: UUID, submission_id: UUID, action: str) -> Submission:
        submission = self.repository.get_submission_by_id(submission_id)
        if submission is None:
            raise SubmissionNotFound(submission_id)
        if submission.participant is None or submission.participant.user_id != user_id:
            raise SubmissionAccessDenied(action)
        return submission

    def _view(self, submission_id: UUID) -> SubmissionView:
        submission = self.repository.get_submission_by_id(submission_id)
        if submission is None:
            raise SubmissionNotFound(submission_id)
        return build_submission_view(submission)
