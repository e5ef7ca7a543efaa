from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional
from uuid import UUID

from domain.ports.repository import RepositoryPort
from domain.models.hackathon import (
    Hackathon,
    HackathonStatus,
    HackathonType,
    NewHackathon,
    Track,
    UPDATABLE_FIELDS,
    can_transition,
)
from domain.models.submission import MyHackathon, ParticipantEntry, Submission, SubmissionFilter
from domain.services.submission_views import build_submission_view
from domain.exceptions import (
    HackathonNotFound,
    HackathonAccessDenied,
    HackathonInvalidDates,
    HackathonInvalidTeamSize,
    InvalidStatusTransition,
    UserNotFound,
)

DEFAULT_MIN_TEAM_SIZE = 1
DEFAULT_MAX_TEAM_SIZE = 5
DEFAULT_PRIZE_CURRENCY = "USD"

# Patching these to null is treated as "leave untouched".
_NON_NULLABLE = frozenset({
    "title", "description", "start_date", "end_date",
    "is_virtual", "min_team_size", "max_team_size",
})
_DATE_FIELDS = frozenset({"start_date", "end_date", "registration_deadline"})


def as_utc_naive(value: Optional[datetime]) -> Optional[datetime]:
    """Timestamps are stored as naive UTC."""
    if value is not None and value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def format_prize_pool(amount: Optional[float], currency: Optional[str]) -> Optional[str]:
    if not amount:
        return None
    if float(amount).is_integer():
        amount = int(amount)
    return f"{currency or DEFAULT_PRIZE_CURRENCY} {amount}"


class HackathonService:
    def __init__(self, repository: RepositoryPort):
        self.repo = repository
        self.logger = logging.getLogger(__name__)

    def create_hackathon(self, organizer_id: UUID, draft: NewHackathon) -> Hackathon:
        start_date = as_utc_naive(draft.start_date)
        end_date = as_utc_naive(draft.end_date)
        if start_date > end_date:
            raise HackathonInvalidDates()

        min_size = draft.min_team_size or DEFAULT_MIN_TEAM_SIZE
        max_size = draft.max_team_size or DEFAULT_MAX_TEAM_SIZE
        if min_size > max_size:
            raise HackathonInvalidTeamSize(min_size, max_size)

        if self.repo.get_user_summary(organizer_id) is None:
            raise UserNotFound(organizer_id)

        now = datetime.utcnow()
        h = Hackathon(
            id=uuid.uuid4(),
            title=draft.title,
            description=draft.description or "",
            type=HackathonType.INDIVIDUAL if draft.allow_individual else HackathonType.TEAM,
            status=HackathonStatus.UPCOMING,
            min_team_size=min_size,
            max_team_size=max_size,
            start_date=start_date,
            end_date=end_date,
            registration_deadline=as_utc_naive(draft.registration_end),
            organizer_id=organizer_id,
            banner_url=draft.banner_image_url,
            location=draft.venue,
            is_virtual=draft.is_virtual,
            prize_pool=format_prize_pool(draft.prize_amount, draft.prize_currency),
            created_at=now,
            updated_at=now,
        )
        tracks = [
            Track(
                id=uuid.uuid4(),
                hackathon_id=h.id,
                track_number=t.track_number,
                track_title=t.track_title,
                description=t.description,
                file_name=t.file_name,
                file_url=t.file_url,
                file_type=t.file_type,
                file_size=t.file_size,
                uploaded_by_id=organizer_id,
            )
            for t in draft.tracks
        ]
        self.repo.create_hackathon(h, tracks)
        self.logger.info(f"Hackathon {h.id} created by {organizer_id} with {len(tracks)} track(s)")
        return self.get_hackathon(h.id)

    def list_hackathons(
        self,
        status: Optional[HackathonStatus] = None,
        search: Optional[str] = None,
    ) -> List[Hackathon]:
        return self.repo.list_hackathons(status=status, search=search or None)

    def get_hackathon(self, hackathon_id: UUID) -> Hackathon:
        h = self.repo.get_hackathon_by_id(hackathon_id)
        if h is None:
            raise HackathonNotFound(hackathon_id)
        return h

    def update_hackathon(
        self, user_id: UUID, hackathon_id: UUID, changes: Mapping[str, Any]
    ) -> Hackathon:
        h = self._get_owned(user_id, hackathon_id, "update")

        values: Dict[str, Any] = {
            key: value
            for key, value in changes.items()
            if key in UPDATABLE_FIELDS and not (value is None and key in _NON_NULLABLE)
        }
        for key in _DATE_FIELDS.intersection(values):
            values[key] = as_utc_naive(values[key])
        start = values.get("start_date", h.start_date)
        end = values.get("end_date", h.end_date)
        if start > end:
            raise HackathonInvalidDates()
        min_size = values.get("min_team_size", h.min_team_size)
        max_size = values.get("max_team_size", h.max_team_size)
        if min_size > max_size:
            raise HackathonInvalidTeamSize(min_size, max_size)

        if values:
            self._write_owned(user_id, hackathon_id, values, "update")
            self.logger.info(f"Hackathon {hackathon_id} updated: {sorted(values)}")
        return self.get_hackathon(hackathon_id)

    def publish_hackathon(self, user_id: UUID, hackathon_id: UUID) -> Hackathon:
        # Publishing does not check readiness (dates, tracks); it only flips to LIVE.
        self._write_owned(user_id, hackathon_id, {"status": HackathonStatus.LIVE}, "publish")
        self.logger.info(f"Hackathon {hackathon_id} published by {user_id}")
        return self.get_hackathon(hackathon_id)

    def update_status(
        self, user_id: UUID, hackathon_id: UUID, status: HackathonStatus
    ) -> Hackathon:
        h = self._get_owned(user_id, hackathon_id, "update")
        if not can_transition(h.status, status):
            raise InvalidStatusTransition(h.status.value, status.value)
        if h.status != status:
            self._write_owned(
                user_id, hackathon_id, {"status": status}, "update", expected_status=h.status
            )
            self.logger.info(f"Hackathon {hackathon_id} status {h.status.value} -> {status.value}")
        return self.get_hackathon(hackathon_id)

    def delete_hackathon(self, user_id: UUID, hackathon_id: UUID) -> Dict[str, str]:
        if not self.repo.delete_hackathon_owned(hackathon_id, user_id):
            self._raise_missing_or_denied(user_id, hackathon_id, "delete")
            raise HackathonNotFound(hackathon_id)
        self.logger.info(f"Hackathon {hackathon_id} deleted by {user_id}")
        return {"message": "Hackathon deleted successfully"}

    def list_my_hackathons(self, user_id: UUID) -> List[MyHackathon]:
        participations = self.repo.list_participations(user_id)
        ids = [p.hackathon_id for p in participations]
        if not ids:
            return []

        # Most recent participation first
        hackathons = {h.id: h for h in self.repo.list_hackathons(ids=ids)}
        submissions = self.repo.list_submissions(SubmissionFilter(user_id=user_id, hackathon_ids=ids))
        return [
            MyHackathon(
                hackathon=hackathons[hid],
                submissions=[build_submission_view(s) for s in submissions if s.hackathon_id == hid],
            )
            for hid in ids
            if hid in hackathons
        ]

    def list_participants(self, hackathon_id: UUID) -> List[ParticipantEntry]:
        self.get_hackathon(hackathon_id)
        teams = {t.id: t for t in self.repo.get_teams_by_hackathon(hackathon_id)}

        # First submission per participant and per team, oldest first
        by_participant: Dict[UUID, Submission] = {}
        by_team: Dict[UUID, Submission] = {}
        submissions = self.repo.list_submissions(SubmissionFilter(hackathon_id=hackathon_id))
        for s in sorted(submissions, key=lambda s: s.created_at):
            by_participant.setdefault(s.participant_id, s)
            if s.team_id:
                by_team.setdefault(s.team_id, s)

        entries: List[ParticipantEntry] = []
        for p in self.repo.list_participants(hackathon_id):
            candidates = [by_participant.get(p.id), by_team.get(p.team_id) if p.team_id else None]
            found = [s for s in candidates if s is not None]
            submission_id = min(found, key=lambda s: s.created_at).id if found else None
            entries.append(
                ParticipantEntry(
                    participant=p,
                    team=teams.get(p.team_id) if p.team_id else None,
                    has_submission=submission_id is not None,
                    submission_id=submission_id,
                )
            )
        return entries

    # =========================
    # Private helpers
    # =========================

    def _get_owned(self, user_id: UUID, hackathon_id: UUID, action: str) -> Hackathon:
        h = self.get_hackathon(hackathon_id)
        if h.organizer_id != user_id:
            raise HackathonAccessDenied(action)
        return h

    def _write_owned(
        self,
        user_id: UUID,
        hackathon_id: UUID,
        values: Mapping[str, Any],
        action: str,
        expected_status: Optional[HackathonStatus] = None,
    ) -> None:
        if self.repo.update_hackathon_owned(hackathon_id, user_id, values, expected_status):
            return
        h = self._raise_missing_or_denied(user_id, hackathon_id, action)
        if "status" not in values:
            raise HackathonNotFound(hackathon_id)
        # Present and owned: only the expected_status guard can have failed.
        target = HackathonStatus(values["status"])
        raise InvalidStatusTransition(h.status.value, target.value)

    def _raise_missing_or_denied(self, user_id: UUID, hackathon_id: UUID, action: str) -> Hackathon:
        """Explains why a conditional write matched no row."""
        h = self.repo.get_hackathon_by_id(hackathon_id)
        if h is None:
            raise HackathonNotFound(hackathon_id)
        if h.organizer_id != user_id:
            raise HackathonAccessDenied(action)
        return h
