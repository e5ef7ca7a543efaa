from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional
from uuid import UUID

from sqlalchemy import distinct, func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from domain.exceptions import ParticipantAlreadyRegistered
from domain.models.hackathon import (
    Hackathon,
    HackathonCounts,
    HackathonStatus,
    HackathonType,
    Track,
)
from domain.models.identity import Participant, ParticipantRole, Team, UserSummary
from domain.models.submission import (
    Submission,
    SubmissionFile,
    SubmissionFilter,
    SubmissionStatus,
)
from domain.ports.repository import RepositoryPort

from infrastructure.persistence.tables import (
    HackathonTable,
    ParticipantTable,
    ProblemStatementTable,
    SubmissionFileTable,
    SubmissionTable,
    TeamTable,
    UserTable,
)


def _db_value(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


class PostgresRepository(RepositoryPort):
    def __init__(self, session: Session):
        self.session = session

    # =========================
    # Users
    # =========================

    def get_user_summary(self, user_id: UUID) -> Optional[UserSummary]:
        u = self.session.query(UserTable).filter_by(id=user_id).first()
        return self._map_user(u) if u else None

    # =========================
    # Hackathons
    # =========================

    def create_hackathon(self, hackathon: Hackathon, tracks: List[Track]) -> None:
        db_hackathon = HackathonTable(
            id=hackathon.id,
            title=hackathon.title,
            description=hackathon.description,
            type=hackathon.type.value,
            status=hackathon.status.value,
            min_team_size=hackathon.min_team_size,
            max_team_size=hackathon.max_team_size,
            start_date=hackathon.start_date,
            end_date=hackathon.end_date,
            registration_deadline=hackathon.registration_deadline,
            organizer_id=hackathon.organizer_id,
            banner_url=hackathon.banner_url,
            location=hackathon.location,
            is_virtual=hackathon.is_virtual,
            prize_pool=hackathon.prize_pool,
            created_at=hackathon.created_at,
            updated_at=hackathon.updated_at,
        )
        db_hackathon.problem_statements = [
            ProblemStatementTable(
                id=t.id,
                hackathon_id=hackathon.id,
                uploaded_by_id=t.uploaded_by_id,
                track_number=t.track_number,
                track_title=t.track_title,
                description=t.description,
                file_name=t.file_name,
                file_url=t.file_url,
                file_type=t.file_type,
                file_size=t.file_size,
            )
            for t in tracks
        ]
        self.session.add(db_hackathon)
        try:
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise

    def get_hackathon_by_id(self, hackathon_id: UUID) -> Optional[Hackathon]:
        h = (
            self.session.query(HackathonTable)
            .options(
                selectinload(HackathonTable.organizer),
                selectinload(HackathonTable.problem_statements),
            )
            .filter_by(id=hackathon_id)
            .first()
        )
        if not h:
            return None
        counts = self._counts_for([h.id])
        return self._map_hackathon(h, counts=counts.get(h.id, HackathonCounts()), with_tracks=True)

    def list_hackathons(
        self,
        status: Optional[HackathonStatus] = None,
        search: Optional[str] = None,
        ids: Optional[List[UUID]] = None,
    ) -> List[Hackathon]:
        q = self.session.query(HackathonTable).options(selectinload(HackathonTable.organizer))
        if status is not None:
            q = q.filter(HackathonTable.status == _db_value(status))
        if search:
            q = q.filter(
                or_(
                    HackathonTable.title.icontains(search, autoescape=True),
                    HackathonTable.description.icontains(search, autoescape=True),
                )
            )
        if ids is not None:
            if not ids:
                return []
            q = q.filter(HackathonTable.id.in_(ids))

        rows = q.order_by(HackathonTable.created_at.desc()).all()
        counts = self._counts_for([h.id for h in rows])
        return [
            self._map_hackathon(h, counts=counts.get(h.id, HackathonCounts()))
            for h in rows
        ]

    def update_hackathon_owned(
        self,
        hackathon_id: UUID,
        organizer_id: UUID,
        changes: Mapping[str, Any],
        expected_status: Optional[HackathonStatus] = None,
    ) -> bool:
        values = {key: _db_value(value) for key, value in changes.items()}
        values["updated_at"] = datetime.utcnow()
        q = self.session.query(HackathonTable).filter(
            HackathonTable.id == hackathon_id,
            HackathonTable.organizer_id == organizer_id,
        )
        if expected_status is not None:
            q = q.filter(HackathonTable.status == _db_value(expected_status))
        try:
            matched = q.update(values, synchronize_session=False)
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise
        return matched > 0

    def delete_hackathon_owned(self, hackathon_id: UUID, organizer_id: UUID) -> bool:
        q = self.session.query(HackathonTable).filter(
            HackathonTable.id == hackathon_id,
            HackathonTable.organizer_id == organizer_id,
        )
        try:
            matched = q.delete(synchronize_session=False)
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise
        return matched > 0

    def list_hackathon_ids_by_organizer(self, organizer_id: UUID) -> List[UUID]:
        rows = self.session.query(HackathonTable.id).filter_by(organizer_id=organizer_id).all()
        return [r.id for r in rows]

    def count_hackathons(self, statuses: Optional[Iterable[HackathonStatus]] = None) -> int:
        q = self.session.query(func.count(HackathonTable.id))
        if statuses is not None:
            q = q.filter(HackathonTable.status.in_([_db_value(s) for s in statuses]))
        return int(q.scalar() or 0)

    # =========================
    # Participants & Teams
    # =========================

    def get_participant(self, user_id: UUID, hackathon_id: UUID) -> Optional[Participant]:
        p = (
            self.session.query(ParticipantTable)
            .filter_by(user_id=user_id, hackathon_id=hackathon_id)
            .first()
        )
        return self._map_participant(p) if p else None

    def register_participant(self, participant: Participant, team: Optional[Team] = None) -> None:
        try:
            if team is not None:
                self.session.add(
                    TeamTable(
                        id=team.id,
                        hackathon_id=team.hackathon_id,
                        leader_id=team.leader_id,
                        name=team.name,
                        description=team.description,
                        created_at=team.created_at,
                    )
                )
                self.session.flush()
            self.session.add(
                ParticipantTable(
                    id=participant.id,
                    user_id=participant.user_id,
                    hackathon_id=participant.hackathon_id,
                    team_id=participant.team_id,
                    role=participant.role.value,
                    selected_track=participant.selected_track,
                    joined_at=participant.joined_at,
                )
            )
            self.session.commit()
        except IntegrityError:
            self.session.rollback()
            if self.get_participant(participant.user_id, participant.hackathon_id) is not None:
                raise ParticipantAlreadyRegistered(participant.user_id, participant.hackathon_id)
            raise

    def list_participants(self, hackathon_id: UUID) -> List[Participant]:
        rows = (
            self.session.query(ParticipantTable)
            .options(selectinload(ParticipantTable.user))
            .filter_by(hackathon_id=hackathon_id)
            .order_by(ParticipantTable.joined_at)
            .all()
        )
        return [self._map_participant(p) for p in rows]

    def list_participations(self, user_id: UUID) -> List[Participant]:
        rows = (
            self.session.query(ParticipantTable)
            .filter_by(user_id=user_id)
            .order_by(ParticipantTable.joined_at.desc())
            .all()
        )
        return [self._map_participant(p) for p in rows]

    def count_participants(self, hackathon_id: Optional[UUID] = None) -> int:
        q = self.session.query(func.count(ParticipantTable.id))
        if hackathon_id is not None:
            q = q.filter(ParticipantTable.hackathon_id == hackathon_id)
        return int(q.scalar() or 0)

    def count_distinct_participant_users(self) -> int:
        return int(self.session.query(func.count(distinct(ParticipantTable.user_id))).scalar() or 0)

    def get_team_by_id(self, team_id: UUID) -> Optional[Team]:
        t = (
            self.session.query(TeamTable)
            .options(selectinload(TeamTable.members).selectinload(ParticipantTable.user))
            .filter_by(id=team_id)
            .first()
        )
        return self._map_team(t) if t else None

    def get_teams_by_hackathon(self, hackathon_id: UUID) -> List[Team]:
        rows = (
            self.session.query(TeamTable)
            .options(selectinload(TeamTable.members).selectinload(ParticipantTable.user))
            .filter_by(hackathon_id=hackathon_id)
            .order_by(TeamTable.created_at)
            .all()
        )
        return [self._map_team(t) for t in rows]

    def count_teams(self, hackathon_id: Optional[UUID] = None) -> int:
        q = self.session.query(func.count(TeamTable.id))
        if hackathon_id is not None:
            q = q.filter(TeamTable.hackathon_id == hackathon_id)
        return int(q.scalar() or 0)

    # =========================
    # Submissions
    # =========================

    def create_submission(self, submission: Submission, files: List[SubmissionFile]) -> None:
        db_submission = SubmissionTable(
            id=submission.id,
            hackathon_id=submission.hackathon_id,
            participant_id=submission.participant_id,
            team_id=submission.team_id,
            title=submission.title,
            description=submission.description,
            repo_url=submission.repo_url,
            demo_url=submission.demo_url,
            status=submission.status.value,
            submitted_at=submission.submitted_at,
            created_at=submission.created_at,
            updated_at=submission.updated_at,
        )
        db_submission.files = [
            SubmissionFileTable(
                id=f.id,
                submission_id=submission.id,
                file_name=f.file_name,
                file_url=f.file_url,
                file_type=f.file_type,
                file_size=f.file_size,
            )
            for f in files
        ]
        self.session.add(db_submission)
        try:
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise

    def get_submission_by_id(self, submission_id: UUID) -> Optional[Submission]:
        s = self._submission_query().filter(SubmissionTable.id == submission_id).first()
        return self._map_submission(s) if s else None

    def list_submissions(self, filters: SubmissionFilter) -> List[Submission]:
        q = self._submission_query()
        if filters.hackathon_id is not None:
            q = q.filter(SubmissionTable.hackathon_id == filters.hackathon_id)
        if filters.hackathon_ids is not None:
            if not filters.hackathon_ids:
                return []
            q = q.filter(SubmissionTable.hackathon_id.in_(filters.hackathon_ids))
        if filters.team_id is not None:
            q = q.filter(SubmissionTable.team_id == filters.team_id)
        if filters.status is not None:
            q = q.filter(SubmissionTable.status == _db_value(filters.status))
        if filters.user_id is not None:
            q = q.join(ParticipantTable, ParticipantTable.id == SubmissionTable.participant_id).filter(
                ParticipantTable.user_id == filters.user_id
            )
        rows = q.order_by(SubmissionTable.created_at.desc()).all()
        return [self._map_submission(s) for s in rows]

    def update_submission_owned(
        self, submission_id: UUID, user_id: UUID, changes: Mapping[str, Any]
    ) -> bool:
        values = {key: _db_value(value) for key, value in changes.items()}
        values["updated_at"] = datetime.utcnow()
        try:
            matched = self._owned_submission(submission_id, user_id).update(
                values, synchronize_session=False
            )
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise
        return matched > 0

    def delete_submission_owned(self, submission_id: UUID, user_id: UUID) -> bool:
        try:
            matched = self._owned_submission(submission_id, user_id).delete(synchronize_session=False)
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise
        return matched > 0

    # =========================
    # Analytics & Reporting
    # =========================

    def count_submissions(self, hackathon_id: Optional[UUID] = None) -> int:
        q = self.session.query(func.count(SubmissionTable.id))
        if hackathon_id is not None:
            q = q.filter(SubmissionTable.hackathon_id == hackathon_id)
        return int(q.scalar() or 0)

    def count_submissions_by_status(self, hackathon_id: UUID) -> Dict[str, int]:
        rows = (
            self.session.query(SubmissionTable.status, func.count(SubmissionTable.id))
            .filter(SubmissionTable.hackathon_id == hackathon_id)
            .group_by(SubmissionTable.status)
            .all()
        )
        return {status: int(n) for status, n in rows}

    # =========================
    # Private helpers / mappers
    # =========================

    def _submission_query(self):
        return self.session.query(SubmissionTable).options(
            selectinload(SubmissionTable.participant).selectinload(ParticipantTable.user),
            selectinload(SubmissionTable.team)
            .selectinload(TeamTable.members)
            .selectinload(ParticipantTable.user),
            selectinload(SubmissionTable.hackathon).selectinload(HackathonTable.problem_statements),
            selectinload(SubmissionTable.files),
        )

    def _owned_submission(self, submission_id: UUID, user_id: UUID):
        participant_ids = select(ParticipantTable.id).where(ParticipantTable.user_id == user_id)
        return self.session.query(SubmissionTable).filter(
            SubmissionTable.id == submission_id,
            SubmissionTable.participant_id.in_(participant_ids),
        )

    def _counts_for(self, hackathon_ids: List[UUID]) -> Dict[UUID, HackathonCounts]:
        if not hackathon_ids:
            return {}

        def grouped(table) -> Dict[UUID, int]:
            rows = (
                self.session.query(table.hackathon_id, func.count(table.id))
                .filter(table.hackathon_id.in_(hackathon_ids))
                .group_by(table.hackathon_id)
                .all()
            )
            return {hid: int(n) for hid, n in rows}

        participants = grouped(ParticipantTable)
        teams = grouped(TeamTable)
        submissions = grouped(SubmissionTable)
        return {
            hid: HackathonCounts(
                participants=participants.get(hid, 0),
                teams=teams.get(hid, 0),
                submissions=submissions.get(hid, 0),
            )
            for hid in hackathon_ids
        }

    def _map_user(self, u: UserTable) -> UserSummary:
        return UserSummary(
            id=u.id,
            email=u.email,
            first_name=u.first_name,
            last_name=u.last_name,
        )

    def _map_track(self, ps: ProblemStatementTable) -> Track:
        return Track(
            id=ps.id,
            hackathon_id=ps.hackathon_id,
            track_number=ps.track_number,
            track_title=ps.track_title,
            description=ps.description,
            file_name=ps.file_name,
            file_url=ps.file_url,
            file_type=ps.file_type,
            file_size=ps.file_size,
            uploaded_by_id=ps.uploaded_by_id,
        )

    def _map_hackathon(
        self,
        h: HackathonTable,
        counts: Optional[HackathonCounts] = None,
        with_tracks: bool = False,
    ) -> Hackathon:
        return Hackathon(
            id=h.id,
            title=h.title,
            description=h.description,
            type=HackathonType(h.type),
            status=HackathonStatus(h.status),
            min_team_size=h.min_team_size,
            max_team_size=h.max_team_size,
            start_date=h.start_date,
            end_date=h.end_date,
            registration_deadline=h.registration_deadline,
            organizer_id=h.organizer_id,
            banner_url=h.banner_url,
            location=h.location,
            is_virtual=h.is_virtual,
            prize_pool=h.prize_pool,
            created_at=h.created_at,
            updated_at=h.updated_at,
            organizer=self._map_user(h.organizer) if h.organizer else None,
            tracks=[self._map_track(ps) for ps in h.problem_statements] if with_tracks else [],
            counts=counts,
        )

    def _map_participant(self, p: ParticipantTable) -> Participant:
        return Participant(
            id=p.id,
            user_id=p.user_id,
            hackathon_id=p.hackathon_id,
            role=ParticipantRole(p.role),
            joined_at=p.joined_at,
            team_id=p.team_id,
            selected_track=p.selected_track,
            user=self._map_user(p.user) if p.user else None,
        )

    def _map_team(self, t: TeamTable) -> Team:
        return Team(
            id=t.id,
            name=t.name,
            hackathon_id=t.hackathon_id,
            leader_id=t.leader_id,
            created_at=t.created_at,
            description=t.description or "",
            members=[self._map_participant(p) for p in t.members],
        )

    def _map_submission(self, s: SubmissionTable) -> Submission:
        return Submission(
            id=s.id,
            hackathon_id=s.hackathon_id,
            participant_id=s.participant_id,
            title=s.title,
            status=SubmissionStatus(s.status),
            created_at=s.created_at,
            updated_at=s.updated_at,
            team_id=s.team_id,
            description=s.description,
            repo_url=s.repo_url,
            demo_url=s.demo_url,
            submitted_at=s.submitted_at,
            participant=self._map_participant(s.participant) if s.participant else None,
            team=self._map_team(s.team) if s.team else None,
            hackathon_title=s.hackathon.title if s.hackathon else None,
            tracks=[self._map_track(ps) for ps in s.hackathon.problem_statements] if s.hackathon else [],
            files=[
                SubmissionFile(
                    id=f.id,
                    submission_id=f.submission_id,
                    file_name=f.file_name,
                    file_url=f.file_url,
                    file_type=f.file_type,
                    file_size=f.file_size,
                )
                for f in s.files
            ],
        )
