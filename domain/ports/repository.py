from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List, Mapping, Optional
from uuid import UUID

from domain.models.hackathon import Hackathon, HackathonStatus, Track
from domain.models.identity import Participant, Team, UserSummary
from domain.models.submission import Submission, SubmissionFile, SubmissionFilter


class RepositoryPort(ABC):
    # =========================
    # Users
    # =========================

    @abstractmethod
    def get_user_summary(self, user_id: UUID) -> Optional[UserSummary]:
        pass

    # =========================
    # Hackathons
    # =========================

    @abstractmethod
    def create_hackathon(self, hackathon: Hackathon, tracks: List[Track]) -> None:
        """Persists the event and its tracks in a single transaction."""
        pass

    @abstractmethod
    def get_hackathon_by_id(self, hackathon_id: UUID) -> Optional[Hackathon]:
        """Hackathon with organizer, tracks (by track number) and counts."""
        pass

    @abstractmethod
    def list_hackathons(
        self,
        status: Optional[HackathonStatus] = None,
        search: Optional[str] = None,
        ids: Optional[List[UUID]] = None,
    ) -> List[Hackathon]:
        """Newest first, with organizer and counts."""
        pass

    @abstractmethod
    def update_hackathon_owned(
        self,
        hackathon_id: UUID,
        organizer_id: UUID,
        changes: Mapping[str, Any],
        expected_status: Optional[HackathonStatus] = None,
    ) -> bool:
        """
        Conditional update; False when no row matches id, organizer and,
        if given, the expected current status.
        """
        pass

    @abstractmethod
    def delete_hackathon_owned(self, hackathon_id: UUID, organizer_id: UUID) -> bool:
        pass

    @abstractmethod
    def list_hackathon_ids_by_organizer(self, organizer_id: UUID) -> List[UUID]:
        pass

    @abstractmethod
    def count_hackathons(self, statuses: Optional[Iterable[HackathonStatus]] = None) -> int:
        pass

    # =========================
    # Participants & Teams
    # =========================

    @abstractmethod
    def get_participant(self, user_id: UUID, hackathon_id: UUID) -> Optional[Participant]:
        pass

    @abstractmethod
    def register_participant(self, participant: Participant, team: Optional[Team] = None) -> None:
        """
        Inserts the team (if any) and the participant atomically.
        Raises ParticipantAlreadyRegistered when (user_id, hackathon_id) is taken.
        """
        pass

    @abstractmethod
    def list_participants(self, hackathon_id: UUID) -> List[Participant]:
        pass

    @abstractmethod
    def list_participations(self, user_id: UUID) -> List[Participant]:
        pass

    @abstractmethod
    def count_participants(self, hackathon_id: Optional[UUID] = None) -> int:
        pass

    @abstractmethod
    def count_distinct_participant_users(self) -> int:
        pass

    @abstractmethod
    def get_team_by_id(self, team_id: UUID) -> Optional[Team]:
        pass

    @abstractmethod
    def get_teams_by_hackathon(self, hackathon_id: UUID) -> List[Team]:
        pass

    @abstractmethod
    def count_teams(self, hackathon_id: Optional[UUID] = None) -> int:
        pass

    # =========================
    # Submissions
    # =========================

    @abstractmethod
    def create_submission(self, submission: Submission, files: List[SubmissionFile]) -> None:
        pass

    @abstractmethod
    def get_submission_by_id(self, submission_id: UUID) -> Optional[Submission]:
        pass

    @abstractmethod
    def list_submissions(self, filters: SubmissionFilter) -> List[Submission]:
        pass

    @abstractmethod
    def update_submission_owned(
        self, submission_id: UUID, user_id: UUID, changes: Mapping[str, Any]
    ) -> bool:
        pass

    @abstractmethod
    def delete_submission_owned(self, submission_id: UUID, user_id: UUID) -> bool:
        pass

    # =========================
    # Analytics & Reporting
    # =========================

    @abstractmethod
    def count_submissions(self, hackathon_id: Optional[UUID] = None) -> int:
        pass

    @abstractmethod
    def count_submissions_by_status(self, hackathon_id: UUID) -> Dict[str, int]:
        pass
