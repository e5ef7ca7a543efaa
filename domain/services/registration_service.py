from __future__ import annotations

import logging
from datetime import datetime
from typing import Iterable, Optional
from uuid import UUID, uuid4

from domain.models.identity import (
    Participant,
    ParticipantRole,
    RegistrationResult,
    Team,
    TeamMemberSpec,
)
from domain.ports.repository import RepositoryPort
from domain.exceptions import HackathonNotFound, ParticipantAlreadyRegistered, UserNotFound


class RegistrationService:
    def __init__(self, repository: RepositoryPort):
        self.repository = repository
        self.logger = logging.getLogger(__name__)

    def register(
        self,
        user_id: UUID,
        hackathon_id: UUID,
        team_name: Optional[str] = None,
        team_description: Optional[str] = None,
        team_members: Iterable[TeamMemberSpec] = (),
        selected_track: Optional[int] = None,
    ) -> RegistrationResult:
        """
        Registers the caller individually, or as leader of a new team when a
        non-blank team_name is given.

        Named team_members are accepted but not turned into participants;
        there is no invitation flow yet, only the leader is registered.
        """
        if self.repository.get_hackathon_by_id(hackathon_id) is None:
            raise HackathonNotFound(hackathon_id)

        # Fast path for a readable error; the unique constraint still decides races.
        if self.repository.get_participant(user_id, hackathon_id) is not None:
            raise ParticipantAlreadyRegistered(user_id, hackathon_id)

        if self.repository.get_user_summary(user_id) is None:
            raise UserNotFound(user_id)

        now = datetime.utcnow()

        if team_name and team_name.strip():
            team = Team(
                id=uuid4(),
                name=team_name,
                hackathon_id=hackathon_id,
                leader_id=user_id,
                created_at=now,
                description=team_description or "",
            )
            leader = Participant(
                id=uuid4(),
                user_id=user_id,
                hackathon_id=hackathon_id,
                role=ParticipantRole.LEADER,
                joined_at=now,
                team_id=team.id,
                selected_track=selected_track,
            )
            self.repository.register_participant(leader, team)

            dropped = len(list(team_members))
            self.logger.info(
                f"Team {team.id} ('{team_name}') registered for hackathon {hackathon_id} "
                f"by leader {user_id}; {dropped} named member(s) not registered"
            )
            return RegistrationResult(
                message="Successfully registered team for hackathon",
                participant=leader,
                team=team,
            )

        participant = Participant(
            id=uuid4(),
            user_id=user_id,
            hackathon_id=hackathon_id,
            role=ParticipantRole.MEMBER,
            joined_at=now,
            selected_track=selected_track,
        )
        self.repository.register_participant(participant)
        self.logger.info(f"User {user_id} registered individually for hackathon {hackathon_id}")
        return RegistrationResult(
            message="Successfully registered for hackathon",
            participant=participant,
        )
