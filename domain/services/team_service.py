from uuid import UUID
from typing import List

from domain.models.identity import Team
from domain.ports.repository import RepositoryPort
from domain.exceptions import HackathonNotFound, TeamNotFound


class TeamService:
    def __init__(self, repository: RepositoryPort):
        self.repository = repository

    def list_teams(self, hackathon_id: UUID) -> List[Team]:
        if self.repository.get_hackathon_by_id(hackathon_id) is None:
            raise HackathonNotFound(hackathon_id)
        return self.repository.get_teams_by_hackathon(hackathon_id)

    def get_team(self, team_id: UUID) -> Team:
        team = self.repository.get_team_by_id(team_id)
        if team is None:
            raise TeamNotFound(team_id)
        return team
