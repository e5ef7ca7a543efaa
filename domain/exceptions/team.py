from uuid import UUID
from domain.exceptions.base import DomainError


class TeamNotFound(DomainError):
    def __init__(self, team_id: UUID):
        super().__init__(f"Team with id '{team_id}' not found")


class TeamMismatch(DomainError):
    def __init__(self, team_id: UUID):
        super().__init__(f"You can only submit on behalf of your own team (team={team_id})")
