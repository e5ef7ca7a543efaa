from __future__ import annotations
from uuid import UUID
from domain.exceptions.base import DomainError


class HackathonNotFound(DomainError):
    def __init__(self, hackathon_id: UUID):
        super().__init__(f"Hackathon not found (id={hackathon_id})")


class HackathonAccessDenied(DomainError):
    def __init__(self, action: str = "update"):
        super().__init__(f"You can only {action} your own hackathons")


class HackathonInvalidDates(DomainError):
    def __init__(self):
        super().__init__("Invalid dates: start_date must be <= end_date")


class HackathonInvalidTeamSize(DomainError):
    def __init__(self, min_size: int, max_size: int):
        super().__init__(
            f"Invalid team size: min_team_size ({min_size}) must be <= max_team_size ({max_size})"
        )


class InvalidStatusTransition(DomainError):
    def __init__(self, current: str, target: str):
        super().__init__(f"Cannot change hackathon status from {current} to {target}")
