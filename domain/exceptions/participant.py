from uuid import UUID
from domain.exceptions.base import DomainError


class ParticipantAlreadyRegistered(DomainError):
    def __init__(self, user_id: UUID | None = None, hackathon_id: UUID | None = None):
        msg = "You are already registered for this hackathon"
        if user_id and hackathon_id:
            msg += f" (user={user_id}, hackathon={hackathon_id})"
        super().__init__(msg)


class NotRegisteredForHackathon(DomainError):
    def __init__(self, hackathon_id: UUID):
        super().__init__(
            f"You must be registered for this hackathon to submit (hackathon={hackathon_id})"
        )
