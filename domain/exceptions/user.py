from uuid import UUID
from domain.exceptions.base import DomainError


class UserNotFound(DomainError):
    def __init__(self, user_id: UUID):
        super().__init__(f"User not found (id={user_id})")
