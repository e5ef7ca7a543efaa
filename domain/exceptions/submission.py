from uuid import UUID
from domain.exceptions.base import DomainError


class SubmissionNotFound(DomainError):
    def __init__(self, submission_id: UUID):
        super().__init__(f"Submission not found (id={submission_id})")


class SubmissionAccessDenied(DomainError):
    def __init__(self, action: str | None = None):
        if action:
            super().__init__(f"You can only {action} your own submissions")
        else:
            super().__init__("Access denied")
