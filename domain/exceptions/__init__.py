from .base import DomainError

from .hackathon import (
    HackathonNotFound,
    HackathonAccessDenied,
    HackathonInvalidDates,
    HackathonInvalidTeamSize,
    InvalidStatusTransition,
)

from .participant import (
    ParticipantAlreadyRegistered,
    NotRegisteredForHackathon,
)

from .team import (
    TeamNotFound,
    TeamMismatch,
)

from .submission import (
    SubmissionNotFound,
    SubmissionAccessDenied,
)

from .user import UserNotFound

__all__ = [
    "DomainError",
    "HackathonNotFound",
    "HackathonAccessDenied",
    "HackathonInvalidDates",
    "HackathonInvalidTeamSize",
    "InvalidStatusTransition",
    "ParticipantAlreadyRegistered",
    "NotRegisteredForHackathon",
    "TeamNotFound",
    "TeamMismatch",
    "SubmissionNotFound",
    "SubmissionAccessDenied",
    "UserNotFound",
]
