from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional
from uuid import UUID


class Role(str, Enum):
    PARTICIPANT = "PARTICIPANT"
    ORGANIZER = "ORGANIZER"
    JUDGE = "JUDGE"
    ADMIN = "ADMIN"


PRIVILEGED_ROLES = frozenset({Role.ORGANIZER, Role.JUDGE, Role.ADMIN})


class ParticipantRole(str, Enum):
    LEADER = "LEADER"
    MEMBER = "MEMBER"


@dataclass(frozen=True)
class Caller:
    user_id: UUID
    role: Role


@dataclass(frozen=True)
class UserSummary:
    id: UUID
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None


@dataclass(frozen=True)
class Participant:
    id: UUID
    user_id: UUID
    hackathon_id: UUID
    role: ParticipantRole
    joined_at: datetime
    team_id: Optional[UUID] = None
    selected_track: Optional[int] = None
    user: Optional[UserSummary] = None


@dataclass(frozen=True)
class Team:
    id: UUID
    name: str
    hackathon_id: UUID
    leader_id: UUID
    created_at: datetime
    description: str = ""
    members: List[Participant] = field(default_factory=list)


@dataclass(frozen=True)
class TeamMemberSpec:
    name: str
    email: str
    role: Optional[str] = None


@dataclass(frozen=True)
class RegistrationResult:
    message: str
    participant: Participant
    team: Optional[Team] = None
    success: bool = True
