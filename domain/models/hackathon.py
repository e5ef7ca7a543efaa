from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, FrozenSet, List, Optional
from uuid import UUID

from domain.models.identity import UserSummary


class HackathonType(str, Enum):
    INDIVIDUAL = "INDIVIDUAL"
    TEAM = "TEAM"


class HackathonStatus(str, Enum):
    UPCOMING = "UPCOMING"
    PUBLISHED = "PUBLISHED"
    REGISTRATION_OPEN = "REGISTRATION_OPEN"
    IN_PROGRESS = "IN_PROGRESS"
    SUBMISSION_OPEN = "SUBMISSION_OPEN"
    LIVE = "LIVE"
    JUDGING = "JUDGING"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


ACTIVE_STATUSES: FrozenSet[HackathonStatus] = frozenset({
    HackathonStatus.PUBLISHED,
    HackathonStatus.REGISTRATION_OPEN,
    HackathonStatus.IN_PROGRESS,
    HackathonStatus.SUBMISSION_OPEN,
    HackathonStatus.LIVE,
})

S = HackathonStatus
STATUS_TRANSITIONS: Dict[HackathonStatus, FrozenSet[HackathonStatus]] = {
    S.UPCOMING: frozenset({S.PUBLISHED, S.REGISTRATION_OPEN, S.LIVE, S.CANCELLED}),
    S.PUBLISHED: frozenset({S.REGISTRATION_OPEN, S.LIVE, S.IN_PROGRESS, S.CANCELLED}),
    S.REGISTRATION_OPEN: frozenset({S.LIVE, S.IN_PROGRESS, S.SUBMISSION_OPEN, S.CANCELLED}),
    S.LIVE: frozenset({S.REGISTRATION_OPEN, S.IN_PROGRESS, S.SUBMISSION_OPEN, S.JUDGING, S.CANCELLED}),
    S.IN_PROGRESS: frozenset({S.SUBMISSION_OPEN, S.JUDGING, S.CANCELLED}),
    S.SUBMISSION_OPEN: frozenset({S.IN_PROGRESS, S.JUDGING, S.CANCELLED}),
    S.JUDGING: frozenset({S.COMPLETED}),
    S.COMPLETED: frozenset(),
    S.CANCELLED: frozenset({S.UPCOMING}),
}
del S


def can_transition(current: HackathonStatus, target: HackathonStatus) -> bool:
    """Re-applying the current status is always allowed."""
    return current == target or target in STATUS_TRANSITIONS[current]


@dataclass(frozen=True)
class Track:
    id: UUID
    hackathon_id: UUID
    track_number: int
    track_title: str
    description: Optional[str] = None
    file_name: Optional[str] = None
    file_url: Optional[str] = None
    file_type: Optional[str] = None
    file_size: Optional[int] = None
    uploaded_by_id: Optional[UUID] = None


@dataclass(frozen=True)
class TrackSpec:
    track_number: int
    track_title: str
    description: Optional[str] = None
    file_name: Optional[str] = None
    file_url: Optional[str] = None
    file_type: Optional[str] = None
    file_size: Optional[int] = None


@dataclass(frozen=True)
class HackathonCounts:
    participants: int = 0
    teams: int = 0
    submissions: int = 0


@dataclass(frozen=True)
class Hackathon:
    id: UUID
    title: str
    description: str
    type: HackathonType
    status: HackathonStatus
    min_team_size: int
    max_team_size: int
    start_date: datetime
    end_date: datetime
    organizer_id: UUID
    created_at: datetime
    updated_at: datetime
    registration_deadline: Optional[datetime] = None
    banner_url: Optional[str] = None
    location: Optional[str] = None
    is_virtual: bool = False
    prize_pool: Optional[str] = None

    organizer: Optional[UserSummary] = None
    tracks: List[Track] = field(default_factory=list)
    counts: Optional[HackathonCounts] = None


@dataclass(frozen=True)
class NewHackathon:
    """Organizer input for a new event; tracks are created with it."""
    title: str
    start_date: datetime
    end_date: datetime
    description: Optional[str] = None
    allow_individual: bool = False
    min_team_size: Optional[int] = None
    max_team_size: Optional[int] = None
    registration_end: Optional[datetime] = None
    banner_image_url: Optional[str] = None
    venue: Optional[str] = None
    is_virtual: bool = False
    prize_amount: Optional[float] = None
    prize_currency: Optional[str] = None
    tracks: List[TrackSpec] = field(default_factory=list)


# Columns an organizer may patch through update_hackathon.
UPDATABLE_FIELDS: FrozenSet[str] = frozenset({
    "title",
    "description",
    "start_date",
    "end_date",
    "registration_deadline",
    "banner_url",
    "location",
    "is_virtual",
    "min_team_size",
    "max_team_size",
    "prize_pool",
})
