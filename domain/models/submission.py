from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional
from uuid import UUID

from domain.models.hackathon import Hackathon, Track
from domain.models.identity import Participant, Team, UserSummary


class SubmissionStatus(str, Enum):
    DRAFT = "DRAFT"
    SUBMITTED = "SUBMITTED"


class SubmissionType(str, Enum):
    INDIVIDUAL = "INDIVIDUAL"
    TEAM = "TEAM"


@dataclass(frozen=True)
class SubmissionFile:
    id: UUID
    submission_id: UUID
    file_name: str
    file_url: str
    file_type: str
    file_size: int


@dataclass(frozen=True)
class FileSpec:
    name: Optional[str] = None
    url: Optional[str] = None
    type: Optional[str] = None
    size: Optional[int] = None


@dataclass(frozen=True)
class Submission:
    id: UUID
    hackathon_id: UUID
    participant_id: UUID
    title: str
    status: SubmissionStatus
    created_at: datetime
    updated_at: datetime
    team_id: Optional[UUID] = None
    description: Optional[str] = None
    repo_url: Optional[str] = None
    demo_url: Optional[str] = None
    submitted_at: Optional[datetime] = None

    # relational includes
    participant: Optional[Participant] = None
    team: Optional[Team] = None
    hackathon_title: Optional[str] = None
    tracks: List[Track] = field(default_factory=list)
    files: List[SubmissionFile] = field(default_factory=list)


@dataclass(frozen=True)
class NewSubmission:
    hackathon_id: UUID
    title: str
    description: Optional[str] = None
    team_id: Optional[UUID] = None
    repository_url: Optional[str] = None
    live_url: Optional[str] = None
    is_draft: bool = False
    files: List[FileSpec] = field(default_factory=list)


@dataclass(frozen=True)
class SubmissionChanges:
    """Partial update; None means "leave as is"."""
    title: Optional[str] = None
    description: Optional[str] = None
    repository_url: Optional[str] = None
    live_url: Optional[str] = None
    is_draft: Optional[bool] = None


@dataclass(frozen=True)
class SubmissionFilter:
    hackathon_id: Optional[UUID] = None
    hackathon_ids: Optional[List[UUID]] = None
    user_id: Optional[UUID] = None
    team_id: Optional[UUID] = None
    status: Optional[SubmissionStatus] = None


# =========================
# View models
# =========================

@dataclass(frozen=True)
class FileView:
    name: str
    url: str
    type: str
    size: int
    download_url: str


@dataclass(frozen=True)
class TrackView:
    number: int
    title: str


@dataclass(frozen=True)
class HackathonRef:
    id: UUID
    title: Optional[str]
    tracks: List[TrackView] = field(default_factory=list)


@dataclass(frozen=True)
class SubmissionView:
    id: UUID
    hackathon_id: UUID
    participant_id: UUID
    team_id: Optional[UUID]
    title: str
    description: Optional[str]
    repository_url: Optional[str]
    demo_url: Optional[str]
    status: SubmissionStatus
    is_draft: bool
    is_final: bool
    submitted_at: Optional[datetime]
    created_at: datetime
    updated_at: datetime
    type: SubmissionType
    selected_track: Optional[int]
    submitter_id: Optional[UUID]
    submitter: Optional[UserSummary]
    team_info: Optional[Team]
    hackathon: HackathonRef
    files: List[FileView] = field(default_factory=list)


@dataclass(frozen=True)
class MyHackathon:
    hackathon: Hackathon
    submissions: List[SubmissionView] = field(default_factory=list)


@dataclass(frozen=True)
class ParticipantEntry:
    participant: Participant
    team: Optional[Team] = None
    has_submission: bool = False
    submission_id: Optional[UUID] = None
