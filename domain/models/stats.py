from dataclasses import dataclass, field
from typing import Dict


@dataclass(frozen=True)
class PlatformStats:
    total_hackathons: int = 0
    active_hackathons: int = 0
    total_participants: int = 0
    total_submissions: int = 0


@dataclass(frozen=True)
class HackathonStats:
    total_participants: int = 0
    total_teams: int = 0
    total_submissions: int = 0
    submissions_by_status: Dict[str, int] = field(default_factory=dict)
