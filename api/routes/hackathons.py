from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from fastapi.encoders import jsonable_encoder
from pydantic import BaseModel, ConfigDict, EmailStr, Field

from api.deps import (
    get_current_user,
    get_hackathon_service,
    get_registration_service,
)
from domain.models.hackathon import (
    HackathonStatus,
    HackathonType,
    NewHackathon,
    TrackSpec,
)
from domain.models.identity import Caller, TeamMemberSpec
from domain.services.hackathon_service import HackathonService
from domain.services.registration_service import RegistrationService
from domain.exceptions import (
    HackathonNotFound,
    HackathonAccessDenied,
    HackathonInvalidDates,
    HackathonInvalidTeamSize,
    InvalidStatusTransition,
    ParticipantAlreadyRegistered,
    UserNotFound,
)

router = APIRouter(prefix="/hackathons", tags=["hackathons"])


class TrackIn(BaseModel):
    track_number: int = Field(ge=1)
    track_title: str = Field(min_length=1)
    description: Optional[str] = None
    file_name: Optional[str] = None
    file_url: Optional[str] = None
    file_type: Optional[str] = None
    file_size: Optional[int] = Field(None, ge=0)


class HackathonCreateIn(BaseModel):
    title: str = Field(min_length=1)
    description: Optional[str] = None
    allow_individual: bool = False
    min_team_size: Optional[int] = Field(None, ge=1)
    max_team_size: Optional[int] = Field(None, ge=1)
    start_date: datetime
    end_date: datetime
    registration_end: Optional[datetime] = None
    banner_image_url: Optional[str] = None
    venue: Optional[str] = None
    is_virtual: bool = False
    prize_amount: Optional[float] = Field(None, ge=0)
    prize_currency: Optional[str] = None
    problem_statement_tracks: List[TrackIn] = Field(default_factory=list)

    def to_domain(self) -> NewHackathon:
        data = self.model_dump(exclude={"problem_statement_tracks"})
        tracks = [TrackSpec(**t.model_dump()) for t in self.problem_statement_tracks]
        return NewHackathon(**data, tracks=tracks)


class HackathonUpdateIn(BaseModel):
    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    registration_deadline: Optional[datetime] = None
    banner_image_url: Optional[str] = None
    venue: Optional[str] = None
    is_virtual: Optional[bool] = None
    min_team_size: Optional[int] = Field(None, ge=1)
    max_team_size: Optional[int] = Field(None, ge=1)
    prize_pool: Optional[str] = None

    def to_changes(self) -> Dict[str, Any]:
        # Only fields the client actually sent
        changes = self.model_dump(exclude_unset=True)
        if "banner_image_url" in changes:
            changes["banner_url"] = changes.pop("banner_image_url")
        if "venue" in changes:
            changes["location"] = changes.pop("venue")
        return changes


class HackathonStatusIn(BaseModel):
    status: HackathonStatus


class TeamMemberIn(BaseModel):
    name: str
    email: EmailStr
    role: Optional[str] = None


class RegistrationIn(BaseModel):
    team_name: Optional[str] = None
    team_description: Optional[str] = None
    team_members: List[TeamMemberIn] = Field(default_factory=list)
    selected_track: Optional[int] = Field(None, ge=1)


class UserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: str
    first_name: Optional[str]
    last_name: Optional[str]


class TrackOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    track_number: int
    track_title: str
    description: Optional[str]
    file_name: Optional[str]
    file_url: Optional[str]
    file_type: Optional[str]
    file_size: Optional[int]


class CountsOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    participants: int
    teams: int
    submissions: int


class HackathonOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    description: str
    type: HackathonType
    status: HackathonStatus
    min_team_size: int
    max_team_size: int
    start_date: datetime
    end_date: datetime
    registration_deadline: Optional[datetime]
    organizer_id: UUID
    banner_url: Optional[str]
    location: Optional[str]
    is_virtual: bool
    prize_pool: Optional[str]
    created_at: datetime
    updated_at: datetime
    organizer: Optional[UserOut] = None
    tracks: List[TrackOut] = Field(default_factory=list)
    counts: Optional[CountsOut] = None


class MyHackathonOut(HackathonOut):
    submissions: List[Any] = Field(default_factory=list)


@router.post("", response_model=HackathonOut, status_code=201)
def create_hackathon(
    payload: HackathonCreateIn,
    caller: Caller = Depends(get_current_user),
    service: HackathonService = Depends(get_hackathon_service),
):
    try:
        h = service.create_hackathon(caller.user_id, payload.to_domain())
        return HackathonOut.model_validate(h)
    except (HackathonInvalidDates, HackathonInvalidTeamSize) as e:
        raise HTTPException(status_code=400, detail=str(e))
    except UserNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("", response_model=List[HackathonOut])
def list_hackathons(
    status: Optional[HackathonStatus] = None,
    search: Optional[str] = None,
    service: HackathonService = Depends(get_hackathon_service),
):
    hs = service.list_hackathons(status=status, search=search)
    return [HackathonOut.model_validate(h) for h in hs]


@router.get("/mine", response_model=List[MyHackathonOut])
def list_my_hackathons(
    caller: Caller = Depends(get_current_user),
    service: HackathonService = Depends(get_hackathon_service),
):
    # Hackathon fields flattened, with the caller's submissions alongside
    return [
        MyHackathonOut(
            **HackathonOut.model_validate(m.hackathon).model_dump(),
            submissions=jsonable_encoder(m.submissions),
        )
        for m in service.list_my_hackathons(caller.user_id)
    ]


@router.get("/{hackathon_id}", response_model=HackathonOut)
def get_hackathon(hackathon_id: UUID, service: HackathonService = Depends(get_hackathon_service)):
    try:
        h = service.get_hackathon(hackathon_id)
        return HackathonOut.model_validate(h)
    except HackathonNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.patch("/{hackathon_id}", response_model=HackathonOut)
def update_hackathon(
    hackathon_id: UUID,
    payload: HackathonUpdateIn,
    caller: Caller = Depends(get_current_user),
    service: HackathonService = Depends(get_hackathon_service),
):
    try:
        h = service.update_hackathon(caller.user_id, hackathon_id, payload.to_changes())
        return HackathonOut.model_validate(h)
    except HackathonNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except HackathonAccessDenied as e:
        raise HTTPException(status_code=403, detail=str(e))
    except (HackathonInvalidDates, HackathonInvalidTeamSize) as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/{hackathon_id}/publish", response_model=HackathonOut)
def publish_hackathon(
    hackathon_id: UUID,
    caller: Caller = Depends(get_current_user),
    service: HackathonService = Depends(get_hackathon_service),
):
    try:
        h = service.publish_hackathon(caller.user_id, hackathon_id)
        return HackathonOut.model_validate(h)
    except HackathonNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except HackathonAccessDenied as e:
        raise HTTPException(status_code=403, detail=str(e))


@router.patch("/{hackathon_id}/status", response_model=HackathonOut)
def update_hackathon_status(
    hackathon_id: UUID,
    payload: HackathonStatusIn,
    caller: Caller = Depends(get_current_user),
    service: HackathonService = Depends(get_hackathon_service),
):
    try:
        h = service.update_status(caller.user_id, hackathon_id, payload.status)
        return HackathonOut.model_validate(h)
    except HackathonNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except HackathonAccessDenied as e:
        raise HTTPException(status_code=403, detail=str(e))
    except InvalidStatusTransition as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.delete("/{hackathon_id}")
def delete_hackathon(
    hackathon_id: UUID,
    caller: Caller = Depends(get_current_user),
    service: HackathonService = Depends(get_hackathon_service),
):
    try:
        return service.delete_hackathon(caller.user_id, hackathon_id)
    except HackathonNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except HackathonAccessDenied as e:
        raise HTTPException(status_code=403, detail=str(e))


@router.post("/{hackathon_id}/register", status_code=201)
def register_for_hackathon(
    hackathon_id: UUID,
    payload: Optional[RegistrationIn] = None,
    caller: Caller = Depends(get_current_user),
    service: RegistrationService = Depends(get_registration_service),
):
    payload = payload or RegistrationIn()
    try:
        return service.register(
            caller.user_id,
            hackathon_id,
            team_name=payload.team_name,
            team_description=payload.team_description,
            team_members=[TeamMemberSpec(**m.model_dump()) for m in payload.team_members],
            selected_track=payload.selected_track,
        )
    except (HackathonNotFound, UserNotFound) as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ParticipantAlreadyRegistered as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.get("/{hackathon_id}/participants")
def list_participants(
    hackathon_id: UUID,
    caller: Caller = Depends(get_current_user),
    service: HackathonService = Depends(get_hackathon_service),
):
    try:
        return service.list_participants(hackathon_id)
    except HackathonNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
