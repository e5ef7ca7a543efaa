from __future__ import annotations

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from api.deps import get_current_user, get_submission_service
from domain.models.identity import Caller
from domain.models.submission import (
    FileSpec,
    NewSubmission,
    SubmissionChanges,
    SubmissionFilter,
    SubmissionStatus,
)
from domain.services.submission_service import SubmissionService
from domain.exceptions import (
    NotRegisteredForHackathon,
    SubmissionAccessDenied,
    SubmissionNotFound,
    TeamMismatch,
    UserNotFound,
)

router = APIRouter(prefix="/submissions", tags=["submissions"])


class SubmissionFileIn(BaseModel):
    name: Optional[str] = None
    url: Optional[str] = None
    type: Optional[str] = None
    size: Optional[int] = Field(None, ge=0)


class SubmissionCreateIn(BaseModel):
    hackathon_id: UUID
    title: str = Field(min_length=1)
    description: Optional[str] = None
    team_id: Optional[UUID] = None
    repository_url: Optional[str] = None
    live_url: Optional[str] = None
    is_draft: bool = False
    files: List[SubmissionFileIn] = Field(default_factory=list)


class SubmissionUpdateIn(BaseModel):
    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    repository_url: Optional[str] = None
    live_url: Optional[str] = None
    is_draft: Optional[bool] = None


@router.post("", status_code=201)
def create_submission(
    payload: SubmissionCreateIn,
    caller: Caller = Depends(get_current_user),
    service: SubmissionService = Depends(get_submission_service),
):
    draft = NewSubmission(
        **payload.model_dump(exclude={"files"}),
        files=[FileSpec(**f.model_dump()) for f in payload.files],
    )
    try:
        return service.create_submission(caller.user_id, draft)
    except UserNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except (NotRegisteredForHackathon, TeamMismatch) as e:
        raise HTTPException(status_code=403, detail=str(e))


@router.get("")
def list_submissions(
    hackathon_id: Optional[UUID] = None,
    user_id: Optional[UUID] = None,
    team_id: Optional[UUID] = None,
    status: Optional[SubmissionStatus] = None,
    caller: Caller = Depends(get_current_user),
    service: SubmissionService = Depends(get_submission_service),
):
    filters = SubmissionFilter(
        hackathon_id=hackathon_id,
        user_id=user_id,
        team_id=team_id,
        status=status,
    )
    return service.list_submissions(filters, caller)


@router.get("/{submission_id}")
def get_submission(
    submission_id: UUID,
    caller: Caller = Depends(get_current_user),
    service: SubmissionService = Depends(get_submission_service),
):
    try:
        return service.get_submission(submission_id, caller)
    except SubmissionNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except SubmissionAccessDenied as e:
        raise HTTPException(status_code=403, detail=str(e))


@router.patch("/{submission_id}")
def update_submission(
    submission_id: UUID,
    payload: SubmissionUpdateIn,
    caller: Caller = Depends(get_current_user),
    service: SubmissionService = Depends(get_submission_service),
):
    try:
        return service.update_submission(
            caller.user_id, submission_id, SubmissionChanges(**payload.model_dump())
        )
    except SubmissionNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except SubmissionAccessDenied as e:
        raise HTTPException(status_code=403, detail=str(e))


@router.delete("/{submission_id}")
def delete_submission(
    submission_id: UUID,
    caller: Caller = Depends(get_current_user),
    service: SubmissionService = Depends(get_submission_service),
):
    try:
        return service.delete_submission(caller.user_id, submission_id)
    except SubmissionNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except SubmissionAccessDenied as e:
        raise HTTPException(status_code=403, detail=str(e))
