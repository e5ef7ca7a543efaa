from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException

from api.deps import get_team_service
from domain.services.team_service import TeamService
from domain.exceptions import HackathonNotFound, TeamNotFound

router = APIRouter(prefix="/teams", tags=["teams"])


@router.get("/hackathon/{hackathon_id}")
def list_teams_by_hackathon(
    hackathon_id: UUID,
    service: TeamService = Depends(get_team_service),
):
    try:
        return service.list_teams(hackathon_id)
    except HackathonNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/{team_id}")
def get_team(
    team_id: UUID,
    service: TeamService = Depends(get_team_service),
):
    try:
        return service.get_team(team_id)
    except TeamNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
