from typing import Optional
from uuid import UUID

from fastapi import Depends, Header, HTTPException
from sqlalchemy.orm import Session

from infrastructure.database import get_db
from infrastructure.adapters.repository.postgres_repository import PostgresRepository

from domain.models.identity import Caller, Role
from domain.services.analytics_service import AnalyticsService
from domain.services.hackathon_service import HackathonService
from domain.services.registration_service import RegistrationService
from domain.services.submission_service import SubmissionService
from domain.services.team_service import TeamService


def get_repository(db: Session = Depends(get_db)) -> PostgresRepository:
    return PostgresRepository(db)


def get_hackathon_service(repo: PostgresRepository = Depends(get_repository)) -> HackathonService:
    return HackathonService(repository=repo)


def get_registration_service(repo: PostgresRepository = Depends(get_repository)) -> RegistrationService:
    return RegistrationService(repository=repo)


def get_submission_service(repo: PostgresRepository = Depends(get_repository)) -> SubmissionService:
    return SubmissionService(repository=repo)


def get_team_service(repo: PostgresRepository = Depends(get_repository)) -> TeamService:
    return TeamService(repository=repo)


def get_analytics_service(repo: PostgresRepository = Depends(get_repository)) -> AnalyticsService:
    return AnalyticsService(repository=repo)


def get_current_user(
    x_user_id: Optional[str] = Header(None),
    x_user_role: Optional[str] = Header(None),
) -> Caller:
    """
    Identity is established upstream; the gateway forwards the
    authenticated user id and role as headers.
    """
    if not x_user_id or not x_user_role:
        raise HTTPException(status_code=401, detail="Missing caller identity")
    try:
        return Caller(user_id=UUID(x_user_id), role=Role(x_user_role.upper()))
    except ValueError:
        raise HTTPException(status_code=401, detail="Invalid caller identity")
