from uuid import UUID

from fastapi import APIRouter, Depends

from api.deps import get_analytics_service
from domain.services.analytics_service import AnalyticsService

router = APIRouter(prefix="/analytics", tags=["analytics"])


@router.get("/platform-stats")
def get_platform_stats(service: AnalyticsService = Depends(get_analytics_service)):
    return service.get_platform_stats()


@router.get("/hackathons/{hackathon_id}/stats")
def get_hackathon_stats(hackathon_id: UUID, service: AnalyticsService = Depends(get_analytics_service)):
    return service.get_hackathon_stats(hackathon_id)
