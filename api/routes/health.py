from fastapi import APIRouter

from core.settings import get_settings

router = APIRouter(tags=["health"])


@router.get("/health")
def health():
    settings = get_settings()
    return {
        "status": "ok",
        "api_prefix": settings.api_prefix,
    }
