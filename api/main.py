from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv

load_dotenv()

from core.logging import setup_logging
from core.settings import get_settings
from infrastructure.database import init_db

from api.routes.hackathons import router as hackathons_router
from api.routes.submissions import router as submissions_router
from api.routes.teams import router as teams_router
from api.routes.analytics import router as analytics_router
from api.routes.health import router as health_router

settings = get_settings()
logger = setup_logging(settings.log_level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.auto_create_tables:
        init_db()
    logger.info(f"Hackathon platform API ready on prefix {settings.api_prefix}")
    yield


app = FastAPI(title="Hackathon Management Platform", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health_router)
app.include_router(hackathons_router, prefix=settings.api_prefix)
app.include_router(submissions_router, prefix=settings.api_prefix)
app.include_router(teams_router, prefix=settings.api_prefix)
app.include_router(analytics_router, prefix=settings.api_prefix)
