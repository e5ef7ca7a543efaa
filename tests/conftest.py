import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("AUTO_CREATE_TABLES", "false")

import uuid
from datetime import datetime, timedelta

import pytest
from fastapi.testclient import TestClient

from infrastructure.database import SessionLocal, engine, get_db
from infrastructure.persistence.tables import Base, UserTable
from infrastructure.adapters.repository.postgres_repository import PostgresRepository
from domain.models.hackathon import NewHackathon, TrackSpec
from domain.services.analytics_service import AnalyticsService
from domain.services.hackathon_service import HackathonService
from domain.services.registration_service import RegistrationService
from domain.services.submission_service import SubmissionService
from domain.services.team_service import TeamService


# Fresh schema per test on the shared in-memory engine
@pytest.fixture
def session():
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def repo(session):
    return PostgresRepository(session)


def _add_user(session, email, role="PARTICIPANT", first_name=None):
    user = UserTable(
        id=uuid.uuid4(),
        email=email,
        first_name=first_name or email.split("@")[0].title(),
        last_name="Test",
        role=role,
    )
    session.add(user)
    session.commit()
    return user.id


@pytest.fixture
def users(session):
    return {
        "organizer": _add_user(session, "olga@example.com", "ORGANIZER"),
        "other_organizer": _add_user(session, "omar@example.com", "ORGANIZER"),
        "alice": _add_user(session, "alice@example.com"),
        "bob": _add_user(session, "bob@example.com"),
        "judge": _add_user(session, "judy@example.com", "JUDGE"),
    }


@pytest.fixture
def hackathon_service(repo):
    return HackathonService(repository=repo)


@pytest.fixture
def registration_service(repo):
    return RegistrationService(repository=repo)


@pytest.fixture
def submission_service(repo):
    return SubmissionService(repository=repo)


@pytest.fixture
def team_service(repo):
    return TeamService(repository=repo)


@pytest.fixture
def analytics_service(repo):
    return AnalyticsService(repository=repo)


def make_draft(title="AI Sprint", **overrides):
    start = datetime(2030, 3, 1, 9, 0)
    fields = dict(
        title=title,
        description="Build something clever",
        start_date=start,
        end_date=start + timedelta(days=2),
        tracks=[
            TrackSpec(track_number=2, track_title="Health"),
            TrackSpec(track_number=1, track_title="Climate"),
        ],
    )
    fields.update(overrides)
    return NewHackathon(**fields)


@pytest.fixture
def hackathon(hackathon_service, users):
    return hackathon_service.create_hackathon(users["organizer"], make_draft())


@pytest.fixture
def client(session):
    from api.main import app

    def _get_test_db():
        yield session

    app.dependency_overrides[get_db] = _get_test_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def new_draft():
    return make_draft
