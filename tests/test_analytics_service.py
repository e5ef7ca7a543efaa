import uuid

from domain.models.stats import HackathonStats, PlatformStats
from domain.models.submission import NewSubmission
from domain.services.analytics_service import AnalyticsService


class BrokenRepository:
    """Every count blows up, as if the database went away."""

    def __getattr__(self, name):
        def fail(*args, **kwargs):
            raise RuntimeError(f"{name} unavailable")

        return fail


def test_platform_stats(
    analytics_service, hackathon_service, registration_service, submission_service, hackathon, users, new_draft
):
    second = hackathon_service.create_hackathon(users["organizer"], new_draft(title="Second"))
    hackathon_service.publish_hackathon(users["organizer"], hackathon.id)
    registration_service.register(users["alice"], hackathon.id)
    registration_service.register(users["alice"], second.id)
    registration_service.register(users["bob"], hackathon.id)
    submission_service.create_submission(users["bob"], NewSubmission(hackathon_id=hackathon.id, title="B"))

    stats = analytics_service.get_platform_stats()
    assert stats == PlatformStats(
        total_hackathons=2,
        active_hackathons=1,
        # alice counts once across both events
        total_participants=2,
        total_submissions=1,
    )


def test_hackathon_stats(analytics_service, registration_service, submission_service, hackathon, users):
    registration_service.register(users["alice"], hackathon.id, team_name="Rocket")
    registration_service.register(users["bob"], hackathon.id)
    submission_service.create_submission(
        users["alice"], NewSubmission(hackathon_id=hackathon.id, title="A", is_draft=True)
    )
    submission_service.create_submission(users["bob"], NewSubmission(hackathon_id=hackathon.id, title="B"))

    stats = analytics_service.get_hackathon_stats(hackathon.id)
    assert stats.total_participants == 2
    assert stats.total_teams == 1
    assert stats.total_submissions == 2
    assert stats.submissions_by_status == {"DRAFT": 1, "SUBMITTED": 1}


def test_empty_platform(analytics_service, session):
    assert analytics_service.get_platform_stats() == PlatformStats()


def test_failures_degrade_to_zeros(caplog):
    service = AnalyticsService(repository=BrokenRepository())

    assert service.get_platform_stats() == PlatformStats()
    assert service.get_hackathon_stats(uuid.uuid4()) == HackathonStats()
    assert "Error calculating platform stats" in caplog.text
