import logging
from uuid import UUID

from domain.models.hackathon import ACTIVE_STATUSES
from domain.models.stats import HackathonStats, PlatformStats
from domain.ports.repository import RepositoryPort


class AnalyticsService:
    """
    Read-only rollups. Statistics are advisory: any failure while counting
    is logged and answered with zeros instead of an error.
    """

    def __init__(self, repository: RepositoryPort):
        self.repository = repository
        self.logger = logging.getLogger(__name__)

    def get_platform_stats(self) -> PlatformStats:
        try:
            stats = PlatformStats(
                total_hackathons=self.repository.count_hackathons(),
                active_hackathons=self.repository.count_hackathons(ACTIVE_STATUSES),
                total_participants=self.repository.count_distinct_participant_users(),
                total_submissions=self.repository.count_submissions(),
            )
        except Exception:
            self.logger.exception("Error calculating platform stats")
            return PlatformStats()

        self.logger.info(f"Platform stats calculated: {stats}")
        return stats

    def get_hackathon_stats(self, hackathon_id: UUID) -> HackathonStats:
        try:
            return HackathonStats(
                total_participants=self.repository.count_participants(hackathon_id),
                total_teams=self.repository.count_teams(hackathon_id),
                total_submissions=self.repository.count_submissions(hackathon_id),
                submissions_by_status=self.repository.count_submissions_by_status(hackathon_id),
            )
        except Exception:
            self.logger.exception(f"Error calculating stats for hackathon {hackathon_id}")
            return HackathonStats()
