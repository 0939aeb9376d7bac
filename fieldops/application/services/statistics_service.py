"""Statistics aggregator for the manager dashboard."""

from datetime import UTC, datetime

from fieldops.domain.entities import SubmissionStats, UserRole
from fieldops.domain.protocols import SubmissionRepository, UserRepository


def start_of_utc_day(now: datetime) -> datetime:
    """Midnight UTC of the calendar day containing ``now``."""
    if now.tzinfo is None:
        now = now.replace(tzinfo=UTC)
    now = now.astimezone(UTC)
    return now.replace(hour=0, minute=0, second=0, microsecond=0)


class StatisticsService:
    """Computes submission counts.

    ``today_count`` uses the UTC calendar day. ``active_agents`` counts users
    whose role is agent, whether or not they have submitted anything.
    """

    def __init__(self, submissions: SubmissionRepository, users: UserRepository):
        self._submissions = submissions
        self._users = users

    async def compute_stats(self, now: datetime | None = None) -> SubmissionStats:
        since = start_of_utc_day(now or datetime.now(UTC))
        counts = await self._submissions.count(since=since)
        active_agents = await self._users.count_by_role(UserRole.AGENT)
        return SubmissionStats(
            total=counts.total,
            feeding=counts.feeding,
            maintenance=counts.maintenance,
            today_count=counts.today,
            active_agents=active_agents,
        )
