"""Tests for the statistics aggregator."""

from datetime import UTC, datetime, timedelta, timezone

import pytest

from fieldops.application.services.statistics_service import (
    StatisticsService,
    start_of_utc_day,
)
from fieldops.domain.entities import NewSubmission, ServiceType, Submission, User, UserRole


def _submission(service_type: ServiceType, created_at: datetime) -> Submission:
    new = NewSubmission(
        client_name="Acme",
        government="giza",
        atm_code="ATM-9",
        service_type=service_type,
        agent_id="sub-agent-1",
    )
    return Submission.from_new(new, created_at=created_at)


class TestStartOfUtcDay:
    def test_truncates_to_midnight(self):
        now = datetime(2026, 3, 4, 15, 30, tzinfo=UTC)
        assert start_of_utc_day(now) == datetime(2026, 3, 4, tzinfo=UTC)

    def test_converts_other_offsets_to_utc(self):
        """01:00 at UTC+3 is still the previous UTC day."""
        now = datetime(2026, 3, 4, 1, 0, tzinfo=timezone(timedelta(hours=3)))
        assert start_of_utc_day(now) == datetime(2026, 3, 3, tzinfo=UTC)


class TestComputeStats:
    @pytest.mark.asyncio
    async def test_counts(self, submission_repo, user_repo):
        """Totals split by type, today's count and agent headcount."""
        now = datetime(2026, 3, 4, 12, 0, tzinfo=UTC)
        submission_repo.submissions.extend(
            [
                _submission(ServiceType.FEEDING, now - timedelta(hours=1)),
                _submission(ServiceType.FEEDING, now - timedelta(days=2)),
                _submission(ServiceType.MAINTENANCE, now - timedelta(hours=11)),
            ]
        )
        user_repo.add_user(User(id="a1", email="a1@example.com"))
        user_repo.add_user(User(id="a2", email="a2@example.com"))

        stats = await StatisticsService(submission_repo, user_repo).compute_stats(now=now)

        assert stats.total == 3
        assert stats.feeding == 2
        assert stats.maintenance == 1
        assert stats.total == stats.feeding + stats.maintenance
        assert stats.today_count == 2
        assert stats.active_agents == 2

    @pytest.mark.asyncio
    async def test_managers_are_not_counted_as_agents(self, submission_repo, user_repo):
        stats = await StatisticsService(submission_repo, user_repo).compute_stats()

        assert stats.total == 0
        assert stats.active_agents == 0
        assert await user_repo.count_by_role(UserRole.MANAGER) == 1
