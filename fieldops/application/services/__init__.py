"""Application services."""

from fieldops.application.services.statistics_service import StatisticsService
from fieldops.application.services.submission_service import SubmissionService
from fieldops.application.services.user_directory import UserDirectory

__all__ = ["StatisticsService", "SubmissionService", "UserDirectory"]
