"""Domain entities - pure Python dataclasses representing business objects."""

from fieldops.domain.entities.identity import ExternalIdentity
from fieldops.domain.entities.stats import SubmissionCounts, SubmissionStats
from fieldops.domain.entities.submission import (
    UNKNOWN_AGENT_NAME,
    NewSubmission,
    ServiceType,
    Submission,
    SubmissionWithAgent,
)
from fieldops.domain.entities.user import DEFAULT_ROLE, User, UserRole

__all__ = [
    "ExternalIdentity",
    "User",
    "UserRole",
    "DEFAULT_ROLE",
    "Submission",
    "SubmissionWithAgent",
    "NewSubmission",
    "ServiceType",
    "UNKNOWN_AGENT_NAME",
    "SubmissionCounts",
    "SubmissionStats",
]
