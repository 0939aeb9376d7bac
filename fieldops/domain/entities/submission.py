"""Submission entity - a single ATM service visit report."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from uuid import UUID, uuid4

from fieldops.domain.entities.user import display_name

UNKNOWN_AGENT_NAME = "Unknown"


class ServiceType(str, Enum):
    """Kind of ATM visit."""

    FEEDING = "feeding"
    MAINTENANCE = "maintenance"


@dataclass(frozen=True)
class NewSubmission:
    """Validated, not yet persisted visit report."""

    client_name: str
    government: str
    atm_code: str
    service_type: ServiceType
    agent_id: str


@dataclass(frozen=True)
class Submission:
    """A persisted visit report. Immutable once created."""

    id: UUID
    client_name: str
    government: str  # governorate
    atm_code: str
    service_type: ServiceType
    agent_id: str
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @classmethod
    def from_new(cls, new: NewSubmission, created_at: datetime | None = None) -> "Submission":
        return cls(
            id=uuid4(),
            client_name=new.client_name,
            government=new.government,
            atm_code=new.atm_code,
            service_type=new.service_type,
            agent_id=new.agent_id,
            created_at=created_at or datetime.now(UTC),
        )


@dataclass(frozen=True)
class SubmissionWithAgent:
    """Submission joined with its owner's display name (manager listing)."""

    submission: Submission
    agent_name: str

    @classmethod
    def build(
        cls,
        submission: Submission,
        first_name: str | None,
        last_name: str | None,
    ) -> "SubmissionWithAgent":
        name = display_name(first_name, last_name) or UNKNOWN_AGENT_NAME
        return cls(submission=submission, agent_name=name)
