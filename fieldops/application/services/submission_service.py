"""Submission service - validates and stores visit reports."""

from collections.abc import Mapping
from typing import Any

from fieldops.domain.entities import (
    NewSubmission,
    ServiceType,
    Submission,
    SubmissionWithAgent,
)
from fieldops.domain.errors import ValidationError
from fieldops.domain.protocols import SubmissionRepository
from fieldops.infrastructure.telemetry.logging import get_logger
from fieldops.infrastructure.telemetry.metrics import record_submission_created

logger = get_logger(__name__)

# wire name -> human label, in report order
REQUIRED_TEXT_FIELDS: dict[str, str] = {
    "clientName": "Client name",
    "government": "Government",
    "atmCode": "ATM code",
}
SERVICE_TYPE_FIELD = "serviceType"


def validate_payload(caller_id: str, payload: Mapping[str, Any]) -> NewSubmission:
    """Check a raw payload and build a NewSubmission.

    All problems are collected into one ValidationError keyed by wire field name.
    """
    errors: dict[str, str] = {}
    values: dict[str, str] = {}

    for name, label in REQUIRED_TEXT_FIELDS.items():
        raw = payload.get(name)
        if raw is None:
            errors[name] = f"{label} is required"
        elif not isinstance(raw, str):
            errors[name] = f"{label} must be a string"
        elif not raw.strip():
            errors[name] = f"{label} must not be empty"
        else:
            values[name] = raw.strip()

    service_type: ServiceType | None = None
    raw_type = payload.get(SERVICE_TYPE_FIELD)
    allowed = ", ".join(t.value for t in ServiceType)
    if raw_type is None or (isinstance(raw_type, str) and not raw_type.strip()):
        errors[SERVICE_TYPE_FIELD] = "Service type is required"
    else:
        try:
            service_type = ServiceType(raw_type)
        except ValueError:
            errors[SERVICE_TYPE_FIELD] = f"Service type must be one of: {allowed}"

    if errors:
        raise ValidationError.for_fields(errors)

    return NewSubmission(
        client_name=values["clientName"],
        government=values["government"],
        atm_code=values["atmCode"],
        service_type=service_type,
        agent_id=caller_id,
    )


class SubmissionService:
    """Create and list visit reports. There is no update or delete."""

    def __init__(self, repo: SubmissionRepository):
        self._repo = repo

    async def create(self, caller_id: str, payload: Mapping[str, Any]) -> Submission:
        """Validate and persist a report owned by ``caller_id``.

        Raises:
            ValidationError: With per-field messages; nothing is persisted
        """
        new = validate_payload(caller_id, payload)
        submission = await self._repo.add(new)

        record_submission_created(submission.service_type.value)
        logger.info(
            "Submission created",
            extra={
                "submission_id": str(submission.id),
                "service_type": submission.service_type.value,
            },
        )
        return submission

    async def list_mine(self, caller_id: str) -> list[Submission]:
        return await self._repo.list_by_agent(caller_id)

    async def list_all(self) -> list[SubmissionWithAgent]:
        """Every report with the owner's display name.

        Callers must already be authorized as manager-or-above.
        """
        return await self._repo.list_with_agents()
