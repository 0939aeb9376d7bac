"""Submission endpoints."""

from datetime import datetime
from uuid import UUID

from fastapi import APIRouter, Depends, status

from fieldops.application.services.submission_service import SubmissionService
from fieldops.domain.entities import Submission, SubmissionWithAgent
from fieldops.domain.protocols import SubmissionRepository
from fieldops.infrastructure.auth import (
    RequestContext,
    get_submission_repository,
    require_authenticated,
    require_manager,
)
from fieldops.infrastructure.telemetry import get_logger
from fieldops.presentation.http.schemas import CamelModel

logger = get_logger(__name__)
router = APIRouter(prefix="/submissions", tags=["Submissions"])


# Request/Response models
class CreateSubmissionRequest(CamelModel):
    """Visit report as sent by the field app.

    Fields are optional here so that the service can report every
    missing or empty field in one response.
    """

    client_name: str | None = None
    government: str | None = None
    atm_code: str | None = None
    service_type: str | None = None


class SubmissionResponse(CamelModel):
    id: UUID
    client_name: str
    government: str
    atm_code: str
    service_type: str
    agent_id: str
    created_at: datetime


class SubmissionWithAgentResponse(SubmissionResponse):
    agent_name: str


def get_submission_service(
    repo: SubmissionRepository = Depends(get_submission_repository),
) -> SubmissionService:
    return SubmissionService(repo)


def _submission_to_response(submission: Submission) -> SubmissionResponse:
    return SubmissionResponse(
        id=submission.id,
        client_name=submission.client_name,
        government=submission.government,
        atm_code=submission.atm_code,
        service_type=submission.service_type.value,
        agent_id=submission.agent_id,
        created_at=submission.created_at,
    )


def _with_agent_to_response(item: SubmissionWithAgent) -> SubmissionWithAgentResponse:
    base = _submission_to_response(item.submission)
    return SubmissionWithAgentResponse(**base.model_dump(), agent_name=item.agent_name)


# Endpoints
@router.post("", response_model=SubmissionResponse, status_code=status.HTTP_201_CREATED)
async def create_submission(
    request: CreateSubmissionRequest,
    context: RequestContext = Depends(require_authenticated),
    service: SubmissionService = Depends(get_submission_service),
) -> SubmissionResponse:
    """Record a visit report owned by the caller."""
    submission = await service.create(context.user_id, request.model_dump(by_alias=True))
    return _submission_to_response(submission)


@router.get("/my", response_model=list[SubmissionResponse])
async def list_my_submissions(
    context: RequestContext = Depends(require_authenticated),
    service: SubmissionService = Depends(get_submission_service),
) -> list[SubmissionResponse]:
    """The caller's own reports, newest first."""
    submissions = await service.list_mine(context.user_id)
    return [_submission_to_response(s) for s in submissions]


@router.get("", response_model=list[SubmissionWithAgentResponse])
async def list_all_submissions(
    context: RequestContext = Depends(require_manager),
    service: SubmissionService = Depends(get_submission_service),
) -> list[SubmissionWithAgentResponse]:
    """Every report with the submitting agent's name. Manager or admin only."""
    items = await service.list_all()
    logger.debug(
        "Listed all submissions",
        extra={"count": len(items), "role": context.role.value},
    )
    return [_with_agent_to_response(i) for i in items]
