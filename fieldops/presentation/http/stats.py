"""Dashboard statistics endpoint."""

from fastapi import APIRouter, Depends

from fieldops.application.services.statistics_service import StatisticsService
from fieldops.domain.protocols import SubmissionRepository, UserRepository
from fieldops.infrastructure.auth import (
    RequestContext,
    get_submission_repository,
    get_user_repository,
    require_manager,
)
from fieldops.presentation.http.schemas import CamelModel

router = APIRouter(tags=["Stats"])


class StatsResponse(CamelModel):
    total: int
    feeding: int
    maintenance: int
    today_count: int
    active_agents: int


def get_statistics_service(
    submissions: SubmissionRepository = Depends(get_submission_repository),
    users: UserRepository = Depends(get_user_repository),
) -> StatisticsService:
    return StatisticsService(submissions, users)


@router.get("/stats", response_model=StatsResponse)
async def get_stats(
    context: RequestContext = Depends(require_manager),
    service: StatisticsService = Depends(get_statistics_service),
) -> StatsResponse:
    """Submission totals for the manager dashboard."""
    stats = await service.compute_stats()
    return StatsResponse(
        total=stats.total,
        feeding=stats.feeding,
        maintenance=stats.maintenance,
        today_count=stats.today_count,
        active_agents=stats.active_agents,
    )
