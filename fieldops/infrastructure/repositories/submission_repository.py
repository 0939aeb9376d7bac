"""Submission repository implementation."""

from datetime import datetime

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from fieldops.domain.entities import (
    NewSubmission,
    ServiceType,
    Submission,
    SubmissionCounts,
    SubmissionWithAgent,
)
from fieldops.infrastructure.database.models.submission import SubmissionModel
from fieldops.infrastructure.database.models.user import UserModel
from fieldops.infrastructure.repositories.base import BaseRepository


def build_list_with_agents_query() -> Select:
    """Every submission with its owner's name columns, newest first.

    Outer join, so a submission whose owner row is missing still appears.
    """
    return (
        select(SubmissionModel, UserModel.first_name, UserModel.last_name)
        .outerjoin(UserModel, SubmissionModel.agent_id == UserModel.id)
        .order_by(SubmissionModel.created_at.desc())
    )


def build_submission_counts_query(since: datetime) -> Select:
    """Feeding, maintenance and created-since counts in one aggregate row."""
    return select(
        func.count().filter(SubmissionModel.service_type == ServiceType.FEEDING.value),
        func.count().filter(SubmissionModel.service_type == ServiceType.MAINTENANCE.value),
        func.count().filter(SubmissionModel.created_at >= since),
    ).select_from(SubmissionModel)


class SubmissionRepositoryImpl(BaseRepository[SubmissionModel, Submission]):
    """SQLAlchemy implementation of SubmissionRepository.

    Append-only: rows are inserted and read, never updated or deleted.
    """

    model_class = SubmissionModel

    def __init__(self, session: AsyncSession):
        super().__init__(session)

    async def add(self, submission: NewSubmission) -> Submission:
        """Insert a single submission row."""
        model = SubmissionModel.from_entity(Submission.from_new(submission))
        self.session.add(model)
        await self.session.flush()
        return model.to_entity()

    async def list_by_agent(self, agent_id: str) -> list[Submission]:
        """Submissions owned by ``agent_id``, newest first."""
        stmt = (
            select(SubmissionModel)
            .where(SubmissionModel.agent_id == agent_id)
            .order_by(SubmissionModel.created_at.desc())
        )
        return await self._all(stmt)

    async def list_with_agents(self) -> list[SubmissionWithAgent]:
        """All submissions with the owner's name, newest first."""
        result = await self.session.execute(build_list_with_agents_query())
        return [
            SubmissionWithAgent.build(model.to_entity(), first_name, last_name)
            for model, first_name, last_name in result.all()
        ]

    async def count(self, since: datetime) -> SubmissionCounts:
        """Counts by service type and since ``since`` in a single aggregate query."""
        result = await self.session.execute(build_submission_counts_query(since))
        feeding, maintenance, today = result.one()
        return SubmissionCounts(
            feeding=int(feeding),
            maintenance=int(maintenance),
            today=int(today),
        )
