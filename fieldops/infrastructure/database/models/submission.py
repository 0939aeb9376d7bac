"""Submission database model."""

from datetime import datetime
from typing import TYPE_CHECKING
from uuid import UUID, uuid4

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Index, String, Text, func
from sqlalchemy.dialects.postgresql import UUID as PGUUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from fieldops.domain.entities.submission import ServiceType, Submission
from fieldops.infrastructure.database.models.base import Base, utcnow

if TYPE_CHECKING:
    from fieldops.infrastructure.database.models.user import UserModel

SERVICE_TYPE_VALUES = tuple(t.value for t in ServiceType)


class SubmissionModel(Base):
    """SQLAlchemy model for submissions table. Rows are never updated."""

    __tablename__ = "submissions"

    id: Mapped[UUID] = mapped_column(PGUUID(as_uuid=True), primary_key=True, default=uuid4)
    client_name: Mapped[str] = mapped_column(Text, nullable=False)
    government: Mapped[str] = mapped_column(Text, nullable=False)
    atm_code: Mapped[str] = mapped_column(Text, nullable=False)
    service_type: Mapped[str] = mapped_column(String(20), nullable=False)
    agent_id: Mapped[str] = mapped_column(
        String,
        ForeignKey("users.id"),
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
    )

    agent: Mapped["UserModel"] = relationship("UserModel", back_populates="submissions")

    __table_args__ = (
        CheckConstraint(
            "service_type IN ({})".format(", ".join(f"'{v}'" for v in SERVICE_TYPE_VALUES)),
            name="ck_submissions_service_type",
        ),
        Index("ix_submissions_agent_id", "agent_id"),
        Index("ix_submissions_created_at", "created_at"),
    )

    def to_entity(self) -> Submission:
        """Convert to domain entity."""
        return Submission(
            id=self.id,
            client_name=self.client_name,
            government=self.government,
            atm_code=self.atm_code,
            service_type=ServiceType(self.service_type),
            agent_id=self.agent_id,
            created_at=self.created_at,
        )

    @classmethod
    def from_entity(cls, entity: Submission) -> "SubmissionModel":
        """Create from domain entity."""
        return cls(
            id=entity.id,
            client_name=entity.client_name,
            government=entity.government,
            atm_code=entity.atm_code,
            service_type=entity.service_type.value,
            agent_id=entity.agent_id,
            created_at=entity.created_at,
        )
