"""User database model."""

from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from fieldops.domain.entities.user import DEFAULT_ROLE, User, UserRole
from fieldops.infrastructure.database.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from fieldops.infrastructure.database.models.submission import SubmissionModel

ROLE_VALUES = tuple(role.value for role in UserRole)


class UserModel(Base, TimestampMixin):
    """SQLAlchemy model for users table."""

    __tablename__ = "users"

    # Identity provider subject id
    id: Mapped[str] = mapped_column(String, primary_key=True)
    email: Mapped[str] = mapped_column(String, nullable=False, unique=True)
    first_name: Mapped[str | None] = mapped_column(String, nullable=True)
    last_name: Mapped[str | None] = mapped_column(String, nullable=True)
    profile_image_url: Mapped[str | None] = mapped_column(String, nullable=True)
    role: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=DEFAULT_ROLE.value,
        server_default=DEFAULT_ROLE.value,
    )

    # Relationships
    submissions: Mapped[list["SubmissionModel"]] = relationship(
        "SubmissionModel",
        back_populates="agent",
    )

    __table_args__ = (
        CheckConstraint(
            "role IN ({})".format(", ".join(f"'{v}'" for v in ROLE_VALUES)),
            name="ck_users_role",
        ),
    )

    def __repr__(self) -> str:
        return f"<User {self.id} {self.role}>"

    def to_entity(self) -> User:
        """Convert to domain entity."""
        return User(
            id=self.id,
            email=self.email,
            first_name=self.first_name or "",
            last_name=self.last_name or "",
            profile_image_url=self.profile_image_url,
            role=UserRole(self.role),
            created_at=self.created_at,
            updated_at=self.updated_at,
        )
