"""User repository implementation."""

from collections.abc import Mapping
from datetime import datetime
from typing import Any

from sqlalchemy import Update, func, literal_column, select, update
from sqlalchemy.dialects.postgresql import Insert, insert as pg_insert
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from fieldops.domain.entities import ExternalIdentity, User, UserRole
from fieldops.domain.errors import DuplicateError
from fieldops.infrastructure.database.models.base import utcnow
from fieldops.infrastructure.database.models.user import UserModel
from fieldops.infrastructure.repositories.base import BaseRepository
from fieldops.infrastructure.telemetry.logging import get_logger

logger = get_logger(__name__)

# Columns an identity refresh may touch on an existing row.
# role, email, id and created_at are never part of the update set.
REFRESHABLE_COLUMNS: tuple[str, ...] = ("first_name", "last_name", "profile_image_url")

_USER_COLUMNS = tuple(UserModel.__table__.c)


def build_identity_upsert(
    identity: ExternalIdentity,
    role_on_insert: UserRole,
    now: datetime | None = None,
) -> Insert:
    """INSERT .. ON CONFLICT (id) DO UPDATE for a verified identity.

    Empty or missing claims keep the stored value (NULLIF + COALESCE).
    """
    now = now or utcnow()
    stmt = pg_insert(UserModel).values(
        id=identity.subject,
        email=identity.email,
        first_name=identity.first_name or "",
        last_name=identity.last_name or "",
        profile_image_url=identity.avatar_url,
        role=role_on_insert.value,
        created_at=now,
        updated_at=now,
    )
    set_: dict[str, Any] = {
        column: func.coalesce(
            func.nullif(getattr(stmt.excluded, column), ""),
            getattr(UserModel, column),
        )
        for column in REFRESHABLE_COLUMNS
    }
    set_["updated_at"] = now
    return stmt.on_conflict_do_update(index_elements=[UserModel.id], set_=set_)


def build_role_update(email: str, role: UserRole) -> Update:
    """UPDATE users SET role for the row whose email matches exactly.

    Matching is exact, like the unique constraint on ``users.email``, so at
    most one row is affected.
    """
    return (
        update(UserModel)
        .where(UserModel.email == email.strip())
        .values(role=role.value, updated_at=utcnow())
    )


def _row_to_entity(row: Mapping[str, Any]) -> User:
    return User(
        id=row["id"],
        email=row["email"],
        first_name=row["first_name"] or "",
        last_name=row["last_name"] or "",
        profile_image_url=row["profile_image_url"],
        role=UserRole(row["role"]),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


class UserRepositoryImpl(BaseRepository[UserModel, User]):
    """SQLAlchemy implementation of UserRepository."""

    model_class = UserModel

    def __init__(self, session: AsyncSession):
        super().__init__(session)

    async def upsert_from_identity(
        self,
        identity: ExternalIdentity,
        role_on_insert: UserRole,
    ) -> tuple[User, bool]:
        """Insert or refresh the user in one statement.

        ``xmax = 0`` holds only for a row version created by this statement's
        INSERT, which tells a first login apart from a refresh.
        """
        stmt = build_identity_upsert(identity, role_on_insert).returning(
            *_USER_COLUMNS,
            literal_column("(xmax = 0)").label("inserted"),
        )
        try:
            result = await self.session.execute(stmt)
        except IntegrityError as exc:
            # Only the email unique constraint can fail here; id conflicts are upserted
            logger.warning(
                "User upsert rejected by unique constraint",
                extra={"subject": identity.subject, "error": str(exc.orig)},
            )
            raise DuplicateError(
                message="Email address is already registered to another account",
                details={"email": identity.email},
            ) from exc

        row = result.mappings().one()
        return _row_to_entity(row), bool(row["inserted"])

    async def update_role(self, email: str, role: UserRole) -> User | None:
        """Explicit role change; the only statement that writes ``role`` on an existing row."""
        stmt = build_role_update(email, role).returning(*_USER_COLUMNS).execution_options(
            synchronize_session=False
        )
        result = await self.session.execute(stmt)
        row = result.mappings().one_or_none()
        if row is None:
            return None
        return _row_to_entity(row)

    async def count_by_role(self, role: UserRole) -> int:
        """Count users holding exactly ``role``."""
        stmt = select(func.count()).select_from(UserModel).where(UserModel.role == role.value)
        result = await self.session.execute(stmt)
        return int(result.scalar_one())
