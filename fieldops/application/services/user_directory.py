"""User directory - maps verified identities onto local users.

Sync strategy:
    - A first login inserts the user with the default ``agent`` role.
    - Later logins refresh display fields (names, avatar) only.
    - The stored role is never touched by a login; ``update_user_role``
      is the only path that changes it.
    - Insert and refresh are one atomic upsert keyed on the subject id,
      so concurrent first logins cannot create duplicate rows.
    - If the database is unreachable the request fails closed with
      DirectoryUnavailableError. There is no fallback identity.
"""

import asyncio
from collections.abc import Awaitable
from typing import TypeVar

from sqlalchemy.exc import SQLAlchemyError

from fieldops.domain.entities import DEFAULT_ROLE, ExternalIdentity, User, UserRole
from fieldops.domain.errors import AppError, DirectoryUnavailableError, UserNotFoundError
from fieldops.domain.protocols import UserRepository
from fieldops.infrastructure.telemetry.logging import get_logger
from fieldops.infrastructure.telemetry.metrics import record_user_provisioned

logger = get_logger(__name__)

T = TypeVar("T")

DEFAULT_OPERATION_TIMEOUT_SECONDS = 8.0


class UserDirectory:
    """Resolves, provisions and re-roles local users."""

    def __init__(
        self,
        repo: UserRepository,
        operation_timeout: float = DEFAULT_OPERATION_TIMEOUT_SECONDS,
    ):
        self._repo = repo
        self._timeout = operation_timeout

    async def resolve_user(self, identity: ExternalIdentity) -> User:
        """Return the local user for a verified identity, creating it on first sight."""
        user, created = await self._guard(
            "resolve_user",
            self._repo.upsert_from_identity(identity, role_on_insert=DEFAULT_ROLE),
        )
        if created:
            record_user_provisioned()
            logger.info(
                "User provisioned on first login",
                extra={"subject": user.id, "role": user.role.value},
            )
        return user

    async def provision_user(self, identity: ExternalIdentity, role: UserRole) -> User:
        """Create a user with an explicit initial role (admin account creation).

        An already-known subject keeps its stored role.
        """
        user, created = await self._guard(
            "provision_user",
            self._repo.upsert_from_identity(identity, role_on_insert=role),
        )
        if created:
            record_user_provisioned()
        else:
            logger.info(
                "Provisioned user already existed; role left unchanged",
                extra={"subject": user.id, "role": user.role.value},
            )
        return user

    async def update_user_role(self, email: str, role: UserRole) -> User:
        """Explicitly change a user's role.

        Raises:
            UserNotFoundError: No user has this email
        """
        user = await self._guard("update_user_role", self._repo.update_role(email, role))
        if user is None:
            raise UserNotFoundError(
                message=f"User not found: {email}",
                details={"email": email},
            )
        logger.info(
            "User role updated",
            extra={"subject": user.id, "role": role.value, "operation": "role.update"},
        )
        return user

    async def _guard(self, operation: str, call: Awaitable[T]) -> T:
        """Bound a repository call in time and translate infrastructure failures."""
        try:
            async with asyncio.timeout(self._timeout):
                return await call
        except AppError:
            raise
        except (SQLAlchemyError, OSError, TimeoutError) as exc:
            logger.error(
                "User directory unavailable",
                extra={
                    "operation": operation,
                    "error": f"{type(exc).__name__}: {exc}",
                },
            )
            raise DirectoryUnavailableError(
                details={"operation": operation},
                operation=operation,
            ) from exc
