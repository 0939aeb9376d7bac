"""Repository protocols - abstract interfaces for data access."""

from datetime import datetime
from typing import Protocol

from fieldops.domain.entities import (
    ExternalIdentity,
    NewSubmission,
    Submission,
    SubmissionCounts,
    SubmissionWithAgent,
    User,
    UserRole,
)


class UserRepository(Protocol):
    """Abstract interface for user data access.

    There is deliberately no generic ``update``: display fields are only
    refreshed through ``upsert_from_identity`` and the role only through
    ``update_role``.
    """

    async def upsert_from_identity(
        self,
        identity: ExternalIdentity,
        role_on_insert: UserRole,
    ) -> tuple[User, bool]:
        """Atomically insert or refresh a user keyed on subject id.

        ``role_on_insert`` applies to new rows only; existing rows keep
        their stored role.

        Returns:
            Tuple of (user, created) where created is True if a new row was inserted.
        """
        ...

    async def update_role(self, email: str, role: UserRole) -> User | None:
        """Set the role of the user with ``email``; None if no such user."""
        ...

    async def count_by_role(self, role: UserRole) -> int:
        """Count users holding exactly ``role``."""
        ...


class SubmissionRepository(Protocol):
    """Abstract interface for submission data access (append-only)."""

    async def add(self, submission: NewSubmission) -> Submission:
        """Persist a new submission with a server-assigned id and timestamp."""
        ...

    async def list_by_agent(self, agent_id: str) -> list[Submission]:
        """Submissions owned by ``agent_id``, newest first."""
        ...

    async def list_with_agents(self) -> list[SubmissionWithAgent]:
        """All submissions joined with owner names, newest first."""
        ...

    async def count(self, since: datetime) -> SubmissionCounts:
        """Counts by service type plus the number created at or after ``since``."""
        ...
