"""Repository implementations."""

from fieldops.infrastructure.repositories.base import BaseRepository
from fieldops.infrastructure.repositories.submission_repository import (
    SubmissionRepositoryImpl,
    build_list_with_agents_query,
    build_submission_counts_query,
)
from fieldops.infrastructure.repositories.user_repository import (
    UserRepositoryImpl,
    build_identity_upsert,
    build_role_update,
)

__all__ = [
    "BaseRepository",
    "SubmissionRepositoryImpl",
    "UserRepositoryImpl",
    "build_identity_upsert",
    "build_role_update",
    "build_list_with_agents_query",
    "build_submission_counts_query",
]
