"""SQLAlchemy database models."""

from fieldops.infrastructure.database.models.base import Base, TimestampMixin
from fieldops.infrastructure.database.models.submission import SubmissionModel
from fieldops.infrastructure.database.models.user import UserModel

__all__ = [
    "Base",
    "TimestampMixin",
    "UserModel",
    "SubmissionModel",
]
