"""User entity."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum


class UserRole(str, Enum):
    """Application role, ordered agent < manager < admin."""

    AGENT = "agent"
    MANAGER = "manager"
    ADMIN = "admin"

    @property
    def rank(self) -> int:
        return _ROLE_RANK[self]

    def satisfies(self, required: "UserRole") -> bool:
        """True when this role is at or above ``required``."""
        return self.rank >= required.rank


_ROLE_RANK = {
    UserRole.AGENT: 1,
    UserRole.MANAGER: 2,
    UserRole.ADMIN: 3,
}

DEFAULT_ROLE = UserRole.AGENT


@dataclass
class User:
    """A local user record, keyed by the identity provider subject id."""

    id: str  # identity provider subject id
    email: str
    first_name: str = ""
    last_name: str = ""
    profile_image_url: str | None = None
    role: UserRole = DEFAULT_ROLE
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("User id is required")
        if not self.email:
            raise ValueError("User email is required")
        self.role = UserRole(self.role)

    @property
    def display_name(self) -> str:
        return display_name(self.first_name, self.last_name)

    def has_role(self, required: UserRole) -> bool:
        return self.role.satisfies(required)


def display_name(first_name: str | None, last_name: str | None) -> str:
    """Join name parts, skipping empty ones."""
    parts = [p.strip() for p in (first_name, last_name) if p and p.strip()]
    return " ".join(parts)
