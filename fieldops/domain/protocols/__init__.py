"""Domain protocols - abstract interfaces for infrastructure implementations."""

from fieldops.domain.protocols.providers import IdentityAdmin, IdentityVerifier
from fieldops.domain.protocols.repositories import SubmissionRepository, UserRepository

__all__ = [
    # Repositories
    "UserRepository",
    "SubmissionRepository",
    # Providers
    "IdentityVerifier",
    "IdentityAdmin",
]
