"""Authorization gate for request handling.

Every protected route depends on ``require_authenticated`` (or one of the
role-gated variants). The gate:

1. Extracts the bearer token; a missing or malformed header is rejected
   before any external call.
2. Verifies the token with the identity provider.
3. Resolves the caller to a local user through the user directory.
4. Optionally checks the caller's stored role against a minimum.
"""

from dataclasses import dataclass, field

from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from fieldops.application.services.user_directory import UserDirectory
from fieldops.config import Settings, get_settings
from fieldops.domain.entities import ExternalIdentity, User, UserRole
from fieldops.domain.errors import ForbiddenError, MissingCredentialError
from fieldops.domain.protocols import IdentityVerifier, SubmissionRepository, UserRepository
from fieldops.infrastructure.auth.supabase import get_identity_verifier
from fieldops.infrastructure.database.connection import get_db
from fieldops.infrastructure.repositories import SubmissionRepositoryImpl, UserRepositoryImpl
from fieldops.infrastructure.telemetry.logging import get_logger, set_request_context

logger = get_logger(__name__)

BEARER_SCHEME = "bearer"


@dataclass
class RequestContext:
    """Authenticated caller available in request handlers."""

    user: User
    identity: ExternalIdentity = field(repr=False)
    request_id: str | None = None

    @property
    def user_id(self) -> str:
        return self.user.id

    @property
    def role(self) -> UserRole:
        return self.user.role


def get_bearer_token(
    authorization: str | None = Header(default=None, alias="Authorization"),
) -> str:
    """Extract the token from ``Authorization: Bearer <token>``.

    Raises:
        MissingCredentialError: Header absent, wrong scheme, or empty token
    """
    if not authorization:
        raise MissingCredentialError()

    scheme, _, token = authorization.strip().partition(" ")
    token = token.strip()
    if scheme.lower() != BEARER_SCHEME or not token:
        raise MissingCredentialError(details={"reason": "malformed_authorization_header"})
    return token


# --- Repositories and services bound to the request session ---


def get_user_repository(db: AsyncSession = Depends(get_db)) -> UserRepository:
    return UserRepositoryImpl(db)


def get_submission_repository(db: AsyncSession = Depends(get_db)) -> SubmissionRepository:
    return SubmissionRepositoryImpl(db)


def get_user_directory(
    repo: UserRepository = Depends(get_user_repository),
    settings: Settings = Depends(get_settings),
) -> UserDirectory:
    return UserDirectory(repo, operation_timeout=settings.db_operation_timeout_seconds)


# --- Gate ---


async def require_authenticated(
    request: Request,
    token: str = Depends(get_bearer_token),
    verifier: IdentityVerifier = Depends(get_identity_verifier),
    directory: UserDirectory = Depends(get_user_directory),
) -> RequestContext:
    """FastAPI dependency resolving the bearer token to a local user.

    Raises:
        MissingCredentialError: No usable Authorization header (401)
        InvalidCredentialError: Token rejected (401)
        ProviderUnavailableError: Identity provider unreachable (503)
        DirectoryUnavailableError: User directory unreachable (503)
    """
    identity = await verifier.verify(token)
    user = await directory.resolve_user(identity)

    set_request_context(user_id=user.id)
    return RequestContext(
        user=user,
        identity=identity,
        request_id=getattr(request.state, "request_id", None),
    )


def require_role(minimum: UserRole):
    """Build a dependency that admits callers at or above ``minimum``."""

    async def _require_role(
        context: RequestContext = Depends(require_authenticated),
    ) -> RequestContext:
        if not context.role.satisfies(minimum):
            logger.warning(
                "Role check failed",
                extra={
                    "subject": context.user_id,
                    "role": context.role.value,
                    "required_role": minimum.value,
                },
            )
            raise ForbiddenError(
                message=f"Requires {minimum.value} role",
                details={"required_role": minimum.value},
                required_role=minimum.value,
            )
        return context

    return _require_role


require_manager = require_role(UserRole.MANAGER)
require_admin = require_role(UserRole.ADMIN)
