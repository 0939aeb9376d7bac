"""Admin endpoints: account creation and role management."""

from fastapi import APIRouter, Depends

from fieldops.application.services.user_directory import UserDirectory
from fieldops.domain.entities import DEFAULT_ROLE, ExternalIdentity, UserRole
from fieldops.domain.errors import ValidationError
from fieldops.domain.protocols import IdentityAdmin
from fieldops.infrastructure.auth import (
    RequestContext,
    get_identity_admin,
    get_user_directory,
    require_admin,
)
from fieldops.infrastructure.telemetry import get_logger
from fieldops.presentation.http.schemas import CamelModel

logger = get_logger(__name__)
router = APIRouter(prefix="/admin", tags=["Admin"])

INVALID_ROLE_MESSAGE = "Invalid role. Must be agent, manager, or admin"


# Request/Response models
class UpdateRoleRequest(CamelModel):
    email: str | None = None
    role: str | None = None


class CreateUserRequest(CamelModel):
    email: str | None = None
    password: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    role: str | None = None


class RoleUserSummary(CamelModel):
    email: str
    role: str


class CreatedUserSummary(RoleUserSummary):
    id: str


class UpdateRoleResponse(CamelModel):
    message: str
    user: RoleUserSummary


class CreateUserResponse(CamelModel):
    message: str
    user: CreatedUserSummary


def _parse_role(value: str | None, errors: dict[str, str]) -> UserRole | None:
    try:
        return UserRole(value)
    except ValueError:
        errors["role"] = INVALID_ROLE_MESSAGE
        return None


# Endpoints
@router.post("/update-role", response_model=UpdateRoleResponse)
async def update_role(
    request: UpdateRoleRequest,
    context: RequestContext = Depends(require_admin),
    directory: UserDirectory = Depends(get_user_directory),
) -> UpdateRoleResponse:
    """Change a user's role. This is the only way a stored role changes."""
    errors: dict[str, str] = {}
    email = (request.email or "").strip()
    if not email:
        errors["email"] = "Email is required"
    if not request.role:
        errors["role"] = "Role is required"
    role = _parse_role(request.role, errors) if request.role else None
    if errors:
        raise ValidationError.for_fields(errors)

    user = await directory.update_user_role(email, role)
    logger.info(
        "Role changed by admin",
        extra={"admin_id": context.user_id, "target": user.id, "role": user.role.value},
    )
    return UpdateRoleResponse(
        message="User role updated successfully",
        user=RoleUserSummary(email=user.email, role=user.role.value),
    )


@router.post("/create-user", response_model=CreateUserResponse)
async def create_user(
    request: CreateUserRequest,
    context: RequestContext = Depends(require_admin),
    identity_admin: IdentityAdmin = Depends(get_identity_admin),
    directory: UserDirectory = Depends(get_user_directory),
) -> CreateUserResponse:
    """Create a confirmed account at the identity provider and its local record."""
    errors: dict[str, str] = {}
    email = (request.email or "").strip()
    if not email:
        errors["email"] = "Email is required"
    if not request.password:
        errors["password"] = "Password is required"
    role = _parse_role(request.role, errors) if request.role else DEFAULT_ROLE
    if errors:
        raise ValidationError.for_fields(errors)

    first_name = (request.first_name or "").strip()
    last_name = (request.last_name or "").strip()
    created = await identity_admin.create_user(
        email=email,
        password=request.password,
        first_name=first_name,
        last_name=last_name,
    )

    # Names from the request win over whatever the provider echoed back
    identity = ExternalIdentity(
        subject=created.subject,
        email=created.email or email,
        first_name=first_name or created.first_name,
        last_name=last_name or created.last_name,
        avatar_url=created.avatar_url,
    )
    user = await directory.provision_user(identity, role)

    logger.info(
        "User created by admin",
        extra={"admin_id": context.user_id, "target": user.id, "role": user.role.value},
    )
    return CreateUserResponse(
        message="User created successfully",
        user=CreatedUserSummary(id=user.id, email=user.email, role=user.role.value),
    )
