"""Current user endpoints."""

from fastapi import APIRouter, Depends

from fieldops.domain.entities import User
from fieldops.infrastructure.auth import RequestContext, require_authenticated
from fieldops.presentation.http.schemas import CamelModel

router = APIRouter(prefix="/user", tags=["User"])


class UserProfileResponse(CamelModel):
    """The authenticated caller's local record."""

    id: str
    email: str
    first_name: str
    last_name: str
    profile_image_url: str | None = None
    role: str


def _user_to_response(user: User) -> UserProfileResponse:
    return UserProfileResponse(
        id=user.id,
        email=user.email,
        first_name=user.first_name,
        last_name=user.last_name,
        profile_image_url=user.profile_image_url,
        role=user.role.value,
    )


@router.get("/profile", response_model=UserProfileResponse)
async def get_profile(
    context: RequestContext = Depends(require_authenticated),
) -> UserProfileResponse:
    """Return the caller's profile."""
    return _user_to_response(context.user)


@router.get("", response_model=UserProfileResponse)
async def get_current_user(
    context: RequestContext = Depends(require_authenticated),
) -> UserProfileResponse:
    """Alias of /user/profile, kept for older clients."""
    return _user_to_response(context.user)
