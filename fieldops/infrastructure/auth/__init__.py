"""Authentication infrastructure - Supabase token verification and role gate."""

from fieldops.infrastructure.auth.context import (
    RequestContext,
    get_bearer_token,
    get_submission_repository,
    get_user_directory,
    get_user_repository,
    require_admin,
    require_authenticated,
    require_manager,
    require_role,
)
from fieldops.infrastructure.auth.supabase import (
    SupabaseAdminClient,
    SupabaseIdentityVerifier,
    get_identity_admin,
    get_identity_verifier,
)

__all__ = [
    "RequestContext",
    "get_bearer_token",
    "get_submission_repository",
    "get_user_directory",
    "get_user_repository",
    "require_admin",
    "require_authenticated",
    "require_manager",
    "require_role",
    "SupabaseAdminClient",
    "SupabaseIdentityVerifier",
    "get_identity_admin",
    "get_identity_verifier",
]
