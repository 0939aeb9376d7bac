"""Provider protocols - external services the application depends on."""

from typing import Protocol

from fieldops.domain.entities import ExternalIdentity


class IdentityVerifier(Protocol):
    """Verifies a bearer token against the identity provider."""

    async def verify(self, token: str) -> ExternalIdentity:
        """Return the verified identity.

        Raises:
            InvalidCredentialError: The provider rejected the token
            ProviderUnavailableError: The provider could not be reached
        """
        ...


class IdentityAdmin(Protocol):
    """Privileged account management at the identity provider."""

    async def create_user(
        self,
        email: str,
        password: str,
        first_name: str = "",
        last_name: str = "",
    ) -> ExternalIdentity:
        """Create a confirmed account and return its identity."""
        ...
