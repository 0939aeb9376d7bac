"""Supabase Auth bearer token verification and admin user management."""

import asyncio
import time
from functools import lru_cache
from typing import Any

import httpx
import jwt

from fieldops.config import Settings, get_settings
from fieldops.domain.entities import ExternalIdentity
from fieldops.domain.errors import (
    InvalidCredentialError,
    ProviderUnavailableError,
    ValidationError,
)
from fieldops.infrastructure.telemetry.logging import get_logger
from fieldops.infrastructure.telemetry.metrics import record_identity_verification

logger = get_logger(__name__)

PROVIDER_NAME = "supabase"


def _is_transient_status(status_code: int) -> bool:
    return status_code >= 500 or status_code == 429


def _split_name(full_name: str | None) -> tuple[str | None, str | None]:
    if not full_name or not full_name.strip():
        return None, None
    first, _, rest = full_name.strip().partition(" ")
    return first, rest.strip() or None


def identity_from_user_payload(payload: dict[str, Any]) -> ExternalIdentity:
    """Map a provider user object onto an ExternalIdentity.

    Raises:
        InvalidCredentialError: If the payload lacks a subject or email
    """
    subject = str(payload.get("id") or "")
    email = str(payload.get("email") or "")
    if not subject or not email:
        raise InvalidCredentialError(
            message="Identity provider returned an incomplete user",
            details={"has_subject": bool(subject), "has_email": bool(email)},
        )

    metadata = payload.get("user_metadata") or {}
    name_first, name_rest = _split_name(metadata.get("name") or metadata.get("full_name"))

    return ExternalIdentity(
        subject=subject,
        email=email,
        first_name=metadata.get("first_name") or name_first,
        last_name=metadata.get("last_name") or name_rest,
        avatar_url=metadata.get("avatar_url") or metadata.get("picture"),
        raw_claims=payload,
    )


class SupabaseIdentityVerifier:
    """Verifies access tokens by asking the identity provider who they belong to.

    Every call goes to the provider; nothing is cached across requests.
    """

    def __init__(
        self,
        settings: Settings,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = settings.identity_base_url
        self.api_key = settings.supabase_anon_key
        self.timeout = settings.identity_timeout_seconds
        self.max_retries = max(settings.identity_max_retries, 0)
        self.backoff_seconds = settings.identity_retry_backoff_seconds
        self._transport = transport

    @property
    def user_endpoint(self) -> str:
        return f"{self.base_url}/auth/v1/user"

    def check_token_shape(self, token: str) -> dict[str, Any]:
        """Decode the token without verifying the signature.

        Rejects garbage and already-expired tokens before any network call.
        The provider remains the authority on validity.

        Raises:
            InvalidCredentialError: If the token is not a decodable, unexpired JWT
        """
        try:
            return jwt.decode(
                token,
                options={
                    "verify_signature": False,
                    "verify_exp": True,
                    "verify_aud": False,
                },
            )
        except jwt.ExpiredSignatureError as e:
            logger.info("Token expired", extra={"error": str(e)})
            raise InvalidCredentialError(
                message="Token has expired",
                details={"error": str(e)},
            ) from e
        except jwt.InvalidTokenError as e:
            logger.info("Token decode error", extra={"error": str(e)})
            raise InvalidCredentialError(
                message="Invalid token format",
                details={"error": str(e)},
            ) from e

    async def verify(self, token: str) -> ExternalIdentity:
        """Verify a bearer token and return the identity behind it.

        Args:
            token: The raw access token (without the ``Bearer`` prefix)

        Returns:
            Verified identity

        Raises:
            InvalidCredentialError: Token malformed, expired or rejected by the provider
            ProviderUnavailableError: Provider unreachable after bounded retries
        """
        try:
            self.check_token_shape(token)
        except InvalidCredentialError:
            record_identity_verification("rejected")
            raise

        started = time.perf_counter()
        try:
            payload = await self._fetch_user(token)
            identity = identity_from_user_payload(payload)
        except InvalidCredentialError:
            record_identity_verification("rejected", time.perf_counter() - started)
            raise
        except ProviderUnavailableError:
            record_identity_verification("unavailable", time.perf_counter() - started)
            raise

        record_identity_verification("verified", time.perf_counter() - started)
        logger.debug("Token verified", extra={"subject": identity.subject})
        return identity

    async def _fetch_user(self, token: str) -> dict[str, Any]:
        """GET /auth/v1/user within one deadline covering every attempt and backoff."""
        try:
            async with asyncio.timeout(self.timeout):
                return await self._fetch_user_with_retries(token)
        except TimeoutError as e:
            logger.error(
                "Identity provider did not answer in time",
                extra={"timeout_seconds": self.timeout},
            )
            raise ProviderUnavailableError(
                message="Identity provider timed out",
                details={"timeout_seconds": self.timeout},
                provider=PROVIDER_NAME,
                operation="get_user",
            ) from e

    async def _fetch_user_with_retries(self, token: str) -> dict[str, Any]:
        """Retry transient failures only."""
        headers = {
            "apikey": self.api_key,
            "Authorization": f"Bearer {token}",
        }
        attempts = self.max_retries + 1
        last_error = ""

        async with httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout),
            transport=self._transport,
        ) as client:
            for attempt in range(attempts):
                if attempt:
                    await asyncio.sleep(self.backoff_seconds * (2 ** (attempt - 1)))
                try:
                    response = await client.get(self.user_endpoint, headers=headers)
                except httpx.TransportError as e:
                    last_error = f"{type(e).__name__}: {e}"
                    logger.warning(
                        "Identity provider request failed",
                        extra={"attempt": attempt + 1, "error": last_error},
                    )
                    continue

                if _is_transient_status(response.status_code):
                    last_error = f"HTTP {response.status_code}"
                    logger.warning(
                        "Identity provider returned a transient error",
                        extra={"attempt": attempt + 1, "status_code": response.status_code},
                    )
                    continue

                if response.status_code != 200:
                    logger.info(
                        "Identity provider rejected token",
                        extra={"status_code": response.status_code},
                    )
                    raise InvalidCredentialError(
                        message="Invalid token",
                        details={"status_code": response.status_code},
                    )

                try:
                    return response.json()
                except ValueError as e:
                    raise ProviderUnavailableError(
                        message="Identity provider returned an unreadable response",
                        details={"error": str(e)},
                        provider=PROVIDER_NAME,
                        operation="get_user",
                    ) from e

        logger.error(
            "Identity provider unavailable",
            extra={"attempts": attempts, "error": last_error},
        )
        raise ProviderUnavailableError(
            details={"attempts": attempts, "error": last_error},
            provider=PROVIDER_NAME,
            operation="get_user",
        )


class SupabaseAdminClient:
    """Privileged account management using the service-role key."""

    def __init__(
        self,
        settings: Settings,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = settings.identity_base_url
        self.service_key = settings.supabase_service_role_key
        self.timeout = settings.identity_timeout_seconds
        self._transport = transport

    async def create_user(
        self,
        email: str,
        password: str,
        first_name: str = "",
        last_name: str = "",
    ) -> ExternalIdentity:
        """Create a confirmed account at the identity provider.

        Raises:
            ValidationError: Provider refused the account (e.g. duplicate email, weak password)
            ProviderUnavailableError: Provider unreachable or failing
        """
        body = {
            "email": email,
            "password": password,
            "email_confirm": True,
            "user_metadata": {
                "first_name": first_name,
                "last_name": last_name,
                "name": f"{first_name} {last_name}".strip(),
            },
        }
        headers = {
            "apikey": self.service_key,
            "Authorization": f"Bearer {self.service_key}",
        }

        try:
            async with httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout),
                transport=self._transport,
            ) as client:
                response = await client.post(
                    f"{self.base_url}/auth/v1/admin/users",
                    json=body,
                    headers=headers,
                )
        except httpx.TransportError as e:
            logger.error("Identity admin request failed", extra={"error": str(e)})
            raise ProviderUnavailableError(
                details={"error": str(e)},
                provider=PROVIDER_NAME,
                operation="create_user",
            ) from e

        if _is_transient_status(response.status_code):
            raise ProviderUnavailableError(
                details={"status_code": response.status_code},
                provider=PROVIDER_NAME,
                operation="create_user",
            )

        if response.status_code >= 400:
            provider_message = _error_message(response)
            logger.warning(
                "Identity provider refused account creation",
                extra={"status_code": response.status_code, "error": provider_message},
            )
            raise ValidationError(
                message=provider_message,
                details={"status_code": response.status_code},
            )

        payload = response.json()
        # Some deployments wrap the object as {"user": {...}}
        user_payload = payload.get("user", payload) if isinstance(payload, dict) else {}
        identity = identity_from_user_payload(user_payload)
        logger.info("Identity provider account created", extra={"subject": identity.subject})
        return identity


def _error_message(response: httpx.Response) -> str:
    try:
        data = response.json()
    except ValueError:
        return response.text or f"HTTP {response.status_code}"
    if isinstance(data, dict):
        return str(
            data.get("msg")
            or data.get("message")
            or data.get("error_description")
            or data.get("error")
            or f"HTTP {response.status_code}"
        )
    return f"HTTP {response.status_code}"


@lru_cache
def get_identity_verifier() -> SupabaseIdentityVerifier:
    """Get cached identity verifier instance."""
    return SupabaseIdentityVerifier(get_settings())


@lru_cache
def get_identity_admin() -> SupabaseAdminClient:
    """Get cached identity admin client."""
    return SupabaseAdminClient(get_settings())
