"""
Claims fetchers used when a subject is provisioned for the first time.

SupabaseClaimsFetcher asks the identity provider's admin API for the
subject's profile. TokenClaimsFetcher returns the claims already carried by
the verified token, for deployments configured with CLAIMS_SOURCE=token.
"""

import asyncio
import logging
from typing import Any

import httpx
from supabase import AuthError, Client

from .exceptions import IdentityProviderUnavailableError
from .models import IdentityClaims

logger = logging.getLogger(__name__)


class SupabaseClaimsFetcher:
    """
    Fetch profile claims through the Supabase Auth admin API.

    Requires a service-role client. Provider failures are reported as
    IdentityProviderUnavailableError so the caller never proceeds with a
    partially resolved identity.
    """

    def __init__(self, db: Client):
        self._db = db

    async def __call__(self, subject_id: str) -> IdentityClaims:
        try:
            response = await asyncio.to_thread(
                self._db.auth.admin.get_user_by_id, subject_id
            )
        except (AuthError, httpx.HTTPError) as e:
            logger.warning("Identity provider lookup failed: %s", type(e).__name__)
            raise IdentityProviderUnavailableError(subject_id, reason=str(e)) from e

        profile = getattr(response, "user", None)
        if profile is None:
            raise IdentityProviderUnavailableError(subject_id, reason="no profile returned")

        return self._map_to_claims(profile.email, profile.user_metadata or {})

    @staticmethod
    def _map_to_claims(email: str | None, metadata: dict[str, Any]) -> IdentityClaims:
        return IdentityClaims(
            email=email or metadata.get("email"),
            first_name=metadata.get("first_name") or metadata.get("given_name"),
            last_name=metadata.get("last_name") or metadata.get("family_name"),
        )


class TokenClaimsFetcher:
    """Serve the claims already present on the verified token."""

    def __init__(self, claims: IdentityClaims):
        self._claims = claims

    async def __call__(self, subject_id: str) -> IdentityClaims:
        return self._claims
