"""
User directory implementation.

Maps external identity subjects to local user records, provisioning a row
the first time a subject is seen.
"""

import asyncio
import logging
from typing import Optional

from shared.config import Settings, get_settings

from .exceptions import IdentityProviderUnavailableError, UserProvisioningError
from .interfaces import ClaimsFetcher, IUserDirectory, IUserStore
from .models import IdentityClaims, NewUser, ProvisioningConflict, User

logger = logging.getLogger(__name__)


class UserDirectory(IUserDirectory):
    """
    Find-or-create over the users table.

    Flow for an unseen subject:
    1. Read by subject (fast path, no write).
    2. Fetch claims from the identity provider, bounded by a timeout.
    3. Re-read by subject immediately before inserting.
    4. Insert; a ProvisioningConflict means another request committed the
       row first, so that row is read back and returned.

    The unique constraint on subject_id is the single arbiter between
    concurrent first requests, so at most one row is ever inserted.
    """

    def __init__(
        self,
        store: IUserStore,
        settings: Optional[Settings] = None,
    ):
        self._store = store
        self._settings = settings or get_settings()

    async def find_or_create(
        self,
        subject_id: str,
        claims_fetcher: ClaimsFetcher,
    ) -> User:
        """Return the local user for a subject, creating it on first sight."""
        user = self._store.get_by_subject(subject_id)
        if user is not None:
            return user

        return await self._provision(subject_id, claims_fetcher)

    async def _provision(self, subject_id: str, claims_fetcher: ClaimsFetcher) -> User:
        claims = await self._fetch_claims(subject_id, claims_fetcher)

        existing = self._store.get_by_subject(subject_id)
        if existing is not None:
            return existing

        outcome = self._store.insert(NewUser.from_claims(subject_id, claims))

        if isinstance(outcome, ProvisioningConflict):
            winner = self._store.get_by_subject(subject_id)
            if winner is None:
                raise UserProvisioningError(subject_id)
            logger.info("Recovered provisioning conflict; using user %s", winner.id)
            return winner

        logger.info("Provisioned new user %s", outcome.user.id)
        return outcome.user

    async def _fetch_claims(
        self,
        subject_id: str,
        claims_fetcher: ClaimsFetcher,
    ) -> IdentityClaims:
        timeout = self._settings.claims_fetch_timeout
        try:
            return await asyncio.wait_for(claims_fetcher(subject_id), timeout=timeout)
        except asyncio.TimeoutError as e:
            logger.warning("Identity provider timed out after %ss", timeout)
            raise IdentityProviderUnavailableError(subject_id, reason="timeout") from e
