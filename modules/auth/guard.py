"""
Ownership guard.

The per-request decision engine: given an identity and a target note it
returns ALLOW (with the loaded note) or DENY (with a reason). It holds no
state between requests.
"""

import logging
from typing import Optional

from modules.notes.interfaces import IResourceStore
from modules.notes.models import Visibility
from modules.users.claims import TokenClaimsFetcher
from modules.users.interfaces import ClaimsFetcher, IUserDirectory
from modules.users.models import User

from .interfaces import IOwnershipGuard
from .models import (
    AccessDecision,
    Anonymous,
    AuthenticatedIdentity,
    CreateDecision,
    DenyReason,
    Identity,
    Operation,
)
from .policy import evaluate, evaluate_create

logger = logging.getLogger(__name__)


class OwnershipGuard(IOwnershipGuard):
    """
    Access decisions for notes.

    check() for an authenticated identity is potentially mutating: the
    caller's local user is found or created (lazy provisioning) inside the
    check, after the note has been loaded, so a first-time user's first
    request both provisions them and completes in one round trip. Admin and
    anonymous checks never touch the user table.

    Infrastructure failures (store unreachable, identity provider down)
    propagate as exceptions; denials are returned, not raised.
    """

    def __init__(
        self,
        store: IResourceStore,
        directory: IUserDirectory,
        claims_fetcher: Optional[ClaimsFetcher] = None,
    ):
        self._store = store
        self._directory = directory
        self._claims_fetcher = claims_fetcher

    async def check(
        self,
        identity: Identity,
        note_id: int,
        operation: Operation,
        *,
        credentials_required: bool = False,
    ) -> AccessDecision:
        """
        Decide whether `identity` may perform `operation` on a note.

        Args:
            identity: Resolved caller identity.
            note_id: Target note ID.
            operation: READ, UPDATE or DELETE.
            credentials_required: Deny anonymous callers with UNAUTHENTICATED
                before touching the store.

        Returns:
            AccessDecision; on ALLOW `resource` holds the loaded note.
        """
        if operation is Operation.CREATE:
            raise ValueError("Use authorize_create() for new notes")

        if credentials_required and isinstance(identity, Anonymous):
            return AccessDecision.deny(DenyReason.UNAUTHENTICATED)

        note = self._store.load_by_id(note_id)
        if note is None:
            return AccessDecision.deny(DenyReason.NOT_FOUND)

        caller = await self.resolve_user(identity)
        outcome = evaluate(
            identity.tier,
            note,
            operation,
            caller.id if caller else None,
        )

        if not outcome.allowed:
            logger.debug(
                "Denied %s on note %s for %s: %s",
                operation.value, note_id, identity.tier.value, outcome.reason.value,
            )
            return AccessDecision.deny(outcome.reason)

        return AccessDecision.allow(note)

    async def authorize_create(
        self,
        identity: Identity,
        visibility: Visibility,
        *,
        credentials_required: bool = False,
    ) -> CreateDecision:
        """
        Decide whether `identity` may create a note with `visibility`.

        Authenticated callers are provisioned and become the note owner.
        """
        if credentials_required and isinstance(identity, Anonymous):
            return CreateDecision.deny(DenyReason.UNAUTHENTICATED)

        outcome = evaluate_create(identity.tier, visibility)
        if not outcome.allowed:
            return CreateDecision.deny(outcome.reason)

        owner = await self.resolve_user(identity)
        return CreateDecision.allow(owner)

    async def resolve_user(self, identity: Identity) -> Optional[User]:
        """Find or create the local user for an authenticated identity."""
        if not isinstance(identity, AuthenticatedIdentity):
            return None

        fetcher = self._claims_fetcher or TokenClaimsFetcher(identity.claims)
        return await self._directory.find_or_create(identity.subject_id, fetcher)
