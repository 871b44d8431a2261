"""
Authentication module interfaces.

Other modules should depend on these protocols, not the concrete
implementations. This enables testing with in-memory fakes.
"""

from typing import Optional, Protocol, runtime_checkable

from modules.notes.models import Visibility
from modules.users.models import User

from .models import (
    AccessDecision,
    AuthenticatedIdentity,
    CreateDecision,
    Identity,
    Operation,
)


@runtime_checkable
class IAuthService(Protocol):
    """
    Interface for the trusted identity verifier.
    """

    async def validate_token(self, token: str) -> AuthenticatedIdentity:
        """
        Validate a JWT token and return the verified identity.

        Args:
            token: JWT access token from Supabase Auth

        Returns:
            AuthenticatedIdentity with the subject and profile claims

        Raises:
            AuthenticationError: If token is invalid or expired
        """
        ...


@runtime_checkable
class IIdentityResolver(Protocol):
    """Turns request credential material into exactly one identity."""

    async def resolve(
        self,
        bearer_token: Optional[str] = None,
        api_key: Optional[str] = None,
    ) -> Identity:
        ...


@runtime_checkable
class IOwnershipGuard(Protocol):
    """
    Interface for per-request access decisions on notes.

    For authenticated identities every method may provision the caller's
    local user record (find-or-create) as a side effect.
    """

    async def check(
        self,
        identity: Identity,
        note_id: int,
        operation: Operation,
        *,
        credentials_required: bool = False,
    ) -> AccessDecision:
        """Decide whether `identity` may perform `operation` on a note."""
        ...

    async def authorize_create(
        self,
        identity: Identity,
        visibility: Visibility,
        *,
        credentials_required: bool = False,
    ) -> CreateDecision:
        """Decide whether `identity` may create a note with `visibility`."""
        ...

    async def resolve_user(self, identity: Identity) -> Optional[User]:
        """Return the local user for an authenticated identity, else None."""
        ...
