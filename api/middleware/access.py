"""
Access-control dependencies.

Run the ownership guard before a handler and turn a DENY decision into the
matching HTTP error. Handlers receive the note the guard already loaded.
"""

from typing import Callable

from fastapi import Depends, HTTPException

from modules.auth.interfaces import IOwnershipGuard
from modules.auth.models import AdminIdentity, DenyReason, Identity, Operation
from modules.notes.models import Note
from modules.users.models import User

from ..dependencies import get_ownership_guard
from .auth import AuthError, get_admin_identity, get_user_identity


def access_denied(reason: DenyReason) -> HTTPException:
    """HTTP error for a denied decision."""
    if reason is DenyReason.UNAUTHENTICATED:
        return AuthError(reason.message)
    return HTTPException(status_code=reason.status_code, detail=reason.message)


def require_access(
    operation: Operation,
    get_identity: Callable,
    *,
    credentials_required: bool = False,
) -> Callable:
    """
    Build a dependency that authorizes `operation` on the path's note.

    Usage:
        @router.delete("/{note_id}")
        async def delete(note: Note = Depends(require_access(Operation.DELETE, get_identity))):
            ...
    """

    async def authorize(
        note_id: int,
        identity: Identity = Depends(get_identity),
        guard: IOwnershipGuard = Depends(get_ownership_guard),
    ) -> Note:
        decision = await guard.check(
            identity,
            note_id,
            operation,
            credentials_required=credentials_required,
        )
        if not decision.allowed:
            raise access_denied(decision.reason)
        return decision.resource

    return authorize


async def get_current_user(
    identity: Identity = Depends(get_user_identity),
    guard: IOwnershipGuard = Depends(get_ownership_guard),
) -> User:
    """
    Dependency that requires an authenticated user.

    Provisions the local user record on the caller's first request.
    """
    user = await guard.resolve_user(identity)
    if user is None:
        raise access_denied(DenyReason.UNAUTHENTICATED)
    return user


async def require_admin(
    identity: Identity = Depends(get_admin_identity),
) -> AdminIdentity:
    """Dependency that requires the admin API key."""
    if not isinstance(identity, AdminIdentity):
        raise AuthError(DenyReason.UNAUTHENTICATED.message)
    return identity
