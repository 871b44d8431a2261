"""
Identity middleware.

Extracts bearer tokens and the admin API key from the request and resolves
them to a single identity. Which credentials an endpoint accepts is chosen
per route group.
"""

from typing import Callable, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import APIKeyHeader, HTTPAuthorizationCredentials, HTTPBearer

from modules.auth.interfaces import IIdentityResolver
from modules.auth.models import Identity
from shared.exceptions import AuthenticationError

from ..dependencies import get_identity_resolver

# Credential extractors; neither rejects a request on its own
bearer_scheme = HTTPBearer(auto_error=False)
api_key_scheme = APIKeyHeader(name="x-api-key", auto_error=False)


class AuthError(HTTPException):
    """Authentication error with consistent format."""
    def __init__(self, detail: str):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


def identity_dependency(
    *,
    accept_user: bool = True,
    accept_admin: bool = False,
) -> Callable:
    """
    Build a dependency that resolves the caller's identity.

    Credentials for a tier the endpoint does not accept are ignored, so the
    caller falls through to the next tier (ultimately Anonymous).

    Usage:
        get_identity = identity_dependency(accept_user=False, accept_admin=True)

        @router.get("/{note_id}")
        async def read(identity: Identity = Depends(get_identity)):
            ...
    """

    async def get_identity(
        credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
        api_key: Optional[str] = Depends(api_key_scheme),
        resolver: IIdentityResolver = Depends(get_identity_resolver),
    ) -> Identity:
        bearer_token = credentials.credentials if credentials and accept_user else None
        try:
            return await resolver.resolve(
                bearer_token=bearer_token,
                api_key=api_key if accept_admin else None,
            )
        except AuthenticationError as e:
            raise AuthError(e.message)

    return get_identity


# Anonymous-note path: user tokens ignored, admin accepted
get_public_identity = identity_dependency(accept_user=False, accept_admin=True)

# Listings and creation scoped to the calling user
get_user_identity = identity_dependency(accept_user=True, accept_admin=False)

# Single-note access on the private path
get_note_identity = identity_dependency(accept_user=True, accept_admin=True)

# Admin path
get_admin_identity = identity_dependency(accept_user=False, accept_admin=True)
