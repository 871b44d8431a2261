"""
Authentication and access-control module.

Resolves the caller's trust tier, verifies tokens, and decides note access.

Public API:
- IAuthService, IIdentityResolver, IOwnershipGuard: Interfaces
- Identity models: Anonymous, AuthenticatedIdentity, AdminIdentity
- AccessDecision, CreateDecision, DenyReason, Operation
- Auth exceptions: InvalidTokenError, ExpiredTokenError, etc.
"""

from .interfaces import IAuthService, IIdentityResolver, IOwnershipGuard
from .models import (
    ANONYMOUS,
    AccessDecision,
    AdminIdentity,
    Anonymous,
    AuthenticatedIdentity,
    CreateDecision,
    DenyReason,
    Identity,
    JWTPayload,
    Operation,
    TrustTier,
)
from .exceptions import (
    AuthNotConfiguredError,
    InvalidTokenError,
    ExpiredTokenError,
    MissingTokenError,
)

__all__ = [
    # Interfaces
    "IAuthService",
    "IIdentityResolver",
    "IOwnershipGuard",
    # Models
    "ANONYMOUS",
    "AccessDecision",
    "AdminIdentity",
    "Anonymous",
    "AuthenticatedIdentity",
    "CreateDecision",
    "DenyReason",
    "Identity",
    "JWTPayload",
    "Operation",
    "TrustTier",
    # Exceptions
    "AuthNotConfiguredError",
    "InvalidTokenError",
    "ExpiredTokenError",
    "MissingTokenError",
]
