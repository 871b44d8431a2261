"""
Users module.

Maps external identity subjects to local user records (the User Directory).

Public API:
- IUserDirectory: Interface for find-or-create
- ClaimsFetcher: Interface for identity provider profile lookups
- User, IdentityClaims: Data models
- Users exceptions: IdentityProviderUnavailableError, UserProvisioningError
"""

from .interfaces import ClaimsFetcher, IUserDirectory, IUserStore
from .models import (
    IdentityClaims,
    InsertOutcome,
    NewUser,
    ProvisioningConflict,
    User,
    UserInserted,
)
from .exceptions import IdentityProviderUnavailableError, UserProvisioningError

__all__ = [
    # Interfaces
    "ClaimsFetcher",
    "IUserDirectory",
    "IUserStore",
    # Models
    "IdentityClaims",
    "InsertOutcome",
    "NewUser",
    "ProvisioningConflict",
    "User",
    "UserInserted",
    # Exceptions
    "IdentityProviderUnavailableError",
    "UserProvisioningError",
]
