"""
Users module interfaces.

Other modules should depend on IUserDirectory, not the concrete
implementation. The directory itself depends on IUserStore so the
provisioning race can be exercised without a database.
"""

from typing import Optional, Protocol, runtime_checkable

from .models import IdentityClaims, InsertOutcome, NewUser, User


@runtime_checkable
class ClaimsFetcher(Protocol):
    """Fetches profile claims for a subject from the identity provider."""

    async def __call__(self, subject_id: str) -> IdentityClaims:
        """
        Raises:
            IdentityProviderUnavailableError: If the provider cannot answer
        """
        ...


@runtime_checkable
class IUserStore(Protocol):
    """Persistent user table operations used by the directory."""

    def get_by_subject(self, subject_id: str) -> Optional[User]:
        """Return the user for a subject, or None."""
        ...

    def get_by_id(self, user_id: int) -> Optional[User]:
        """Return the user with a local ID, or None."""
        ...

    def insert(self, new_user: NewUser) -> InsertOutcome:
        """
        Insert a new user row.

        Returns:
            UserInserted on success, ProvisioningConflict when the unique
            constraint on subject_id rejects the row.
        """
        ...


@runtime_checkable
class IUserDirectory(Protocol):
    """
    Interface for mapping external identity subjects to local users.
    """

    async def find_or_create(
        self,
        subject_id: str,
        claims_fetcher: ClaimsFetcher,
    ) -> User:
        """
        Return the local user for a subject, creating it on first sight.

        Safe under concurrent first calls for the same subject: every call
        returns the same row and at most one row is ever inserted.

        Raises:
            IdentityProviderUnavailableError: If claims for a new subject
                cannot be fetched
        """
        ...
