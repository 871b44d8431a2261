"""
User repository for database access.

Encapsulates Supabase queries and row mapping for the `users` table. The
table carries a unique constraint on `subject_id`; that constraint is what
orders concurrent first inserts for the same subject.
"""

from typing import Optional, Any

from postgrest.exceptions import APIError

from shared.repository import BaseRepository, UNIQUE_VIOLATION
from .models import (
    InsertOutcome,
    NewUser,
    ProvisioningConflict,
    User,
    UserInserted,
)

USERS_TABLE = "users"


class UserRepository(BaseRepository[User]):
    """
    Repository for user data access.

    Note: This repository does NOT decide whether a user should exist.
    The directory service owns the find-or-create flow.
    """

    def get_by_subject(self, subject_id: str) -> Optional[User]:
        """
        Get a user by external identity subject.

        Args:
            subject_id: Identity provider subject.

        Returns:
            User, or None if the subject has never been provisioned.
        """
        result = (
            self._db.table(USERS_TABLE)
            .select("*")
            .eq("subject_id", subject_id)
            .limit(1)
            .execute()
        )
        row = self._first(result.data)
        return self._map_to_user(row) if row else None

    def get_by_id(self, user_id: int) -> Optional[User]:
        """Get a user by local ID."""
        result = self._db.table(USERS_TABLE).select("*").eq("id", user_id).limit(1).execute()
        row = self._first(result.data)
        return self._map_to_user(row) if row else None

    def insert(self, new_user: NewUser) -> InsertOutcome:
        """
        Insert a user row.

        A unique violation is reported as ProvisioningConflict. Every other
        database error propagates to the caller.

        Args:
            new_user: Fields for the new row.

        Returns:
            UserInserted with the stored row, or ProvisioningConflict.
        """
        try:
            result = self._db.table(USERS_TABLE).insert(new_user.model_dump()).execute()
        except APIError as e:
            if e.code == UNIQUE_VIOLATION:
                return ProvisioningConflict(subject_id=new_user.subject_id)
            raise
        return UserInserted(user=self._map_to_user(result.data[0]))

    def _map_to_user(self, data: dict[str, Any]) -> User:
        """Map database row to User model."""
        return User(
            id=int(data["id"]),
            subject_id=data["subject_id"],
            email=data["email"],
            first_name=data.get("first_name"),
            last_name=data.get("last_name"),
            created_at=data["created_at"],
            updated_at=data["updated_at"],
        )
