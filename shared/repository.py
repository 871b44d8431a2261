"""
Base repository class for database access.

Provides a common abstraction layer for all repositories, encapsulating
Supabase client access and providing shared utilities for data operations.
"""

from typing import Any, TypeVar, Generic
from supabase import Client


T = TypeVar("T")

# Postgres SQLSTATE reported by PostgREST for unique constraint violations
UNIQUE_VIOLATION = "23505"


class BaseRepository(Generic[T]):
    """
    Base class for all repositories.

    Provides common functionality for database operations:
    - Supabase client access via self._db
    - Generic type parameter for model type hints

    Subclasses should implement domain-specific data access methods
    and handle dict-to-Pydantic model mapping internally.

    Example:
        class NoteRepository(BaseRepository[Note]):
            def load_by_id(self, note_id: int) -> Optional[Note]:
                result = self._db.table("notes").select("*").eq("id", note_id).execute()
                if not result.data:
                    return None
                return self._map_to_note(result.data[0])
    """

    def __init__(self, db: Client) -> None:
        """
        Initialize the repository with a Supabase client.

        Args:
            db: Supabase client instance for database operations.
        """
        self._db = db

    @staticmethod
    def _first(rows: list[dict[str, Any]]) -> dict[str, Any] | None:
        """Return the first row of a result set, or None when empty."""
        return rows[0] if rows else None
