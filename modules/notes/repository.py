"""
Note repository for database access.

Encapsulates Supabase queries and row mapping for the `notes` table.
"""

from datetime import datetime, timezone
from typing import Optional, Any

from shared.repository import BaseRepository
from .models import Note, NoteAuthor, Visibility

NOTES_TABLE = "notes"

# Left join on notes.owner_id; ownerless notes come back with user = null
WITH_AUTHOR = "*, user:users(email, first_name, last_name)"


class NoteRepository(BaseRepository[Note]):
    """
    Repository for note data access.

    Note: This repository does NOT perform authorization checks.
    The ownership guard decides before any of these methods run.
    """

    def load_by_id(self, note_id: int) -> Optional[Note]:
        """
        Get a note by ID.

        Args:
            note_id: The note ID.

        Returns:
            Note, or None if not found.
        """
        result = self._db.table(NOTES_TABLE).select("*").eq("id", note_id).limit(1).execute()
        row = self._first(result.data)
        return self._map_to_note(row) if row else None

    def list_public(self) -> list[Note]:
        """List public notes with author profiles, most recent first."""
        result = (
            self._db.table(NOTES_TABLE)
            .select(WITH_AUTHOR)
            .eq("visibility", Visibility.PUBLIC.value)
            .order("created_at", desc=True)
            .execute()
        )
        return [self._map_to_note(row) for row in result.data]

    def list_by_owner(self, owner_id: int) -> list[Note]:
        """List every note owned by a user, most recent first."""
        result = (
            self._db.table(NOTES_TABLE)
            .select("*")
            .eq("owner_id", owner_id)
            .order("created_at", desc=True)
            .execute()
        )
        return [self._map_to_note(row) for row in result.data]

    def list_all(self) -> list[Note]:
        """List all notes regardless of owner, with author profiles."""
        result = (
            self._db.table(NOTES_TABLE)
            .select(WITH_AUTHOR)
            .order("created_at", desc=True)
            .execute()
        )
        return [self._map_to_note(row) for row in result.data]

    def create(self, data: dict[str, Any]) -> Note:
        """
        Create a note record.

        Args:
            data: Dictionary with note fields (owner_id, visibility, title, content).

        Returns:
            Created Note with generated ID and timestamps.
        """
        result = self._db.table(NOTES_TABLE).insert(data).execute()
        return self._map_to_note(result.data[0])

    def update(self, note_id: int, data: dict[str, Any]) -> Optional[Note]:
        """
        Update note fields and bump updated_at.

        Returns:
            Updated Note, or None if the row no longer exists.
        """
        payload = {**data, "updated_at": datetime.now(timezone.utc).isoformat()}
        result = self._db.table(NOTES_TABLE).update(payload).eq("id", note_id).execute()
        row = self._first(result.data)
        return self._map_to_note(row) if row else None

    def delete(self, note_id: int) -> bool:
        """
        Delete a note.

        Returns:
            True if a row was deleted.
        """
        result = self._db.table(NOTES_TABLE).delete().eq("id", note_id).execute()
        return bool(result.data)

    def delete_by_owner(self, owner_id: int) -> int:
        """Delete every note owned by a user; returns the number removed."""
        result = self._db.table(NOTES_TABLE).delete().eq("owner_id", owner_id).execute()
        return len(result.data)

    def delete_all(self) -> int:
        # PostgREST refuses an unfiltered DELETE
        result = self._db.table(NOTES_TABLE).delete().gte("id", 0).execute()
        return len(result.data)

    def _map_to_note(self, data: dict[str, Any]) -> Note:
        """Map database row to Note model."""
        owner_id = data.get("owner_id")
        author = data.get("user")
        return Note(
            id=int(data["id"]),
            owner_id=int(owner_id) if owner_id is not None else None,
            visibility=Visibility(data.get("visibility", Visibility.PUBLIC.value)),
            title=data.get("title") or "",
            content=data.get("content") or "",
            created_at=data["created_at"],
            updated_at=data["updated_at"],
            user=NoteAuthor(**author) if author else None,
        )
