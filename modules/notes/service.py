"""
Notes service implementation.

CRUD plumbing that runs after the ownership guard has allowed the request.
"""

import logging
from typing import Optional

from .exceptions import InvalidNoteStateError, NoteNotFoundError
from .interfaces import INoteService, INoteStore
from .models import Note, UpdateNoteRequest, Visibility

logger = logging.getLogger(__name__)


class NoteService(INoteService):
    """
    Note service over a note store.

    Does not authorize anything; it only keeps the ownerless-notes-are-public
    rule intact on writes.
    """

    def __init__(self, store: INoteStore):
        self._store = store

    async def list_public(self) -> list[Note]:
        return self._store.list_public()

    async def list_for_owner(self, owner_id: int) -> list[Note]:
        return self._store.list_by_owner(owner_id)

    async def list_all(self) -> list[Note]:
        return self._store.list_all()

    async def create_note(
        self,
        owner_id: Optional[int],
        title: str,
        content: str,
        visibility: Visibility,
    ) -> Note:
        """Create a note; ownerless notes must be public."""
        if owner_id is None and visibility is not Visibility.PUBLIC:
            raise InvalidNoteStateError()

        note = self._store.create(
            {
                "owner_id": owner_id,
                "visibility": visibility.value,
                "title": title,
                "content": content,
            }
        )
        logger.debug("Created note %s (owner=%s)", note.id, owner_id)
        return note

    async def update_note(self, note: Note, request: UpdateNoteRequest) -> Note:
        """Apply a partial update. Ownership is never changed."""
        changes = request.model_dump(exclude_none=True, mode="json")
        if not changes:
            return note

        if note.is_ownerless and request.visibility is Visibility.PRIVATE:
            raise InvalidNoteStateError(note.id)

        updated = self._store.update(note.id, changes)
        if updated is None:
            raise NoteNotFoundError(note.id)
        return updated

    async def delete_note(self, note: Note) -> None:
        if not self._store.delete(note.id):
            raise NoteNotFoundError(note.id)
        logger.debug("Deleted note %s", note.id)

    async def delete_all_for_owner(self, owner_id: int) -> int:
        deleted = self._store.delete_by_owner(owner_id)
        logger.info("Deleted %d notes owned by user %s", deleted, owner_id)
        return deleted

    async def delete_all(self) -> int:
        """Delete every note in the system, ownerless ones included."""
        deleted = self._store.delete_all()
        logger.warning("Deleted all notes (%d rows)", deleted)
        return deleted
