"""
Notes module interfaces.

IResourceStore is the narrow contract the ownership guard depends on.
INoteStore adds the plumbing operations used by the notes service.
"""

from typing import Any, Optional, Protocol, runtime_checkable

from .models import Note, UpdateNoteRequest, Visibility


@runtime_checkable
class IResourceStore(Protocol):
    """Read-only view of notes used for access decisions."""

    def load_by_id(self, note_id: int) -> Optional[Note]:
        """Return the note, or None if it does not exist."""
        ...


@runtime_checkable
class INoteStore(IResourceStore, Protocol):
    """Full note persistence used by the CRUD plumbing."""

    def list_public(self) -> list[Note]:
        ...

    def list_by_owner(self, owner_id: int) -> list[Note]:
        ...

    def list_all(self) -> list[Note]:
        ...

    def create(self, data: dict[str, Any]) -> Note:
        ...

    def update(self, note_id: int, data: dict[str, Any]) -> Optional[Note]:
        ...

    def delete(self, note_id: int) -> bool:
        ...

    def delete_by_owner(self, owner_id: int) -> int:
        """Delete every note owned by a user; returns the number removed."""
        ...

    def delete_all(self) -> int:
        ...


@runtime_checkable
class INoteService(Protocol):
    """
    Interface for note CRUD plumbing.

    Callers must have obtained an ALLOW decision from the ownership guard
    before calling update_note or delete_note.
    """

    async def list_public(self) -> list[Note]:
        ...

    async def list_for_owner(self, owner_id: int) -> list[Note]:
        ...

    async def list_all(self) -> list[Note]:
        ...

    async def create_note(
        self,
        owner_id: Optional[int],
        title: str,
        content: str,
        visibility: Visibility,
    ) -> Note:
        ...

    async def update_note(self, note: Note, request: UpdateNoteRequest) -> Note:
        ...

    async def delete_note(self, note: Note) -> None:
        ...

    async def delete_all_for_owner(self, owner_id: int) -> int:
        ...

    async def delete_all(self) -> int:
        ...
