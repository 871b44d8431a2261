"""
Notes module exceptions.
"""

from shared.exceptions import NotFoundError, ValidationError


class NoteNotFoundError(NotFoundError):
    """Raised when a note is not found."""

    def __init__(self, note_id: int):
        super().__init__(
            f"Note not found: {note_id}",
            code="NOTE_NOT_FOUND",
            details={"note_id": note_id},
        )


class InvalidNoteStateError(ValidationError):
    """Raised when a write would break the ownerless-notes-are-public rule."""

    def __init__(self, note_id: int | None = None):
        super().__init__(
            "Notes without an owner must be public",
            code="INVALID_NOTE_STATE",
            details={"note_id": note_id},
        )
