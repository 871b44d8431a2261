"""
Notes module.

Note persistence (the resource store the ownership guard reads from) and the
CRUD plumbing behind the public, private and admin note endpoints.

Public API:
- IResourceStore, INoteStore, INoteService: Interfaces
- Note, NoteAuthor, Visibility: Data models
- Notes exceptions: NoteNotFoundError, InvalidNoteStateError
"""

from .interfaces import INoteService, INoteStore, IResourceStore
from .models import (
    CreatePrivateNoteRequest,
    CreatePublicNoteRequest,
    DeleteAllResponse,
    Note,
    NoteAuthor,
    NoteListResponse,
    UpdateNoteRequest,
    Visibility,
)
from .exceptions import InvalidNoteStateError, NoteNotFoundError

__all__ = [
    # Interfaces
    "INoteService",
    "INoteStore",
    "IResourceStore",
    # Models
    "CreatePrivateNoteRequest",
    "CreatePublicNoteRequest",
    "DeleteAllResponse",
    "Note",
    "NoteAuthor",
    "NoteListResponse",
    "UpdateNoteRequest",
    "Visibility",
    # Exceptions
    "InvalidNoteStateError",
    "NoteNotFoundError",
]
