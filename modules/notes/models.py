"""
Notes module data models.

Only `owner_id` and `visibility` matter to access control; the remaining
fields belong to the CRUD plumbing.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, model_validator


class Visibility(str, Enum):
    """Who may see a note without owning it."""

    PUBLIC = "public"
    PRIVATE = "private"


class NoteAuthor(BaseModel):
    """Public profile of a note's owner, attached to listings."""

    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None

    model_config = {"frozen": True}


class Note(BaseModel):
    """
    A stored note.

    A note without an owner is always public; ownership never changes
    after creation.
    """

    id: int = Field(..., description="Note ID")
    owner_id: Optional[int] = Field(None, description="Owning user ID (None for anonymous notes)")
    visibility: Visibility = Field(default=Visibility.PUBLIC, description="Note visibility")
    title: str = Field(default="", description="Note title")
    content: str = Field(default="", description="Note body")
    created_at: datetime = Field(..., description="Creation time")
    updated_at: datetime = Field(..., description="Last update time")
    user: Optional[NoteAuthor] = Field(None, description="Owner profile (listings only)")

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _ownerless_notes_are_public(self) -> "Note":
        if self.owner_id is None and self.visibility is not Visibility.PUBLIC:
            raise ValueError("Ownerless notes must be public")
        return self

    @property
    def is_ownerless(self) -> bool:
        return self.owner_id is None


class CreatePublicNoteRequest(BaseModel):
    """Request body for an anonymous public note."""

    title: str = Field(default="Public Note", max_length=200)
    content: str = Field(..., min_length=1)


class CreatePrivateNoteRequest(BaseModel):
    """Request body for a note owned by the caller."""

    title: str = Field(default="Private Note", max_length=200)
    content: str = Field(..., min_length=1)
    visibility: Visibility = Visibility.PRIVATE


class UpdateNoteRequest(BaseModel):
    """Partial update; omitted fields are left unchanged."""

    title: Optional[str] = Field(None, max_length=200)
    content: Optional[str] = None
    visibility: Optional[Visibility] = None


class NoteListResponse(BaseModel):
    """List of notes."""

    notes: list[Note]
    total: int


class DeleteAllResponse(BaseModel):
    """Result of a bulk delete."""

    deleted_count: int
