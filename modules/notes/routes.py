"""
Note API endpoints.

Three route groups share the same CRUD shape but accept different tiers:

- public_router: anonymous-note path. User tokens are ignored, the admin
  key is accepted. Ownerless public notes are readable and editable here.
- private_router: requires credentials. Collection routes act on the
  calling user's notes; single-note routes also accept the admin key.
- admin_router: admin key only. Listings carry author profiles here and on
  the public path.
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_note_service, get_ownership_guard
from api.middleware.access import (
    access_denied,
    get_current_user,
    require_access,
    require_admin,
)
from api.middleware.auth import (
    get_admin_identity,
    get_note_identity,
    get_public_identity,
    get_user_identity,
)
from modules.auth.interfaces import IOwnershipGuard
from modules.auth.models import AdminIdentity, Identity, Operation
from modules.users.models import User

from .interfaces import INoteService
from .models import (
    CreatePrivateNoteRequest,
    CreatePublicNoteRequest,
    DeleteAllResponse,
    Note,
    NoteListResponse,
    UpdateNoteRequest,
    Visibility,
)

public_router = APIRouter()
private_router = APIRouter()
admin_router = APIRouter()


def _listing(notes: list[Note]) -> NoteListResponse:
    return NoteListResponse(notes=notes, total=len(notes))


# Public (anonymous-note) path


@public_router.get("", response_model=NoteListResponse)
async def list_public_notes(
    service: INoteService = Depends(get_note_service),
) -> NoteListResponse:
    """List public notes, most recent first."""
    return _listing(await service.list_public())


@public_router.post("", response_model=Note, status_code=201)
async def create_public_note(
    request: CreatePublicNoteRequest,
    identity: Identity = Depends(get_public_identity),
    guard: IOwnershipGuard = Depends(get_ownership_guard),
    service: INoteService = Depends(get_note_service),
) -> Note:
    """
    Create an ownerless public note.

    Anyone may post here; the note has no owner and stays editable on this
    path.
    """
    decision = await guard.authorize_create(identity, Visibility.PUBLIC)
    if not decision.allowed:
        raise access_denied(decision.reason)
    return await service.create_note(
        decision.owner_id, request.title, request.content, Visibility.PUBLIC
    )


@public_router.get("/{note_id}", response_model=Note)
async def get_public_note(
    note: Note = Depends(require_access(Operation.READ, get_public_identity)),
) -> Note:
    return note


@public_router.put("/{note_id}", response_model=Note)
async def update_public_note(
    request: UpdateNoteRequest,
    note: Note = Depends(require_access(Operation.UPDATE, get_public_identity)),
    service: INoteService = Depends(get_note_service),
) -> Note:
    return await service.update_note(note, request)


@public_router.delete("/{note_id}", status_code=204)
async def delete_public_note(
    note: Note = Depends(require_access(Operation.DELETE, get_public_identity)),
    service: INoteService = Depends(get_note_service),
) -> None:
    await service.delete_note(note)


# Private (authenticated) path


@private_router.get("", response_model=NoteListResponse)
async def list_my_notes(
    user: User = Depends(get_current_user),
    service: INoteService = Depends(get_note_service),
) -> NoteListResponse:
    """List the current user's notes, most recent first."""
    return _listing(await service.list_for_owner(user.id))


@private_router.delete("", response_model=DeleteAllResponse)
async def delete_my_notes(
    user: User = Depends(get_current_user),
    service: INoteService = Depends(get_note_service),
) -> DeleteAllResponse:
    """Delete every note the current user owns."""
    return DeleteAllResponse(deleted_count=await service.delete_all_for_owner(user.id))


@private_router.post("", response_model=Note, status_code=201)
async def create_private_note(
    request: CreatePrivateNoteRequest,
    identity: Identity = Depends(get_user_identity),
    guard: IOwnershipGuard = Depends(get_ownership_guard),
    service: INoteService = Depends(get_note_service),
) -> Note:
    """
    Create a note owned by the current user.

    Private unless the request asks for public visibility.
    """
    decision = await guard.authorize_create(
        identity, request.visibility, credentials_required=True
    )
    if not decision.allowed:
        raise access_denied(decision.reason)
    return await service.create_note(
        decision.owner_id, request.title, request.content, request.visibility
    )


@private_router.get("/{note_id}", response_model=Note)
async def get_private_note(
    note: Note = Depends(
        require_access(Operation.READ, get_note_identity, credentials_required=True)
    ),
) -> Note:
    return note


@private_router.put("/{note_id}", response_model=Note)
async def update_private_note(
    request: UpdateNoteRequest,
    note: Note = Depends(
        require_access(Operation.UPDATE, get_note_identity, credentials_required=True)
    ),
    service: INoteService = Depends(get_note_service),
) -> Note:
    return await service.update_note(note, request)


@private_router.delete("/{note_id}", status_code=204)
async def delete_private_note(
    note: Note = Depends(
        require_access(Operation.DELETE, get_note_identity, credentials_required=True)
    ),
    service: INoteService = Depends(get_note_service),
) -> None:
    await service.delete_note(note)


# Admin path


@admin_router.get("", response_model=NoteListResponse)
async def list_all_notes(
    admin: AdminIdentity = Depends(require_admin),
    service: INoteService = Depends(get_note_service),
) -> NoteListResponse:
    """List every note regardless of owner or visibility."""
    return _listing(await service.list_all())


@admin_router.delete("", response_model=DeleteAllResponse)
async def delete_all_notes(
    admin: AdminIdentity = Depends(require_admin),
    service: INoteService = Depends(get_note_service),
) -> DeleteAllResponse:
    """Delete every note in the system."""
    return DeleteAllResponse(deleted_count=await service.delete_all())


@admin_router.get("/{note_id}", response_model=Note)
async def admin_get_note(
    note: Note = Depends(
        require_access(Operation.READ, get_admin_identity, credentials_required=True)
    ),
) -> Note:
    return note


@admin_router.put("/{note_id}", response_model=Note)
async def admin_update_note(
    request: UpdateNoteRequest,
    note: Note = Depends(
        require_access(Operation.UPDATE, get_admin_identity, credentials_required=True)
    ),
    service: INoteService = Depends(get_note_service),
) -> Note:
    return await service.update_note(note, request)


@admin_router.delete("/{note_id}", status_code=204)
async def admin_delete_note(
    note: Note = Depends(
        require_access(Operation.DELETE, get_admin_identity, credentials_required=True)
    ),
    service: INoteService = Depends(get_note_service),
) -> None:
    await service.delete_note(note)
