"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules:
PyJWT-minted tokens, in-memory user and note stores, and a TestClient wired
to them through dependency overrides.
"""

import itertools
from datetime import datetime, timezone, timedelta
from typing import Any, Optional

import jwt  # PyJWT
import pytest
from fastapi.testclient import TestClient

from api import app
from api.dependencies import get_identity_resolver, get_note_service, get_ownership_guard
from modules.auth.guard import OwnershipGuard
from modules.auth.identity import IdentityResolver
from modules.auth.service import AuthService
from modules.notes.models import Note, NoteAuthor, Visibility
from modules.notes.service import NoteService
from modules.users.models import NewUser, ProvisioningConflict, User, UserInserted
from modules.users.service import UserDirectory
from shared.config import Settings


# Test secrets (only for testing)
TEST_JWT_SECRET = "test-secret-key-for-testing-only"
TEST_ADMIN_KEY = "test-admin-key"


def create_test_token(
    user_id: str = "test-user-123",
    email: Optional[str] = "test@example.com",
    expired: bool = False,
    secret: str = TEST_JWT_SECRET,
    user_metadata: Optional[dict[str, Any]] = None,
) -> str:
    """
    Create a test JWT token for authentication.

    Args:
        user_id: Subject to include in the token
        email: Email to include in the token
        expired: If True, creates an expired token
        secret: Signing secret
        user_metadata: Supabase user_metadata claim

    Returns:
        JWT token string
    """
    now = datetime.now(timezone.utc)
    exp = now - timedelta(hours=1) if expired else now + timedelta(hours=1)

    payload = {
        "sub": user_id,
        "email": email,
        "aud": "authenticated",
        "role": "authenticated",
        "exp": int(exp.timestamp()),
        "iat": int(now.timestamp()),
        "user_metadata": user_metadata or {},
    }
    return jwt.encode(payload, secret, algorithm="HS256")


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def _now() -> datetime:
    return datetime.now(timezone.utc)


class InMemoryUserStore:
    """
    User store backed by a dict, with the subject_id uniqueness of the real
    table. Counts insert attempts so tests can assert on them.
    """

    def __init__(self) -> None:
        self.rows: dict[str, User] = {}
        self.insert_calls = 0
        self._ids = itertools.count(1)

    def get_by_subject(self, subject_id: str) -> Optional[User]:
        return self.rows.get(subject_id)

    def get_by_id(self, user_id: int) -> Optional[User]:
        return next((u for u in self.rows.values() if u.id == user_id), None)

    def insert(self, new_user: NewUser):
        self.insert_calls += 1
        if new_user.subject_id in self.rows:
            return ProvisioningConflict(subject_id=new_user.subject_id)
        user = User(id=next(self._ids), created_at=_now(), updated_at=_now(), **new_user.model_dump())
        self.rows[new_user.subject_id] = user
        return UserInserted(user=user)

    def add(self, subject_id: str, email: str = "seed@example.com") -> User:
        outcome = self.insert(NewUser(subject_id=subject_id, email=email))
        self.insert_calls -= 1
        return outcome.user


class InMemoryNoteStore:
    """Note store backed by a dict keyed by note ID."""

    def __init__(self) -> None:
        self.rows: dict[int, Note] = {}
        self._ids = itertools.count(1000)

    def load_by_id(self, note_id: int) -> Optional[Note]:
        return self.rows.get(note_id)

    def list_public(self) -> list[Note]:
        return [n for n in self.rows.values() if n.visibility is Visibility.PUBLIC]

    def list_by_owner(self, owner_id: int) -> list[Note]:
        return [n for n in self.rows.values() if n.owner_id == owner_id]

    def list_all(self) -> list[Note]:
        return list(self.rows.values())

    def create(self, data: dict[str, Any]) -> Note:
        note_id = data.get("id") or next(self._ids)
        note = Note(**{**data, "id": note_id}, created_at=_now(), updated_at=_now())
        self.rows[note.id] = note
        return note

    def update(self, note_id: int, data: dict[str, Any]) -> Optional[Note]:
        note = self.rows.get(note_id)
        if note is None:
            return None
        updated = note.model_copy(update={**data, "updated_at": _now()})
        self.rows[note_id] = Note.model_validate(updated.model_dump())
        return self.rows[note_id]

    def delete(self, note_id: int) -> bool:
        return self.rows.pop(note_id, None) is not None

    def delete_by_owner(self, owner_id: int) -> int:
        doomed = [n.id for n in self.rows.values() if n.owner_id == owner_id]
        for note_id in doomed:
            del self.rows[note_id]
        return len(doomed)

    def delete_all(self) -> int:
        deleted = len(self.rows)
        self.rows.clear()
        return deleted

    def add(
        self,
        note_id: int,
        owner_id: Optional[int] = None,
        visibility: Visibility = Visibility.PUBLIC,
        content: str = "hello",
        author: Optional[NoteAuthor] = None,
    ) -> Note:
        return self.create(
            {
                "id": note_id,
                "owner_id": owner_id,
                "visibility": visibility,
                "title": f"Note {note_id}",
                "content": content,
                "user": author,
            }
        )


@pytest.fixture
def settings() -> Settings:
    """Settings with test secrets; claims come from the token."""
    return Settings(
        supabase_jwt_secret=TEST_JWT_SECRET,
        admin_api_key=TEST_ADMIN_KEY,
        claims_source="token",
        claims_fetch_timeout=1.0,
    )


@pytest.fixture
def user_store() -> InMemoryUserStore:
    return InMemoryUserStore()


@pytest.fixture
def note_store() -> InMemoryNoteStore:
    return InMemoryNoteStore()


@pytest.fixture
def directory(user_store, settings) -> UserDirectory:
    return UserDirectory(user_store, settings)


@pytest.fixture
def guard(note_store, directory) -> OwnershipGuard:
    return OwnershipGuard(store=note_store, directory=directory)


@pytest.fixture
def resolver(settings) -> IdentityResolver:
    return IdentityResolver(AuthService(settings), admin_api_key=settings.admin_api_key)


@pytest.fixture
def client(guard, resolver, note_store):
    """TestClient with the service container replaced by in-memory wiring."""
    app.dependency_overrides[get_ownership_guard] = lambda: guard
    app.dependency_overrides[get_identity_resolver] = lambda: resolver
    app.dependency_overrides[get_note_service] = lambda: NoteService(note_store)
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def test_user_id() -> str:
    """Provide a consistent test subject."""
    return "test-user-123"


@pytest.fixture
def auth_token(test_user_id: str) -> str:
    """Create a valid auth token for testing."""
    return create_test_token(user_id=test_user_id)


@pytest.fixture
def auth_headers(auth_token: str) -> dict[str, str]:
    """Create authorization headers with a valid token."""
    return bearer(auth_token)


@pytest.fixture
def admin_headers() -> dict[str, str]:
    return {"x-api-key": TEST_ADMIN_KEY}
