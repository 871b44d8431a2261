"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Each module exposes its service through an interface,
and this file creates the concrete implementations.
"""

from typing import TYPE_CHECKING, Optional

from shared.config import Settings, get_settings

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from modules.auth.interfaces import IAuthService, IIdentityResolver, IOwnershipGuard
    from modules.notes.interfaces import INoteService, INoteStore
    from modules.users.interfaces import ClaimsFetcher, IUserDirectory, IUserStore


class ServiceContainer:
    """
    Container for all service instances.

    Services are created lazily on first access and cached as singletons
    within the container. Use reset() to clear them for testing.
    """

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self._settings = settings
        self._auth_service: "IAuthService | None" = None
        self._identity_resolver: "IIdentityResolver | None" = None
        self._user_store: "IUserStore | None" = None
        self._user_directory: "IUserDirectory | None" = None
        self._note_store: "INoteStore | None" = None
        self._note_service: "INoteService | None" = None
        self._guard: "IOwnershipGuard | None" = None

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    @property
    def auth(self) -> "IAuthService":
        """Get the token verifier."""
        if self._auth_service is None:
            from modules.auth.service import AuthService
            self._auth_service = AuthService(self.settings)
        return self._auth_service

    @property
    def identity_resolver(self) -> "IIdentityResolver":
        """Get the identity resolver, bound to the configured admin key."""
        if self._identity_resolver is None:
            from modules.auth.identity import IdentityResolver
            self._identity_resolver = IdentityResolver(
                auth=self.auth,
                admin_api_key=self.settings.admin_api_key,
            )
        return self._identity_resolver

    @property
    def user_store(self) -> "IUserStore":
        if self._user_store is None:
            from modules.users.repository import UserRepository
            from shared.database import get_supabase_client
            self._user_store = UserRepository(get_supabase_client())
        return self._user_store

    @property
    def users(self) -> "IUserDirectory":
        """Get the user directory."""
        if self._user_directory is None:
            from modules.users.service import UserDirectory
            self._user_directory = UserDirectory(self.user_store, self.settings)
        return self._user_directory

    @property
    def claims_fetcher(self) -> "ClaimsFetcher | None":
        """
        Claims fetcher for first-time users.

        None means the guard uses the claims carried by the verified token.
        """
        if self.settings.claims_source == "token":
            return None
        from modules.users.claims import SupabaseClaimsFetcher
        from shared.database import get_supabase_client
        return SupabaseClaimsFetcher(get_supabase_client())

    @property
    def note_store(self) -> "INoteStore":
        if self._note_store is None:
            from modules.notes.repository import NoteRepository
            from shared.database import get_supabase_client
            self._note_store = NoteRepository(get_supabase_client())
        return self._note_store

    @property
    def notes(self) -> "INoteService":
        """Get the note service."""
        if self._note_service is None:
            from modules.notes.service import NoteService
            self._note_service = NoteService(self.note_store)
        return self._note_service

    @property
    def guard(self) -> "IOwnershipGuard":
        """Get the ownership guard."""
        if self._guard is None:
            from modules.auth.guard import OwnershipGuard
            self._guard = OwnershipGuard(
                store=self.note_store,
                directory=self.users,
                claims_fetcher=self.claims_fetcher,
            )
        return self._guard

    def reset(self) -> None:
        """
        Reset all cached services.

        This is primarily for testing - allows tests to get fresh
        service instances with different mock dependencies.
        """
        self._auth_service = None
        self._identity_resolver = None
        self._user_store = None
        self._user_directory = None
        self._note_store = None
        self._note_service = None
        self._guard = None


# Module-level container singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def reset_container() -> None:
    """
    Reset the service container.

    The next call to get_container() creates a fresh container.
    Primarily used for testing.
    """
    global _container
    _container = None


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_identity_resolver() -> "IIdentityResolver":
    """FastAPI dependency for the identity resolver."""
    return get_container().identity_resolver


def get_note_service() -> "INoteService":
    """FastAPI dependency for the note service."""
    return get_container().notes


def get_ownership_guard() -> "IOwnershipGuard":
    """FastAPI dependency for the ownership guard."""
    return get_container().guard
