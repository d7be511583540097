"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Each module exposes its service through an interface,
and this file creates the concrete implementations.

The container also owns the single ``AuthSession`` of the process, so
state that would otherwise be a global lives in one explicit place.
"""

from typing import TYPE_CHECKING, Optional

from modules.auth.session import AuthSession

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from modules.auth.interfaces import IAuthProvider, IAuthService
    from modules.auth.observer import AuthObserver
    from modules.credits.interfaces import ICreditsService
    from modules.credits.watcher import CreditsWatcher
    from modules.personas.storage import PersonaStorage
    from modules.personas.upload import PersonaUploadService
    from modules.profiles.interfaces import IProfileService
    from modules.profiles.repository import ProfileRepository


class ServiceContainer:
    """
    Container for all service instances.

    Services are created lazily on first access and cached as singletons
    within the container. Use reset() to clear them for testing.
    """

    def __init__(self) -> None:
        self._profile_repository: "ProfileRepository | None" = None
        self._profile_service: "IProfileService | None" = None
        self._auth_service: "IAuthService | None" = None
        self._credits_service: "ICreditsService | None" = None
        self._persona_storage: "PersonaStorage | None" = None
        self._persona_service: "PersonaUploadService | None" = None
        self._session: Optional[AuthSession] = None

    @property
    def profile_repository(self) -> "ProfileRepository":
        """Get the profile repository instance."""
        if self._profile_repository is None:
            from modules.profiles.repository import ProfileRepository
            from shared.database import get_supabase_client
            self._profile_repository = ProfileRepository(get_supabase_client())
        return self._profile_repository

    @property
    def profiles(self) -> "IProfileService":
        """Get the profile service instance."""
        if self._profile_service is None:
            from modules.profiles.service import ProfileService
            self._profile_service = ProfileService(self.profile_repository)
        return self._profile_service

    @property
    def auth(self) -> "IAuthService":
        """Get the auth service instance."""
        if self._auth_service is None:
            from modules.auth.service import AuthService
            self._auth_service = AuthService(self.profiles)
        return self._auth_service

    @property
    def credits(self) -> "ICreditsService":
        """Get the credits service instance."""
        if self._credits_service is None:
            from modules.credits.service import CreditsService
            self._credits_service = CreditsService(self.profile_repository)
        return self._credits_service

    @property
    def persona_storage(self) -> "PersonaStorage":
        """Get the persona blob storage instance."""
        if self._persona_storage is None:
            from modules.personas.storage import PersonaStorage
            from shared.database import get_supabase_client
            self._persona_storage = PersonaStorage(get_supabase_client())
        return self._persona_storage

    @property
    def personas(self) -> "PersonaUploadService":
        """Get the persona upload service instance."""
        if self._persona_service is None:
            from modules.personas.upload import PersonaUploadService
            self._persona_service = PersonaUploadService(self.persona_storage, self.profiles)
        return self._persona_service

    @property
    def session(self) -> AuthSession:
        """The auth session owned by this container."""
        if self._session is None:
            self._session = AuthSession()
        return self._session

    def create_auth_observer(self, provider: "IAuthProvider") -> "AuthObserver":
        """Observer that keeps ``session`` in sync with ``provider``."""
        from modules.auth.observer import AuthObserver
        return AuthObserver(provider, self.profiles, self.session)

    def create_credits_watcher(self) -> "CreditsWatcher":
        """Credits subscription bound to ``session``."""
        from modules.credits.watcher import CreditsWatcher
        return CreditsWatcher(self.session, self.credits)

    def reset(self) -> None:
        """
        Reset all cached services.

        This is primarily for testing - allows tests to get fresh
        service instances with different mock dependencies.
        """
        self._profile_repository = None
        self._profile_service = None
        self._auth_service = None
        self._credits_service = None
        self._persona_storage = None
        self._persona_service = None
        self._session = None


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

    The next call to get_container() creates a fresh container with new
    service instances. Primarily used for testing.
    """
    global _container
    _container = None


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_auth_service() -> "IAuthService":
    """FastAPI dependency for auth service."""
    return get_container().auth


def get_profile_service() -> "IProfileService":
    """FastAPI dependency for profile service."""
    return get_container().profiles


def get_credits_service() -> "ICreditsService":
    """FastAPI dependency for credits service."""
    return get_container().credits


def get_persona_service() -> "PersonaUploadService":
    """FastAPI dependency for persona upload service."""
    return get_container().personas
