"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Each module exposes its service through an interface,
and this file creates the concrete implementations.

The store backend is chosen here: Supabase tables in deployed
environments, in-memory repositories when ACCOUNT_STORE_BACKEND=memory.
"""

from typing import TYPE_CHECKING

from shared.config import get_settings

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from modules.accounts.interfaces import IAccountRepository, IAccountService
    from modules.auth.interfaces import ITokenService
    from modules.cruises.interfaces import IJoinedCruiseRepository
    from modules.mail.interfaces import IMailer
    from modules.profiles.interfaces import IProfileService


class ServiceContainer:
    """
    Container for all service instances.

    This class manages the lifecycle of service instances and their
    dependencies. Services are created lazily on first access.

    All services are cached as singletons within the container.
    Use reset() to clear all cached services for testing.
    """

    def __init__(self) -> None:
        self._account_repository: "IAccountRepository | None" = None
        self._cruise_repository: "IJoinedCruiseRepository | None" = None
        self._token_service: "ITokenService | None" = None
        self._mailer: "IMailer | None" = None
        self._account_service: "IAccountService | None" = None
        self._profile_service: "IProfileService | None" = None

    def _use_memory_store(self) -> bool:
        return get_settings().account_store_backend == "memory"

    @property
    def account_repository(self) -> "IAccountRepository":
        """Get the account repository instance."""
        if self._account_repository is None:
            if self._use_memory_store():
                from modules.accounts.repository import InMemoryAccountRepository
                self._account_repository = InMemoryAccountRepository()
            else:
                from modules.accounts.repository import SupabaseAccountRepository
                from shared.database import get_supabase_client
                self._account_repository = SupabaseAccountRepository(get_supabase_client())
        return self._account_repository

    @property
    def cruise_repository(self) -> "IJoinedCruiseRepository":
        """Get the joined-cruise repository instance."""
        if self._cruise_repository is None:
            if self._use_memory_store():
                from modules.cruises.repository import InMemoryJoinedCruiseRepository
                self._cruise_repository = InMemoryJoinedCruiseRepository()
            else:
                from modules.cruises.repository import SupabaseJoinedCruiseRepository
                from shared.database import get_supabase_client
                self._cruise_repository = SupabaseJoinedCruiseRepository(get_supabase_client())
        return self._cruise_repository

    @property
    def tokens(self) -> "ITokenService":
        """Get the token service instance."""
        if self._token_service is None:
            from modules.auth.service import get_token_service
            self._token_service = get_token_service()
        return self._token_service

    @property
    def mailer(self) -> "IMailer":
        """Get the email service instance."""
        if self._mailer is None:
            from modules.mail.service import get_email_service
            self._mailer = get_email_service()
        return self._mailer

    @property
    def accounts(self) -> "IAccountService":
        """Get the account service instance."""
        if self._account_service is None:
            from modules.accounts.service import AccountService
            self._account_service = AccountService(
                repository=self.account_repository,
                tokens=self.tokens,
                mailer=self.mailer,
                cruises=self.cruise_repository,
            )
        return self._account_service

    @property
    def profiles(self) -> "IProfileService":
        """Get the profile service instance."""
        if self._profile_service is None:
            from modules.profiles.service import ProfileService
            self._profile_service = ProfileService(repository=self.account_repository)
        return self._profile_service

    def reset(self) -> None:
        """
        Reset all cached services.

        This is primarily for testing - allows tests to get fresh
        service instances with different mock dependencies.
        """
        self._account_repository = None
        self._cruise_repository = None
        self._token_service = None
        self._mailer = None
        self._account_service = None
        self._profile_service = None


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

    This clears the cached container, so the next call to get_container()
    will create a fresh container with new service instances.

    Primarily used for testing.
    """
    global _container
    _container = None


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_token_service() -> "ITokenService":
    """FastAPI dependency for the token service."""
    return get_container().tokens


def get_account_service() -> "IAccountService":
    """FastAPI dependency for the account service."""
    return get_container().accounts


def get_profile_service() -> "IProfileService":
    """FastAPI dependency for the profile service."""
    return get_container().profiles
