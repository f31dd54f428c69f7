"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Each module exposes its service through an interface,
and this file creates the concrete implementations.
"""

from typing import TYPE_CHECKING

from shared.config import get_settings

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from modules.auth.codec import TokenCodec
    from modules.auth.interfaces import IAuthService, ICredentialStore
    from modules.auth.issuer import AccessTokenIssuer
    from modules.devices.interfaces import IDeviceService
    from modules.sketches.interfaces import ISketchService
    from shared.mailer import Mailer


class ServiceContainer:
    """
    Container for all service instances.

    This class manages the lifecycle of service instances and their
    dependencies. Services are created lazily on first access, so token
    verification never needs the database client to be configured.

    All services are cached as singletons within the container.
    Use reset() to clear all cached services for testing.
    """

    def __init__(self) -> None:
        self._token_codec: "TokenCodec | None" = None
        self._token_issuer: "AccessTokenIssuer | None" = None
        self._user_repository: "ICredentialStore | None" = None
        self._mailer: "Mailer | None" = None
        self._auth_service: "IAuthService | None" = None
        self._device_service: "IDeviceService | None" = None
        self._sketch_service: "ISketchService | None" = None

    @property
    def token_codec(self) -> "TokenCodec":
        """Get the token codec, configured from settings."""
        if self._token_codec is None:
            from modules.auth.codec import TokenCodec, TokenCodecConfig
            self._token_codec = TokenCodec(TokenCodecConfig.from_settings(get_settings()))
        return self._token_codec

    @property
    def token_issuer(self) -> "AccessTokenIssuer":
        """Get the access-token issuer (no store access)."""
        if self._token_issuer is None:
            from datetime import timedelta
            from modules.auth.issuer import AccessTokenIssuer
            ttl = timedelta(seconds=get_settings().access_token_ttl_seconds)
            self._token_issuer = AccessTokenIssuer(self.token_codec, ttl=ttl)
        return self._token_issuer

    @property
    def user_repository(self) -> "ICredentialStore":
        """Get the credential store."""
        if self._user_repository is None:
            from modules.auth.repository import UserRepository
            from shared.database import get_supabase_client
            self._user_repository = UserRepository(get_supabase_client())
        return self._user_repository

    @property
    def mailer(self) -> "Mailer":
        if self._mailer is None:
            from shared.mailer import Mailer
            self._mailer = Mailer(get_settings())
        return self._mailer

    @property
    def auth(self) -> "IAuthService":
        """Get the auth service instance."""
        if self._auth_service is None:
            from modules.auth.service import AuthService
            self._auth_service = AuthService.from_settings(
                get_settings(),
                store=self.user_repository,
                mailer=self.mailer,
                codec=self.token_codec,
            )
        return self._auth_service

    @property
    def devices(self) -> "IDeviceService":
        """Get the device service instance."""
        if self._device_service is None:
            from modules.devices.repository import DeviceRepository
            from modules.devices.service import DeviceService
            from shared.database import get_supabase_client
            self._device_service = DeviceService(DeviceRepository(get_supabase_client()))
        return self._device_service

    @property
    def sketches(self) -> "ISketchService":
        """Get the sketch service instance."""
        if self._sketch_service is None:
            from modules.sketches.repository import SketchRepository
            from modules.sketches.service import SketchService
            from shared.database import get_supabase_client
            self._sketch_service = SketchService(SketchRepository(get_supabase_client()))
        return self._sketch_service

    def reset(self) -> None:
        """
        Reset all cached services.

        This is primarily for testing - allows tests to get fresh
        service instances with different mock dependencies.
        """
        self._token_codec = None
        self._token_issuer = None
        self._user_repository = None
        self._mailer = None
        self._auth_service = None
        self._device_service = None
        self._sketch_service = None


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


def get_token_issuer() -> "AccessTokenIssuer":
    """FastAPI dependency for access-token verification."""
    return get_container().token_issuer


def get_auth_service() -> "IAuthService":
    """FastAPI dependency for auth service."""
    return get_container().auth


def get_device_service() -> "IDeviceService":
    """FastAPI dependency for device service."""
    return get_container().devices


def get_sketch_service() -> "ISketchService":
    """FastAPI dependency for sketch service."""
    return get_container().sketches
