"""Service container.

Everything with state (the event bus, the cache, the services over the
repositories) is built here once per application and hung on
``app.state.services``.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, Optional

from .config.settings import AppSettings
from .database import DatabaseManager
from .features.auth.cookies import SessionCookie
from .features.auth.entities import PasswordHasher, SessionRepository, UserRepository
from .features.auth.services import AuthService, SessionService
from .features.cache.adapters import MemoryCache
from .features.categories.entities import CategoryRepository
from .features.categories.services import CategoryService, CategoryTree
from .features.events.services import EventBus, register_subscribers
from .features.permissions.entities import PermissionRepository, RoleRepository
from .features.permissions.services import AuthorizationService, PermissionService, RoleService
from .features.settings.entities import SettingRepository
from .features.settings.services import SettingsService
from .features.users.services import UserService

logger = logging.getLogger(__name__)


@dataclass
class ServiceContainer:
    settings: AppSettings
    event_bus: EventBus
    cache: MemoryCache
    session_cookie: SessionCookie
    session_service: SessionService
    authorization: AuthorizationService
    auth_service: AuthService
    role_service: RoleService
    permission_service: PermissionService
    user_service: UserService
    settings_service: SettingsService
    category_service: CategoryService
    database: Optional[DatabaseManager] = None

    @classmethod
    def build(
        cls,
        settings: AppSettings,
        *,
        session_repo: SessionRepository,
        user_repo: UserRepository,
        role_repo: RoleRepository,
        permission_repo: PermissionRepository,
        setting_repo: SettingRepository,
        category_repo: CategoryRepository,
        database: Optional[DatabaseManager] = None,
        clock: Optional[Callable[[], datetime]] = None,
        cache_clock: Optional[Callable[[], float]] = None,
        hasher: Optional[PasswordHasher] = None,
    ) -> "ServiceContainer":
        event_bus = EventBus(max_listeners=settings.event_max_listeners, clock=clock)
        cache = MemoryCache(default_ttl=settings.cache_ttl_default, clock=cache_clock)
        hasher = hasher or PasswordHasher.from_settings(settings)
        cookie = SessionCookie.from_settings(settings)

        session_service = SessionService(
            session_repo,
            user_repo,
            cookie=cookie,
            ttl=timedelta(days=settings.session_ttl_days),
            clock=clock,
        )

        return cls(
            settings=settings,
            event_bus=event_bus,
            cache=cache,
            session_cookie=cookie,
            session_service=session_service,
            authorization=AuthorizationService(session_service),
            auth_service=AuthService(
                user_repo, role_repo, session_service, hasher, event_bus,
                password_min_length=settings.password_min_length,
            ),
            role_service=RoleService(role_repo, permission_repo, event_bus),
            permission_service=PermissionService(permission_repo, role_repo),
            user_service=UserService(
                user_repo, role_repo, session_service, hasher, event_bus,
                password_min_length=settings.password_min_length,
            ),
            settings_service=SettingsService(
                setting_repo, cache, event_bus, ttl=settings.cache_ttl_settings
            ),
            category_service=CategoryService(
                category_repo,
                CategoryTree(category_repo, max_depth=settings.category_max_depth),
                cache,
                event_bus,
            ),
            database=database,
        )

    @classmethod
    def from_database(cls, settings: AppSettings, database: DatabaseManager) -> "ServiceContainer":
        """Build the container over the asyncpg repositories."""
        from .features.auth.repositories import AsyncPGSessionRepository, AsyncPGUserRepository
        from .features.categories.repositories import AsyncPGCategoryRepository
        from .features.permissions.repositories import (
            AsyncPGPermissionRepository,
            AsyncPGRoleRepository,
        )
        from .features.settings.repositories import AsyncPGSettingRepository

        return cls.build(
            settings,
            session_repo=AsyncPGSessionRepository(database),
            user_repo=AsyncPGUserRepository(database),
            role_repo=AsyncPGRoleRepository(database),
            permission_repo=AsyncPGPermissionRepository(database),
            setting_repo=AsyncPGSettingRepository(database),
            category_repo=AsyncPGCategoryRepository(database),
            database=database,
        )

    def wire_subscribers(self) -> bool:
        return register_subscribers(self.event_bus, self.cache)

    async def shutdown(self) -> None:
        await self.event_bus.reset()
        self.cache.clear()
        if self.database is not None:
            await self.database.close()
