"""Pytest configuration and fixtures for storefront-admin tests.

Repositories are replaced by in-memory fakes sharing one ``InMemoryStore``
so services run their real logic without a database.
"""

import uuid
from dataclasses import replace
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional, Sequence, Tuple

import httpx
import pytest
import pytest_asyncio

from storefront_admin.app import create_app
from storefront_admin.config.constants import PermissionScope
from storefront_admin.config.settings import AppSettings
from storefront_admin.container import ServiceContainer
from storefront_admin.features.auth.entities import (
    AuthenticatedUser,
    PasswordHasher,
    Session,
    UserRecord,
)
from storefront_admin.features.categories.entities import Category
from storefront_admin.features.permissions.entities import Permission, Role
from storefront_admin.features.settings.entities import Setting, SettingInput

from tests.helpers import TEST_PASSWORD, new_id


class FakeClock:
    """Controllable UTC clock."""

    def __init__(self, start: Optional[datetime] = None):
        # starts at the real time so cookies it stamps are not already expired
        self.current = start or datetime.now(timezone.utc).replace(microsecond=0)

    def __call__(self) -> datetime:
        return self.current

    def timestamp(self) -> float:
        return self.current.timestamp()

    def advance(self, **kwargs) -> None:
        self.current += timedelta(**kwargs)


class InMemoryStore:
    def __init__(self):
        self.users: Dict[str, UserRecord] = {}
        self.roles: Dict[str, Role] = {}
        self.permissions: Dict[str, Permission] = {}
        # role_id -> [(permission_id, scope override or None)]
        self.role_permissions: Dict[str, List[Tuple[str, Optional[PermissionScope]]]] = {}
        self.sessions: Dict[str, Session] = {}
        self.settings: Dict[str, Setting] = {}
        self.categories: Dict[str, Category] = {}

    def resolve_role(self, role_id: str) -> Optional[Role]:
        role = self.roles.get(role_id)
        if role is None:
            return None
        grants = [
            self.permissions[pid].as_grant(scope)
            for pid, scope in self.role_permissions.get(role_id, [])
        ]
        user_count = sum(
            1 for user in self.users.values() if user.role_id == role_id and not user.is_deleted
        )
        return replace(role, grants=grants, user_count=user_count)


class InMemorySessionRepository:
    def __init__(self, store: InMemoryStore):
        self.store = store

    async def create(self, session: Session) -> Session:
        session = replace(session, id=new_id())
        self.store.sessions[session.token] = session
        return session

    async def find_by_token(self, token: str) -> Optional[Session]:
        return self.store.sessions.get(token)

    async def delete_by_token(self, token: str) -> bool:
        return self.store.sessions.pop(token, None) is not None

    async def delete_all_by_user_id(self, user_id: str) -> int:
        tokens = [t for t, s in self.store.sessions.items() if s.user_id == user_id]
        for token in tokens:
            del self.store.sessions[token]
        return len(tokens)


class InMemoryUserRepository:
    def __init__(self, store: InMemoryStore):
        self.store = store

    async def find_by_id(self, user_id: str) -> Optional[UserRecord]:
        return self.store.users.get(user_id)

    async def find_by_email(self, email: str) -> Optional[UserRecord]:
        return next((u for u in self.store.users.values() if u.email == email), None)

    async def find_by_phone(self, phone: str) -> Optional[UserRecord]:
        return next((u for u in self.store.users.values() if u.phone == phone), None)

    async def find_with_role(self, user_id: str):
        user = self.store.users.get(user_id)
        if user is None:
            return None
        role = self.store.resolve_role(user.role_id) if user.role_id else None
        return user, role

    async def create(self, user: UserRecord) -> UserRecord:
        user = replace(user, id=new_id())
        self.store.users[user.id] = user
        return user

    async def update(self, user_id: str, changes: Dict[str, Any]) -> Optional[UserRecord]:
        user = self.store.users.get(user_id)
        if user is None:
            return None
        user = replace(user, **changes)
        self.store.users[user_id] = user
        return user

    async def touch_last_login(self, user_id: str, when: datetime) -> None:
        self.store.users[user_id].last_login_at = when

    async def update_role(self, user_id: str, role_id: str) -> bool:
        if user_id not in self.store.users:
            return False
        self.store.users[user_id].role_id = role_id
        return True

    async def update_password(self, user_id: str, password_hash: str) -> bool:
        if user_id not in self.store.users:
            return False
        self.store.users[user_id].password_hash = password_hash
        return True

    async def soft_delete(self, user_id: str, when: datetime) -> bool:
        user = self.store.users.get(user_id)
        if user is None or user.is_deleted:
            return False
        user.deleted_at = when
        user.is_active = False
        return True


class InMemoryPermissionRepository:
    def __init__(self, store: InMemoryStore):
        self.store = store

    async def list_all(self) -> List[Permission]:
        return sorted(
            self.store.permissions.values(),
            key=lambda p: (p.group or "", p.resource, p.action.value, p.scope.value),
        )

    async def get_by_ids(self, permission_ids: Sequence[str]) -> List[Permission]:
        return [self.store.permissions[pid] for pid in permission_ids if pid in self.store.permissions]

    async def upsert(self, permission: Permission) -> Permission:
        for existing in self.store.permissions.values():
            if existing.key == permission.key:
                permission = replace(permission, id=existing.id)
                break
        else:
            permission = replace(permission, id=new_id())
        self.store.permissions[permission.id] = permission
        return permission

    def id_for(self, resource, action, scope) -> str:
        return next(p.id for p in self.store.permissions.values() if p.key == (resource, action, scope))


class InMemoryRoleRepository:
    def __init__(self, store: InMemoryStore):
        self.store = store

    async def get_by_id(self, role_id: str) -> Optional[Role]:
        return self.store.resolve_role(role_id)

    async def get_by_name(self, name: str) -> Optional[Role]:
        role = next((r for r in self.store.roles.values() if r.name == name), None)
        return self.store.resolve_role(role.id) if role else None

    async def get_default(self) -> Optional[Role]:
        role = next((r for r in self.store.roles.values() if r.is_default), None)
        return self.store.resolve_role(role.id) if role else None

    async def list_all(self) -> List[Role]:
        return [self.store.resolve_role(role_id) for role_id in self.store.roles]

    async def create(self, role: Role, permission_ids: Sequence[str] = ()) -> Role:
        role = replace(role, id=new_id(), grants=[])
        self.store.roles[role.id] = role
        self.store.role_permissions[role.id] = [(pid, None) for pid in permission_ids]
        return self.store.resolve_role(role.id)

    async def update(self, role_id, changes, permission_ids=None) -> Optional[Role]:
        role = self.store.roles.get(role_id)
        if role is None:
            return None
        self.store.roles[role_id] = replace(role, **changes)
        if permission_ids is not None:
            self.store.role_permissions[role_id] = [(pid, None) for pid in permission_ids]
        return self.store.resolve_role(role_id)

    def link(self, role_id: str, permission_id: str, scope: Optional[PermissionScope] = None) -> None:
        """Attach a permission with a role-level scope, as a migration would."""
        self.store.role_permissions.setdefault(role_id, []).append((permission_id, scope))

    async def delete(self, role_id: str) -> bool:
        self.store.role_permissions.pop(role_id, None)
        return self.store.roles.pop(role_id, None) is not None

    async def sync_by_name(self, role: Role, permission_keys) -> Role:
        existing = next((r for r in self.store.roles.values() if r.name == role.name), None)
        role = replace(role, id=existing.id if existing else new_id(), grants=[])
        self.store.roles[role.id] = role
        self.store.role_permissions[role.id] = [
            (p.id, None) for p in self.store.permissions.values() if p.key in set(permission_keys)
        ]
        return self.store.resolve_role(role.id)


class InMemorySettingRepository:
    def __init__(self, store: InMemoryStore):
        self.store = store
        self.reads = 0

    async def get(self, key: str) -> Optional[Setting]:
        self.reads += 1
        return self.store.settings.get(key)

    async def list_all(self) -> List[Setting]:
        return sorted(self.store.settings.values(), key=lambda s: s.key)

    async def list_public(self):
        self.reads += 1
        return {s.key: s.value for s in self.store.settings.values() if s.is_public}

    async def upsert(self, item: SettingInput) -> Setting:
        existing = self.store.settings.get(item.key)
        setting = Setting(
            key=item.key,
            value=item.value,
            group=item.group if item.group is not None else (existing.group if existing else None),
            is_public=item.is_public if item.is_public is not None else (existing.is_public if existing else False),
        )
        self.store.settings[item.key] = setting
        return setting

    async def bulk_upsert(self, items) -> List[Setting]:
        return [await self.upsert(item) for item in items]

    async def delete(self, key: str) -> bool:
        return self.store.settings.pop(key, None) is not None


class InMemoryCategoryRepository:
    def __init__(self, store: InMemoryStore):
        self.store = store
        self.child_queries = 0

    def add(self, category_id: str, parent_id: Optional[str] = None, name: Optional[str] = None) -> Category:
        category = Category(id=category_id, name=name or category_id, slug=category_id, parent_id=parent_id)
        self.store.categories[category_id] = category
        return category

    async def get_by_id(self, category_id: str) -> Optional[Category]:
        return self.store.categories.get(category_id)

    async def list_child_ids(self, parent_ids) -> List[str]:
        self.child_queries += 1
        parents = set(parent_ids)
        return [c.id for c in self.store.categories.values() if c.parent_id in parents]

    async def update_parent(self, category_id: str, parent_id: Optional[str]) -> Optional[Category]:
        category = self.store.categories.get(category_id)
        if category is None:
            return None
        category.parent_id = parent_id
        return category


# Fixtures

@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def session_repo(store):
    return InMemorySessionRepository(store)


@pytest.fixture
def user_repo(store):
    return InMemoryUserRepository(store)


@pytest.fixture
def permission_repo(store):
    return InMemoryPermissionRepository(store)


@pytest.fixture
def role_repo(store):
    return InMemoryRoleRepository(store)


@pytest.fixture
def setting_repo(store):
    return InMemorySettingRepository(store)


@pytest.fixture
def category_repo(store):
    return InMemoryCategoryRepository(store)


@pytest.fixture
def hasher():
    """Low-cost scrypt parameters so tests stay fast."""
    return PasswordHasher(n=1024, r=8, p=1)


@pytest.fixture
def settings():
    return AppSettings(_env_file=None, environment="development")


@pytest.fixture
def services(settings, clock, hasher, session_repo, user_repo, role_repo,
             permission_repo, setting_repo, category_repo):
    container = ServiceContainer.build(
        settings,
        session_repo=session_repo,
        user_repo=user_repo,
        role_repo=role_repo,
        permission_repo=permission_repo,
        setting_repo=setting_repo,
        category_repo=category_repo,
        clock=clock,
        cache_clock=clock.timestamp,
        hasher=hasher,
    )
    container.wire_subscribers()
    return container


@pytest_asyncio.fixture
async def roles(services) -> Dict[str, Role]:
    """Default catalog and roles, keyed by role name."""
    seeded = await services.permission_service.seed_defaults()
    return {role.name: role for role in seeded}


@pytest.fixture
def make_user(store, hasher, roles):
    """Create a stored user holding the named role and return it as an AuthenticatedUser."""

    def factory(role_name: Optional[str], email: Optional[str] = None, **fields) -> AuthenticatedUser:
        role = roles[role_name] if role_name else None
        record = UserRecord(
            id=new_id(),
            email=email or f"{role_name or 'nobody'}-{uuid.uuid4().hex[:6]}@example.com",
            first_name=fields.pop("first_name", "Test"),
            last_name=fields.pop("last_name", "User"),
            password_hash=hasher.hash(fields.pop("password", TEST_PASSWORD)),
            role_id=role.id if role else None,
            **fields,
        )
        store.users[record.id] = record
        return AuthenticatedUser.from_record(record, store.resolve_role(role.id) if role else None)

    return factory


@pytest.fixture
def app(settings, services):
    application = create_app(settings, services=services)
    # httpx's ASGI transport does not run the lifespan
    application.state.services = services
    return application


@pytest_asyncio.fixture
async def client(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as http_client:
        yield http_client
