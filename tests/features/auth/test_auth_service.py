"""Tests for the login, register and logout flows."""

import pytest

from storefront_admin.core.exceptions import AuthenticationError, ConflictError
from storefront_admin.features.auth.entities import ClientMeta
from storefront_admin.features.events.entities import EventName
from tests.helpers import TEST_PASSWORD


@pytest.fixture
def auth_events(services):
    events = []
    for name in (EventName.USER_LOGIN, EventName.USER_LOGOUT, EventName.USER_CREATED):
        services.event_bus.subscribe(name, lambda payload, name=name: events.append((name, payload)))
    return events


class TestAuthService:
    """Test account flows and the events they emit."""

    @pytest.mark.asyncio
    async def test_login_emits_event(self, services, make_user, auth_events):
        user = make_user("support", email="agent@example.com")

        logged_in = await services.auth_service.login(
            "agent@example.com", TEST_PASSWORD, ClientMeta(ip_address="10.0.0.7")
        )

        assert logged_in.id == user.id
        [(name, payload)] = auth_events
        assert name == EventName.USER_LOGIN
        assert payload.meta.ip == "10.0.0.7"
        assert payload.meta.timestamp is not None

    @pytest.mark.asyncio
    async def test_deleted_account(self, services, make_user, store, clock):
        user = make_user("support", email="gone@example.com")
        store.users[user.id].deleted_at = clock()

        with pytest.raises(AuthenticationError) as exc_info:
            await services.auth_service.login("gone@example.com", TEST_PASSWORD)

        assert exc_info.value.message == "Account does not exist"

    @pytest.mark.asyncio
    async def test_register_emits_event(self, services, roles, auth_events, hasher, store):
        user = await services.auth_service.register("new@example.com", "long-enough", "New", "User")

        assert user.role_name == "customer"
        assert hasher.verify("long-enough", store.users[user.id].password_hash)
        assert [name for name, _ in auth_events] == [EventName.USER_CREATED]

    @pytest.mark.asyncio
    async def test_register_duplicate_phone(self, services, make_user):
        make_user("customer", phone="0912345678")

        with pytest.raises(ConflictError) as exc_info:
            await services.auth_service.register("new@example.com", "long-enough", phone="+84912345678")

        assert exc_info.value.field == "phone"

    @pytest.mark.asyncio
    async def test_logout_emits_event(self, services, make_user, auth_events, store):
        user = make_user("support")
        session = await services.session_service.create_session(user.id)

        await services.auth_service.logout(session.token)
        await services.auth_service.logout(session.token)

        assert store.sessions == {}
        assert [name for name, _ in auth_events] == [EventName.USER_LOGOUT]
