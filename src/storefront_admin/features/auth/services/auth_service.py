"""Account-facing authentication flows: login, register, logout, me."""

import logging
from typing import Optional

from ....core.exceptions import AuthenticationError, ConflictError, ValidationError
from ...events.entities import EventMeta, EventName, UserEvent
from ..entities import AuthenticatedUser, ClientMeta, PasswordHasher, UserRecord, UserRepository
from ..entities.validation import check_password, normalize_email, normalize_phone
from .session_service import SessionService

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"


class AuthService:
    """Login and registration on top of the session service."""

    def __init__(
        self,
        user_repo: UserRepository,
        role_repo,
        session_service: SessionService,
        hasher: PasswordHasher,
        event_bus,
        password_min_length: int = 8,
    ):
        self.user_repo = user_repo
        self.role_repo = role_repo
        self.session_service = session_service
        self.hasher = hasher
        self.event_bus = event_bus
        self.password_min_length = password_min_length

    async def login(
        self,
        email: Optional[str],
        password: Optional[str],
        client_meta: Optional[ClientMeta] = None,
        response=None,
    ) -> AuthenticatedUser:
        if not email or not password:
            raise ValidationError("Email and password are required")

        record = await self.user_repo.find_by_email(email.strip().lower())
        if record is None or not record.password_hash:
            raise AuthenticationError(INVALID_CREDENTIALS)
        if not record.is_active:
            raise AuthenticationError("Account is disabled")
        if record.is_deleted:
            raise AuthenticationError("Account does not exist")
        if not self.hasher.verify(password, record.password_hash):
            logger.info(f"Failed login for user {record.id}")
            raise AuthenticationError(INVALID_CREDENTIALS)

        client_meta = client_meta or ClientMeta()
        await self.session_service.create_session(record.id, client_meta, response)

        loaded = await self.user_repo.find_with_role(record.id)
        role = loaded[1] if loaded else None
        user = AuthenticatedUser.from_record(record, role)

        self.event_bus.emit(
            EventName.USER_LOGIN,
            UserEvent(id=user.id, email=user.email,
                      meta=EventMeta(user_id=user.id, ip=client_meta.ip_address)),
        )
        return user

    async def register(
        self,
        email: Optional[str],
        password: Optional[str],
        first_name: str = "",
        last_name: str = "",
        phone: Optional[str] = None,
        client_meta: Optional[ClientMeta] = None,
        response=None,
    ) -> AuthenticatedUser:
        """Create a customer account with the default role and sign it in."""
        email = normalize_email(email)
        password = check_password(password, self.password_min_length)

        if await self.user_repo.find_by_email(email):
            raise ConflictError("Email is already in use", field="email")

        if phone:
            phone = normalize_phone(phone)
            if await self.user_repo.find_by_phone(phone):
                raise ConflictError("Phone number is already in use", field="phone")
        else:
            phone = None

        default_role = await self.role_repo.get_default()
        record = await self.user_repo.create(UserRecord(
            id=None,
            email=email,
            first_name=(first_name or "").strip(),
            last_name=(last_name or "").strip(),
            phone=phone,
            password_hash=self.hasher.hash(password),
            role_id=default_role.id if default_role else None,
        ))
        logger.info(f"Registered user {record.id}")

        client_meta = client_meta or ClientMeta()
        await self.session_service.create_session(record.id, client_meta, response)

        self.event_bus.emit(
            EventName.USER_CREATED,
            UserEvent(id=record.id, email=record.email,
                      meta=EventMeta(user_id=record.id, ip=client_meta.ip_address)),
        )
        return AuthenticatedUser.from_record(record, default_role)

    async def logout(self, token: Optional[str], response=None) -> None:
        user = await self.session_service.resolve_session(token)
        await self.session_service.destroy_session(token, response)
        if user is not None:
            self.event_bus.emit(
                EventName.USER_LOGOUT,
                UserEvent(id=user.id, email=user.email, meta=EventMeta(user_id=user.id)),
            )

    async def me(self, token: Optional[str], response=None) -> AuthenticatedUser:
        user = await self.session_service.resolve_session(token, response)
        if user is None:
            raise AuthenticationError(clear_session=bool(token))
        return user
