"""Session lifecycle: issue, resolve and revoke.

Sessions live for a fixed TTL from creation. An expired session is deleted
the first time it is presented; there is no background sweep.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from ..cookies import SessionCookie
from ..entities import (
    AuthenticatedUser,
    ClientMeta,
    Session,
    SessionRepository,
    UserRepository,
    generate_session_token,
    mask_token,
)

logger = logging.getLogger(__name__)

DEFAULT_SESSION_TTL = timedelta(days=7)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SessionService:
    """Authentication gate over the session store."""

    def __init__(
        self,
        session_repo: SessionRepository,
        user_repo: UserRepository,
        cookie: Optional[SessionCookie] = None,
        ttl: timedelta = DEFAULT_SESSION_TTL,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.session_repo = session_repo
        self.user_repo = user_repo
        self.cookie = cookie or SessionCookie()
        self.ttl = ttl
        self._clock = clock or _utcnow

    def now(self) -> datetime:
        return self._clock()

    async def create_session(
        self,
        user_id: str,
        client_meta: Optional[ClientMeta] = None,
        response=None,
    ) -> Session:
        """Persist a new session and, when a response is given, set its cookie."""
        client_meta = client_meta or ClientMeta()
        session = Session(
            id=None,
            token=generate_session_token(),
            user_id=user_id,
            expires_at=self.now() + self.ttl,
            user_agent=client_meta.user_agent,
            ip_address=client_meta.ip_address,
        )
        session = await self.session_repo.create(session)
        logger.info(f"Session {mask_token(session.token)} created for user {user_id}")

        if response is not None:
            self.cookie.set(response, session)
        return session

    async def _discard(self, token: str, response) -> None:
        await self.session_repo.delete_by_token(token)
        if response is not None:
            self.cookie.clear(response)

    async def resolve_session(self, token: Optional[str], response=None) -> Optional[AuthenticatedUser]:
        """Resolve a token to its user.

        Returns None for a missing, unknown or expired token; an expired
        session is deleted and its cookie cleared. Store failures propagate.
        """
        if not token:
            return None

        session = await self.session_repo.find_by_token(token)
        if session is None:
            if response is not None:
                self.cookie.clear(response)
            return None

        now = self.now()
        if not session.is_valid(now):
            logger.debug(f"Session {mask_token(token)} expired at {session.expires_at}")
            await self._discard(token, response)
            return None

        loaded = await self.user_repo.find_with_role(session.user_id)
        if loaded is None or not loaded[0].can_sign_in:
            logger.info(f"Session {mask_token(token)} belongs to an unavailable user; revoking")
            await self._discard(token, response)
            return None

        record, role = loaded
        await self.user_repo.touch_last_login(record.id, now)
        record.last_login_at = now
        return AuthenticatedUser.from_record(record, role)

    async def destroy_session(self, token: Optional[str], response=None) -> None:
        """Delete a session and clear its cookie. Unknown tokens are ignored."""
        if token:
            await self.session_repo.delete_by_token(token)
            logger.info(f"Session {mask_token(token)} destroyed")
        if response is not None:
            self.cookie.clear(response)

    async def destroy_all_sessions(self, user_id: str) -> int:
        count = await self.session_repo.delete_all_by_user_id(user_id)
        logger.info(f"Destroyed {count} session(s) for user {user_id}")
        return count
