"""Session cookie handling."""

import logging
from typing import Optional

from .entities import Session

logger = logging.getLogger(__name__)


class SessionCookie:
    """Reads, sets and clears the HTTP-only session cookie."""

    def __init__(self, name: str = "session_token", secure: bool = True):
        self.name = name
        self.secure = secure

    @classmethod
    def from_settings(cls, settings) -> "SessionCookie":
        return cls(name=settings.session_cookie_name, secure=settings.cookie_secure)

    def read(self, request) -> Optional[str]:
        return request.cookies.get(self.name) or None

    def set(self, response, session: Session) -> None:
        response.set_cookie(
            key=self.name,
            value=session.token,
            expires=session.expires_at,
            path="/",
            secure=self.secure,
            httponly=True,
            samesite="lax",
        )

    def clear(self, response) -> None:
        response.delete_cookie(
            key=self.name,
            path="/",
            secure=self.secure,
            httponly=True,
            samesite="lax",
        )
