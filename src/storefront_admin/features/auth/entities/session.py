"""Session domain entities for the auth feature.

A session binds an opaque random token to a user until a fixed expiry.
Expiry is set once at creation and never extended.
"""

import secrets
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

TOKEN_BYTES = 32


def generate_session_token() -> str:
    """Generate a 256-bit token rendered as 64 hex characters."""
    return secrets.token_hex(TOKEN_BYTES)


def mask_token(token: Optional[str]) -> str:
    """Shorten a token for log output."""
    if not token:
        return "<none>"
    if len(token) <= 8:
        return "***"
    return f"{token[:4]}...{token[-4:]}"


@dataclass(frozen=True)
class ClientMeta:
    """Client details recorded alongside a session."""

    user_agent: Optional[str] = None
    ip_address: Optional[str] = None

    @classmethod
    def from_request(cls, request) -> "ClientMeta":
        forwarded = request.headers.get("x-forwarded-for")
        if forwarded:
            ip_address = forwarded.split(",")[0].strip()
        else:
            ip_address = request.headers.get("x-real-ip") or (
                request.client.host if request.client else None
            )
        return cls(
            user_agent=request.headers.get("user-agent"),
            ip_address=ip_address,
        )


@dataclass
class Session:
    """Domain entity representing a persisted login session."""

    id: Optional[str]
    token: str
    user_id: str
    expires_at: datetime
    user_agent: Optional[str] = None
    ip_address: Optional[str] = None
    created_at: Optional[datetime] = None

    def is_valid(self, now: datetime) -> bool:
        """A session is valid strictly before its expiry."""
        return now < self.expires_at

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "expires_at": self.expires_at.isoformat(),
            "user_agent": self.user_agent,
            "ip_address": self.ip_address,
        }

    def __repr__(self) -> str:
        return f"Session(user={self.user_id}, token={mask_token(self.token)}, expires_at={self.expires_at})"
