"""Protocol interfaces for the auth feature.

Repositories report absence with ``None``/``False`` and surface store
failures as ``DatabaseError``.
"""

from abc import abstractmethod
from datetime import datetime
from typing import Any, Dict, Optional, Protocol, Tuple, runtime_checkable

from ...permissions.entities import Role
from .session import Session
from .user import UserRecord


@runtime_checkable
class SessionRepository(Protocol):
    """Protocol for session persistence."""

    @abstractmethod
    async def create(self, session: Session) -> Session:
        """Persist a new session row."""
        ...

    @abstractmethod
    async def find_by_token(self, token: str) -> Optional[Session]:
        """Find a session by token regardless of expiry."""
        ...

    @abstractmethod
    async def delete_by_token(self, token: str) -> bool:
        """Delete a session; deleting a missing token is not an error."""
        ...

    @abstractmethod
    async def delete_all_by_user_id(self, user_id: str) -> int:
        """Delete every session of a user and return how many went."""
        ...


@runtime_checkable
class UserRepository(Protocol):
    """Protocol for user persistence."""

    @abstractmethod
    async def find_by_id(self, user_id: str) -> Optional[UserRecord]:
        ...

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[UserRecord]:
        ...

    @abstractmethod
    async def find_by_phone(self, phone: str) -> Optional[UserRecord]:
        ...

    @abstractmethod
    async def find_with_role(self, user_id: str) -> Optional[Tuple[UserRecord, Optional[Role]]]:
        """Load a user together with its role and resolved grants."""
        ...

    @abstractmethod
    async def create(self, user: UserRecord) -> UserRecord:
        ...

    @abstractmethod
    async def update(self, user_id: str, changes: Dict[str, Any]) -> Optional[UserRecord]:
        ...

    @abstractmethod
    async def touch_last_login(self, user_id: str, when: datetime) -> None:
        ...

    @abstractmethod
    async def update_role(self, user_id: str, role_id: str) -> bool:
        ...

    @abstractmethod
    async def update_password(self, user_id: str, password_hash: str) -> bool:
        """Replace the whole credential."""
        ...

    @abstractmethod
    async def soft_delete(self, user_id: str, when: datetime) -> bool:
        """Mark the user deleted and inactive."""
        ...
