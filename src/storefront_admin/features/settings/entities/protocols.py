"""Protocol interfaces for the settings feature."""

from abc import abstractmethod
from typing import Dict, List, Optional, Protocol, Sequence, runtime_checkable

from .setting import Setting, SettingInput


@runtime_checkable
class SettingRepository(Protocol):
    """Protocol for setting persistence."""

    @abstractmethod
    async def get(self, key: str) -> Optional[Setting]:
        ...

    @abstractmethod
    async def list_all(self) -> List[Setting]:
        ...

    @abstractmethod
    async def list_public(self) -> Dict[str, object]:
        """Public settings as a ``key -> value`` mapping."""
        ...

    @abstractmethod
    async def upsert(self, item: SettingInput) -> Setting:
        ...

    @abstractmethod
    async def bulk_upsert(self, items: Sequence[SettingInput]) -> List[Setting]:
        """Upsert every item in one transaction."""
        ...

    @abstractmethod
    async def delete(self, key: str) -> bool:
        ...
