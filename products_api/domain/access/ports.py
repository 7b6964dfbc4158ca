"""
Port interfaces (ABCs) for the access bounded context.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from products_api.domain.access.entities import ApiKeyRecord


class ApiKeyRegistry(ABC):
    """Port for the process-lifetime API key registry."""

    @abstractmethod
    def touch(self, key: str, used_at: datetime) -> Optional[ApiKeyRecord]:
        """Look a key up by exact match and stamp its last use.

        Returns:
            A copy of the updated record, or None if the key is unknown.
        """
        raise NotImplementedError

    @abstractmethod
    def register(self, record: ApiKeyRecord) -> None:
        """Add a record to the registry."""
        raise NotImplementedError

    @abstractmethod
    def contains(self, key: str) -> bool:
        """Return True if the key is registered."""
        raise NotImplementedError

    @abstractmethod
    def list_records(self) -> list[ApiKeyRecord]:
        """Return copies of every record, in registration order."""
        raise NotImplementedError
