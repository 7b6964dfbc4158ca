"""
Domain entities for the access bounded context.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

KEY_PREFIX_LENGTH = 8


class KeyTier(Enum):
    """Permission tier of an API key. Only PRODUCTION unlocks gated operations."""

    PRODUCTION = "production"
    DEVELOPMENT = "development"
    TESTING = "testing"

    @classmethod
    def from_key(cls, key: str) -> "KeyTier":
        """Infer the tier of a seeded key from its prefix."""
        if key.startswith("prod"):
            return cls.PRODUCTION
        if key.startswith("dev"):
            return cls.DEVELOPMENT
        return cls.TESTING


def mask_key(key: str) -> str:
    """Return the loggable form of a key.

    At most the first 8 characters, and never more than half the key.
    """
    return f"{key[:min(KEY_PREFIX_LENGTH, len(key) // 2)]}..."


@dataclass
class ApiKeyRecord:
    """A registered credential.

    Attributes:
        key: The opaque secret.
        tier: Permission tier fixed at issuance.
        created_at: When the key was registered.
        last_used: Time of the most recent successful authentication.
    """

    key: str
    tier: KeyTier
    created_at: datetime
    last_used: Optional[datetime] = None

    @property
    def masked_key(self) -> str:
        return mask_key(self.key)


@dataclass(frozen=True)
class AuthContext:
    """The outcome of a successful authentication, attached to a request."""

    key_prefix: str
    tier: KeyTier
