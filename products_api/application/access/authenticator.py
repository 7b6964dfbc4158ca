"""
Use case: API key authentication and issuance.

Input: raw credential header values, required tiers, tiers to issue.
Output: AuthContext for authenticated requests, ApiKeyRecord for new keys.
Side effects: stamps ``last_used`` on every successful authentication;
registers issued keys.
Failure cases: UnauthenticatedError, ForbiddenError.
"""

import logging
import re
import secrets
from datetime import datetime, timezone
from typing import Callable, Iterable, Optional

from products_api.domain.access.entities import (
    ApiKeyRecord,
    AuthContext,
    KeyTier,
    mask_key,
)
from products_api.domain.access.ports import ApiKeyRegistry
from products_api.domain.errors import ForbiddenError, UnauthenticatedError

logger = logging.getLogger(__name__)

BEARER_SCHEME = re.compile(r"^bearer(?:\s+|$)", re.IGNORECASE)
ISSUED_KEY_PREFIX = "key_"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def extract_credential(header_value: Optional[str]) -> str:
    """Strip whitespace and an optional ``Bearer`` scheme from a header value.

    A bare ``Bearer`` with no token counts as no credential.

    Returns:
        The bare credential, or an empty string if nothing was supplied.
    """
    value = (header_value or "").strip()
    return BEARER_SCHEME.sub("", value, count=1).strip()


class Authenticator:
    """Checks presented credentials against the key registry.

    Keys are flat capability tokens. Any registered key authenticates;
    only PRODUCTION keys pass the tier guard.
    """

    def __init__(
        self,
        registry: ApiKeyRegistry,
        header_name: str = "x-api-key",
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        """Initialize the authenticator.

        Args:
            registry: Registry holding the known keys.
            header_name: Header clients are told to send the key in.
            clock: Source of timestamps for ``created_at``/``last_used``.
        """
        self._registry = registry
        self._header_name = header_name
        self._clock = clock

    def seed(self, keys: Iterable[str]) -> None:
        """Register the fixed startup keys, inferring tiers from their prefixes."""
        count = 0
        for key in keys:
            if self._registry.contains(key):
                continue
            self._registry.register(
                ApiKeyRecord(key=key, tier=KeyTier.from_key(key), created_at=self._clock())
            )
            count += 1
        logger.info("Seeded %d API keys.", count)

    def authenticate(self, header_value: Optional[str]) -> AuthContext:
        """Authenticate a request credential.

        Args:
            header_value: Raw header value, with or without a Bearer prefix.

        Returns:
            The key's masked prefix and tier.

        Raises:
            UnauthenticatedError: If no credential was supplied or it is unknown.
        """
        credential = extract_credential(header_value)
        if not credential:
            logger.warning("Authentication failed: no API key provided")
            raise UnauthenticatedError(
                "Authentication required",
                f"Missing API key. Please provide {self._header_name} in headers "
                "or Authorization header",
            )

        record = self._registry.touch(credential, self._clock())
        if record is None:
            logger.warning(
                "Authentication failed: invalid API key provided: %s",
                mask_key(credential),
            )
            raise UnauthenticatedError("Authentication failed", "Invalid API key")

        logger.info("Authenticated request with %s API key", record.tier.value)
        return AuthContext(key_prefix=record.masked_key, tier=record.tier)

    def require_tier(
        self, context: AuthContext, tier: KeyTier = KeyTier.PRODUCTION
    ) -> None:
        """Reject an authenticated context whose tier is not ``tier``.

        Raises:
            ForbiddenError: If the tiers differ.
        """
        if context.tier is not tier:
            logger.warning(
                "Forbidden: %s key %s used for a %s operation",
                context.tier.value,
                context.key_prefix,
                tier.value,
            )
            raise ForbiddenError(
                "Insufficient permissions",
                f"{tier.value.capitalize()} API key required for this operation",
            )

    def issue(self, tier: KeyTier = KeyTier.DEVELOPMENT) -> ApiKeyRecord:
        """Generate, register and return a new unpredictable key."""
        key = f"{ISSUED_KEY_PREFIX}{secrets.token_hex(16)}"
        while self._registry.contains(key):
            key = f"{ISSUED_KEY_PREFIX}{secrets.token_hex(16)}"
        record = ApiKeyRecord(key=key, tier=tier, created_at=self._clock())
        self._registry.register(record)
        logger.info("Issued %s API key %s", tier.value, record.masked_key)
        return record

    def list_keys(self) -> list[ApiKeyRecord]:
        """Return every registered key record."""
        return self._registry.list_records()
