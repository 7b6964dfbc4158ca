"""
Tests for the access context: key tiers, the registry and the authenticator.
"""

import logging
from datetime import datetime, timedelta, timezone

import pytest

from products_api.application.access.authenticator import (
    Authenticator,
    extract_credential,
)
from products_api.domain.access.entities import ApiKeyRecord, KeyTier, mask_key
from products_api.domain.errors import ErrorKind, ForbiddenError, UnauthenticatedError
from products_api.infrastructure.access.key_registry import InMemoryApiKeyRegistry

from tests.conftest import DEV_KEY, PROD_KEY, TEST_KEY

T0 = datetime(2024, 1, 1, tzinfo=timezone.utc)


class FakeClock:
    """Deterministic clock advancing one second per call."""

    def __init__(self) -> None:
        self.now = T0

    def __call__(self) -> datetime:
        self.now += timedelta(seconds=1)
        return self.now


@pytest.fixture
def authenticator() -> Authenticator:
    auth = Authenticator(InMemoryApiKeyRegistry(), clock=FakeClock())
    auth.seed([PROD_KEY, DEV_KEY, TEST_KEY])
    return auth


class TestKeyTier:
    """Tests for KeyTier and key masking."""

    @pytest.mark.parametrize(
        "key, tier",
        [
            (PROD_KEY, KeyTier.PRODUCTION),
            (DEV_KEY, KeyTier.DEVELOPMENT),
            (TEST_KEY, KeyTier.TESTING),
            ("anything_else", KeyTier.TESTING),
        ],
    )
    def test_from_key(self, key: str, tier: KeyTier) -> None:
        assert KeyTier.from_key(key) is tier

    def test_mask_key(self) -> None:
        assert mask_key(PROD_KEY) == "prod_key..."

    @pytest.mark.parametrize(
        "key, masked",
        [("abcdefgh", "abcd..."), ("short", "sh..."), ("x", "..."), ("", "...")],
    )
    def test_mask_key_never_reveals_short_keys(self, key: str, masked: str) -> None:
        """Short credentials keep at most half their characters."""
        assert mask_key(key) == masked


class TestExtractCredential:
    """Tests for extract_credential."""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            (None, ""),
            ("", ""),
            ("  abc  ", "abc"),
            ("Bearer abc", "abc"),
            ("bearer abc", "abc"),
            ("BEARER   abc ", "abc"),
            ("Bearer ", ""),
            ("Bearer", ""),
            ("  bearer\t ", ""),
            ("Bearertoken", "Bearertoken"),
        ],
    )
    def test_extract(self, raw, expected: str) -> None:
        assert extract_credential(raw) == expected


class TestInMemoryApiKeyRegistry:
    """Tests for InMemoryApiKeyRegistry."""

    def test_touch_stamps_last_used(self) -> None:
        registry = InMemoryApiKeyRegistry()
        registry.register(ApiKeyRecord(key="k", tier=KeyTier.TESTING, created_at=T0))
        record = registry.touch("k", T0 + timedelta(minutes=5))
        assert record is not None
        assert record.last_used == T0 + timedelta(minutes=5)
        assert registry.list_records()[0].last_used == record.last_used

    def test_touch_unknown_key(self) -> None:
        assert InMemoryApiKeyRegistry().touch("nope", T0) is None

    def test_callers_receive_copies(self) -> None:
        registry = InMemoryApiKeyRegistry()
        registry.register(ApiKeyRecord(key="k", tier=KeyTier.TESTING, created_at=T0))
        registry.list_records()[0].tier = KeyTier.PRODUCTION
        assert registry.list_records()[0].tier is KeyTier.TESTING


class TestAuthenticator:
    """Tests for Authenticator."""

    def test_valid_key_authenticates(self, authenticator: Authenticator) -> None:
        context = authenticator.authenticate(PROD_KEY)
        assert context.tier is KeyTier.PRODUCTION
        assert context.key_prefix == "prod_key..."

    def test_bearer_header_authenticates(self, authenticator: Authenticator) -> None:
        assert authenticator.authenticate(f"Bearer {DEV_KEY}").tier is KeyTier.DEVELOPMENT

    def test_missing_key(self, authenticator: Authenticator) -> None:
        with pytest.raises(UnauthenticatedError) as exc_info:
            authenticator.authenticate(None)
        assert exc_info.value.kind is ErrorKind.UNAUTHENTICATED
        assert exc_info.value.message == "Authentication required"
        assert exc_info.value.errors == [
            "Missing API key. Please provide x-api-key in headers or Authorization header"
        ]

    def test_bare_bearer_scheme_is_a_missing_key(self, authenticator: Authenticator) -> None:
        with pytest.raises(UnauthenticatedError) as exc_info:
            authenticator.authenticate("Bearer ")
        assert exc_info.value.message == "Authentication required"

    def test_unknown_short_key_is_not_logged_in_full(
        self, authenticator: Authenticator, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.WARNING):
            with pytest.raises(UnauthenticatedError):
                authenticator.authenticate("s3cr3t")
        assert "s3cr3t" not in caplog.text
        assert "s3c..." in caplog.text

    def test_unknown_key(self, authenticator: Authenticator) -> None:
        with pytest.raises(UnauthenticatedError) as exc_info:
            authenticator.authenticate("prod_key_forged")
        assert exc_info.value.message == "Authentication failed"
        assert exc_info.value.errors == ["Invalid API key"]

    def test_last_used_advances(self, authenticator: Authenticator) -> None:
        authenticator.authenticate(TEST_KEY)
        first = _record(authenticator, TEST_KEY).last_used
        authenticator.authenticate(TEST_KEY)
        second = _record(authenticator, TEST_KEY).last_used
        assert first is not None and second is not None
        assert second > first

    def test_require_tier(self, authenticator: Authenticator) -> None:
        authenticator.require_tier(authenticator.authenticate(PROD_KEY))
        with pytest.raises(ForbiddenError) as exc_info:
            authenticator.require_tier(authenticator.authenticate(DEV_KEY))
        assert exc_info.value.status_code == 403
        assert exc_info.value.message == "Insufficient permissions"
        assert exc_info.value.errors == ["Production API key required for this operation"]

    def test_issue_registers_unpredictable_keys(self, authenticator: Authenticator) -> None:
        first = authenticator.issue(KeyTier.PRODUCTION)
        second = authenticator.issue()
        assert first.key != second.key
        assert first.key.startswith("key_")
        assert len(first.key) == len("key_") + 32
        assert second.tier is KeyTier.DEVELOPMENT
        assert authenticator.authenticate(first.key).tier is KeyTier.PRODUCTION

    def test_seed_is_idempotent(self, authenticator: Authenticator) -> None:
        authenticator.seed([PROD_KEY])
        assert len(authenticator.list_keys()) == 3


def _record(authenticator: Authenticator, key: str) -> ApiKeyRecord:
    return next(r for r in authenticator.list_keys() if r.key == key)
