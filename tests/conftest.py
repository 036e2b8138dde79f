"""Pytest configuration and shared test helpers.

This configuration ensures:
1. Each test gets a fresh in-memory store (no shared account state)
2. Notifier and logger are mocks, so calls can be asserted
3. One real bcrypt hasher at the minimum cost factor is shared by the session
4. Settings are built explicitly, never from the process environment cache
"""

from datetime import UTC, datetime, timedelta
from typing import Any
from unittest.mock import AsyncMock, Mock

import pytest

from authmgmt.application.service import AuthManagementService
from authmgmt.core.config import AuthManagementSettings, get_settings
from authmgmt.domain.entities.account import Account, SecretPair
from authmgmt.domain.token_codec import TokenCodec
from authmgmt.infrastructure.persistence import InMemoryAccountStore
from authmgmt.infrastructure.security import BcryptSecretHasher

# Lowest cost factor the hasher accepts
TEST_BCRYPT_ROUNDS = 10

DEFAULT_EMAIL = "user@example.com"
DEFAULT_PASSWORD = "OldPass123!"


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, isolated)")
    config.addinivalue_line(
        "markers", "integration: Integration tests (several real components together)"
    )


# =============================================================================
# Test Helpers
# =============================================================================


def make_settings(**overrides: Any) -> AuthManagementSettings:
    """Build settings for a test with the fast bcrypt cost."""
    overrides.setdefault("bcrypt_rounds", TEST_BCRYPT_ROUNDS)
    return AuthManagementSettings(**overrides)


async def seed_account(
    store: InMemoryAccountStore,
    hasher: BcryptSecretHasher,
    *,
    identity: dict[str, Any] | None = None,
    password: str | None = DEFAULT_PASSWORD,
    is_verified: bool = True,
    **credentials: Any,
) -> Account:
    """Insert an account with a hashed password."""
    password_hash = await hasher.hash(password) if password is not None else None
    return await store.create(
        identity or {"email": DEFAULT_EMAIL},
        password_hash=password_hash,
        is_verified=is_verified,
        **credentials,
    )


async def install_pending_pair(
    store: InMemoryAccountStore,
    hasher: BcryptSecretHasher,
    account: Account,
    pair: SecretPair,
    *,
    secret: str = "S1",
    short_token: str = "123456",
    expires_in: timedelta = timedelta(seconds=1000),
    attempts: int | None = None,
    raw: bool = False,
) -> str:
    """Store a pending secret pair with known raw values.

    Returns:
        The raw long token (``<id>___<secret>``).
    """
    token = TokenCodec().compose_long_token(account.id, secret)
    changes: dict[str, Any] = {
        pair.token_field: token if raw else await hasher.hash(token),
        pair.short_token_field: short_token if raw else await hasher.hash(short_token),
        pair.expires_field: datetime.now(UTC) + expires_in,
    }
    if pair is SecretPair.RESET:
        changes["reset_attempts"] = attempts
    await store.patch(account.id, changes)
    return token


def build_service(
    store: InMemoryAccountStore,
    hasher: BcryptSecretHasher,
    notifier: AsyncMock,
    logger: Mock,
    **overrides: Any,
) -> AuthManagementService:
    """Wire the service over test collaborators."""
    return AuthManagementService(
        settings=make_settings(**overrides),
        store=store,
        hasher=hasher,
        notifier=notifier,
        logger=logger,
    )


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture(scope="session")
def hasher() -> BcryptSecretHasher:
    return BcryptSecretHasher(cost_factor=TEST_BCRYPT_ROUNDS)


@pytest.fixture
def store() -> InMemoryAccountStore:
    return InMemoryAccountStore()


@pytest.fixture
def notifier() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def logger() -> Mock:
    return Mock()


@pytest.fixture
def settings() -> AuthManagementSettings:
    return make_settings()


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Drop cached settings so environment patches take effect."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
