"""Unit tests for the password reset handlers.

Tests cover:
- SendResetPasswordHandler:
    - hashed pair + attempt budget persisted, raw tokens notified
    - notify-before-persist ordering
    - longest configured long token still fits bcrypt
    - verified-only gate and its override
    - ambiguous identity
    - token reuse while more than half the window remains
- ResetPasswordHandler:
    - long and short token success
    - notifier failure after commit keeps the reset
    - attempts decrement, then invalidation
    - missing / expired pair, unverified account
"""

from datetime import UTC, datetime, timedelta

import pytest

from authmgmt.application.account_lookup import AccountLookup
from authmgmt.application.commands import (
    ResetPasswordLong,
    ResetPasswordShort,
    SendResetPassword,
)
from authmgmt.application.commands.handlers import (
    ResetPasswordHandler,
    SendResetPasswordHandler,
)
from authmgmt.application.secret_issuer import SecretIssuer
from authmgmt.core.enums import ErrorCode
from authmgmt.core.result import Failure, Success
from authmgmt.domain.entities.account import SecretPair, sanitize_account
from authmgmt.domain.token_codec import TokenCodec
from authmgmt.domain.verification import VerificationEngine
from tests.conftest import (
    DEFAULT_EMAIL,
    install_pending_pair,
    make_settings,
    seed_account,
)

IDENTIFY = {"email": DEFAULT_EMAIL}
NEW_PASSWORD = "NewPass456!"


# =============================================================================
# Test Helpers
# =============================================================================


def create_send_handler(store, hasher, notifier, logger, **overrides):
    settings = make_settings(**overrides)
    codec = TokenCodec()
    return SendResetPasswordHandler(
        settings=settings,
        lookup=AccountLookup(store=store, codec=codec),
        issuer=SecretIssuer(settings=settings, codec=codec, hasher=hasher),
        codec=codec,
        store=store,
        notifier=notifier,
        logger=logger,
        sanitize=sanitize_account,
    )


def create_reset_handler(store, hasher, notifier, logger, **overrides):
    settings = make_settings(**overrides)
    return ResetPasswordHandler(
        settings=settings,
        lookup=AccountLookup(store=store, codec=TokenCodec()),
        engine=VerificationEngine(store=store, hasher=hasher, logger=logger),
        hasher=hasher,
        store=store,
        notifier=notifier,
        logger=logger,
        sanitize=sanitize_account,
    )


# =============================================================================
# SendResetPasswordHandler
# =============================================================================


@pytest.mark.unit
class TestSendResetPassword:
    """Test issuing a reset pair."""

    async def test_persists_hashed_pair_and_attempt_budget(
        self, store, hasher, notifier, logger
    ):
        # Arrange
        account = await seed_account(store, hasher)
        handler = create_send_handler(store, hasher, notifier, logger, reset_attempts=3)

        # Act
        result = await handler.handle(
            SendResetPassword(identify=IDENTIFY, notifier_options={"lang": "en"})
        )

        # Assert
        assert isinstance(result, Success)
        event, view, options = notifier.notify.call_args.args
        assert event == "sendResetPwd"
        assert options == {"lang": "en"}
        assert view["reset_token"].startswith(f"{account.id}___")
        assert len(view["reset_token"]) == len(account.id) + 3 + 30
        assert view["reset_short_token"].isdigit()

        stored = await store.get(account.id)
        assert stored.reset_attempts == 3
        assert await hasher.compare(view["reset_token"], stored.reset_token)
        assert await hasher.compare(view["reset_short_token"], stored.reset_short_token)
        remaining = stored.reset_expires - datetime.now(UTC)
        assert timedelta(hours=1, minutes=59) < remaining <= timedelta(hours=2)

    async def test_notifier_failure_leaves_store_untouched(
        self, store, hasher, notifier, logger
    ):
        # Arrange
        account = await seed_account(store, hasher)
        notifier.notify.side_effect = RuntimeError("smtp down")
        handler = create_send_handler(store, hasher, notifier, logger)

        # Act / Assert
        with pytest.raises(RuntimeError, match="smtp down"):
            await handler.handle(SendResetPassword(identify=IDENTIFY))

        stored = await store.get(account.id)
        assert stored.reset_token is None

    async def test_longest_token_setting_hashes(self, store, hasher, notifier, logger):
        account = await seed_account(store, hasher)
        handler = create_send_handler(store, hasher, notifier, logger, long_token_len=16)

        result = await handler.handle(SendResetPassword(identify=IDENTIFY))

        assert isinstance(result, Success)
        _, view, _ = notifier.notify.call_args.args
        assert len(view["reset_token"].encode("utf-8")) <= 72
        stored = await store.get(account.id)
        assert await hasher.compare(view["reset_token"], stored.reset_token)

    async def test_unverified_account_rejected(self, store, hasher, notifier, logger):
        await seed_account(store, hasher, is_verified=False)
        handler = create_send_handler(store, hasher, notifier, logger)

        result = await handler.handle(SendResetPassword(identify=IDENTIFY))

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.ACCOUNT_NOT_VERIFIED
        notifier.notify.assert_not_awaited()

    async def test_unverified_account_allowed_when_check_skipped(
        self, store, hasher, notifier, logger
    ):
        await seed_account(store, hasher, is_verified=False)
        handler = create_send_handler(
            store, hasher, notifier, logger, skip_is_verified_check=True
        )

        result = await handler.handle(SendResetPassword(identify=IDENTIFY))

        assert isinstance(result, Success)

    async def test_ambiguous_identity_rejected(self, store, hasher, notifier, logger):
        # Arrange: two accounts share a configured identity field
        await seed_account(store, hasher, identity={"email": "a@example.com", "team": "x"})
        await seed_account(store, hasher, identity={"email": "b@example.com", "team": "x"})
        handler = create_send_handler(
            store, hasher, notifier, logger, identify_user_props=["email", "team"]
        )

        # Act
        result = await handler.handle(SendResetPassword(identify={"team": "x"}))

        # Assert
        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.AMBIGUOUS_OR_MISSING_ACCOUNT
        assert result.error.details == {"matches": "many"}


@pytest.mark.unit
class TestSendResetPasswordReuse:
    """Test the reset token reuse policy."""

    async def test_live_raw_token_is_resent_unchanged(
        self, store, hasher, notifier, logger
    ):
        # Arrange: more than half of a 2h window left
        account = await seed_account(store, hasher)
        token = await install_pending_pair(
            store, hasher, account, SecretPair.RESET,
            expires_in=timedelta(hours=1, minutes=30), raw=True,
        )
        before = await store.get(account.id)
        handler = create_send_handler(
            store, hasher, notifier, logger, reuse_reset_token=True
        )

        # Act
        result = await handler.handle(SendResetPassword(identify=IDENTIFY))

        # Assert
        assert isinstance(result, Success)
        after = await store.get(account.id)
        assert after.reset_token == before.reset_token == token
        assert after.reset_expires == before.reset_expires
        _, view, _ = notifier.notify.call_args.args
        assert view["reset_token"] == token

    async def test_half_spent_token_is_rotated(self, store, hasher, notifier, logger):
        account = await seed_account(store, hasher)
        token = await install_pending_pair(
            store, hasher, account, SecretPair.RESET,
            expires_in=timedelta(minutes=30), raw=True,
        )
        handler = create_send_handler(
            store, hasher, notifier, logger, reuse_reset_token=True
        )

        result = await handler.handle(SendResetPassword(identify=IDENTIFY))

        assert isinstance(result, Success)
        after = await store.get(account.id)
        assert after.reset_token != token
        # Raw storage under the reuse policy
        _, view, _ = notifier.notify.call_args.args
        assert after.reset_token == view["reset_token"]

    async def test_hashed_token_is_never_reused(self, store, hasher, notifier, logger):
        account = await seed_account(store, hasher)
        await install_pending_pair(
            store, hasher, account, SecretPair.RESET, expires_in=timedelta(hours=2)
        )
        before = await store.get(account.id)
        handler = create_send_handler(
            store, hasher, notifier, logger, reuse_reset_token=True
        )

        await handler.handle(SendResetPassword(identify=IDENTIFY))

        after = await store.get(account.id)
        assert after.reset_token != before.reset_token


# =============================================================================
# ResetPasswordHandler
# =============================================================================


@pytest.mark.unit
class TestResetPasswordSuccess:
    """Test successful password resets."""

    async def test_long_token_resets_password_and_clears_pair(
        self, store, hasher, notifier, logger
    ):
        # Arrange
        account = await seed_account(store, hasher)
        token = await install_pending_pair(
            store, hasher, account, SecretPair.RESET, secret="S1", attempts=3
        )
        handler = create_reset_handler(store, hasher, notifier, logger)

        # Act
        result = await handler.handle(
            ResetPasswordLong(token=f"{account.id}___S1", password=NEW_PASSWORD)
        )

        # Assert
        assert token == f"{account.id}___S1"
        assert isinstance(result, Success)
        stored = await store.get(account.id)
        assert await hasher.compare(NEW_PASSWORD, stored.password_hash)
        assert stored.reset_token is None
        assert stored.reset_short_token is None
        assert stored.reset_expires is None
        assert stored.reset_attempts is None
        notifier.notify.assert_awaited_once_with("resetPwd", result.value, {})

    async def test_short_token_resets_password(self, store, hasher, notifier, logger):
        account = await seed_account(store, hasher)
        await install_pending_pair(
            store, hasher, account, SecretPair.RESET, short_token="246810"
        )
        handler = create_reset_handler(store, hasher, notifier, logger)

        result = await handler.handle(
            ResetPasswordShort(token="246810", identify=IDENTIFY, password=NEW_PASSWORD)
        )

        assert isinstance(result, Success)
        stored = await store.get(account.id)
        assert await hasher.compare(NEW_PASSWORD, stored.password_hash)

    async def test_notifier_failure_keeps_committed_reset(
        self, store, hasher, notifier, logger
    ):
        # Arrange
        account = await seed_account(store, hasher)
        token = await install_pending_pair(store, hasher, account, SecretPair.RESET)
        notifier.notify.side_effect = RuntimeError("smtp down")
        handler = create_reset_handler(store, hasher, notifier, logger)

        # Act
        with pytest.raises(RuntimeError, match="smtp down"):
            await handler.handle(ResetPasswordLong(token=token, password=NEW_PASSWORD))

        # Assert: the pair stays consumed and the new password stays set
        stored = await store.get(account.id)
        assert stored.reset_token is None
        assert stored.reset_short_token is None
        assert stored.reset_expires is None
        assert await hasher.compare(NEW_PASSWORD, stored.password_hash)

        retry = await handler.handle(ResetPasswordLong(token=token, password="Other789!"))
        assert retry.error.code == ErrorCode.MISSING_TOKEN

    async def test_unverified_account_allowed_when_check_skipped(
        self, store, hasher, notifier, logger
    ):
        account = await seed_account(store, hasher, is_verified=False)
        token = await install_pending_pair(store, hasher, account, SecretPair.RESET)
        handler = create_reset_handler(
            store, hasher, notifier, logger, skip_is_verified_check=True
        )

        result = await handler.handle(ResetPasswordLong(token=token, password=NEW_PASSWORD))

        assert isinstance(result, Success)


@pytest.mark.unit
class TestResetPasswordFailures:
    """Test rejected password resets."""

    async def test_nothing_pending_returns_missing_token(
        self, store, hasher, notifier, logger
    ):
        account = await seed_account(store, hasher)
        handler = create_reset_handler(store, hasher, notifier, logger)

        result = await handler.handle(
            ResetPasswordLong(token=f"{account.id}___S1", password=NEW_PASSWORD)
        )

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.MISSING_TOKEN

    async def test_expired_pair_rejects_correct_token(
        self, store, hasher, notifier, logger
    ):
        # Arrange
        account = await seed_account(store, hasher)
        token = await install_pending_pair(
            store, hasher, account, SecretPair.RESET, expires_in=timedelta(seconds=-1)
        )
        handler = create_reset_handler(store, hasher, notifier, logger)

        # Act
        result = await handler.handle(ResetPasswordLong(token=token, password=NEW_PASSWORD))

        # Assert
        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.TOKEN_EXPIRED
        stored = await store.get(account.id)
        assert await hasher.compare("OldPass123!", stored.password_hash)

    async def test_unverified_account_rejected(self, store, hasher, notifier, logger):
        account = await seed_account(store, hasher, is_verified=False)
        token = await install_pending_pair(store, hasher, account, SecretPair.RESET)
        handler = create_reset_handler(store, hasher, notifier, logger)

        result = await handler.handle(ResetPasswordLong(token=token, password=NEW_PASSWORD))

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.ACCOUNT_NOT_VERIFIED

    async def test_attempts_decrement_then_invalidate(
        self, store, hasher, notifier, logger
    ):
        # Arrange
        account = await seed_account(store, hasher)
        await install_pending_pair(store, hasher, account, SecretPair.RESET, attempts=2)
        handler = create_reset_handler(store, hasher, notifier, logger)
        wrong = ResetPasswordShort(token="000000", identify=IDENTIFY, password=NEW_PASSWORD)

        # Act / Assert
        first = await handler.handle(wrong)
        assert first.error.code == ErrorCode.INCORRECT_TOKEN
        assert (await store.get(account.id)).reset_attempts == 1

        second = await handler.handle(wrong)
        assert second.error.code == ErrorCode.INCORRECT_TOKEN
        assert (await store.get(account.id)).reset_attempts == 0

        third = await handler.handle(wrong)
        assert third.error.code == ErrorCode.INVALIDATED_TOKEN
        stored = await store.get(account.id)
        assert stored.reset_token is None
        assert stored.reset_attempts is None

        fourth = await handler.handle(wrong)
        assert fourth.error.code == ErrorCode.MISSING_TOKEN
        notifier.notify.assert_not_awaited()

    async def test_zero_attempts_mismatch_invalidates(
        self, store, hasher, notifier, logger
    ):
        account = await seed_account(store, hasher)
        await install_pending_pair(store, hasher, account, SecretPair.RESET, attempts=0)
        handler = create_reset_handler(store, hasher, notifier, logger)

        result = await handler.handle(
            ResetPasswordLong(token=f"{account.id}___wrong", password=NEW_PASSWORD)
        )

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.INVALIDATED_TOKEN
        assert (await store.get(account.id)).reset_token is None

    async def test_ambiguous_short_identity_rejected(
        self, store, hasher, notifier, logger
    ):
        await seed_account(store, hasher, identity={"email": "a@example.com", "team": "x"})
        await seed_account(store, hasher, identity={"email": "b@example.com", "team": "x"})
        handler = create_reset_handler(
            store, hasher, notifier, logger, identify_user_props=["email", "team"]
        )

        result = await handler.handle(
            ResetPasswordShort(token="123456", identify={"team": "x"}, password=NEW_PASSWORD)
        )

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.AMBIGUOUS_OR_MISSING_ACCOUNT
