"""Unit tests for CheckUniqueHandler.

Tests cover:
- Free values
- Conflicts with another account, own-id exclusion
- Whitespace trimming and None skipping
- Error message suppression (no_err_msg)
- Non-identity fields rejected before any lookup
"""

import pytest

from authmgmt.application.commands import CheckUnique
from authmgmt.application.commands.handlers import CheckUniqueHandler
from authmgmt.core.enums import ErrorCode
from authmgmt.core.errors import ConflictError, ValidationError
from authmgmt.core.result import Failure, Success
from authmgmt.domain.entities.account import SecretPair
from tests.conftest import install_pending_pair, make_settings, seed_account


@pytest.fixture
def handler(store, logger):
    settings = make_settings(identify_user_props=["email", "username", "team"])
    return CheckUniqueHandler(settings=settings, store=store, logger=logger)


@pytest.mark.unit
class TestCheckUniqueSuccess:
    """Test values that are free to use."""

    async def test_unused_value_is_unique(self, handler, store):
        await store.create({"email": "taken@example.com"})

        result = await handler.handle(CheckUnique(value={"email": "free@example.com"}))

        assert result == Success(value=None)

    async def test_own_record_does_not_conflict(self, handler, store):
        account = await store.create({"email": "mine@example.com"})

        result = await handler.handle(
            CheckUnique(value={"email": "mine@example.com"}, own_id=account.id)
        )

        assert isinstance(result, Success)

    async def test_none_values_are_skipped(self, handler, store):
        await store.create({"email": "a@example.com", "username": None})

        result = await handler.handle(CheckUnique(value={"username": None}))

        assert isinstance(result, Success)


@pytest.mark.unit
class TestCheckUniqueConflicts:
    """Test conflicting values."""

    async def test_value_held_by_another_account_conflicts(self, handler, store):
        # Arrange
        await store.create({"email": "taken@example.com", "username": "taken"})

        # Act
        result = await handler.handle(
            CheckUnique(
                value={"email": "taken@example.com", "username": "free"},
                own_id="someone-else",
            )
        )

        # Assert
        assert isinstance(result, Failure)
        error = result.error
        assert isinstance(error, ConflictError)
        assert error.code == ErrorCode.NOT_UNIQUE
        assert error.conflicting_fields == ("email",)
        assert error.details == {"email": "Already taken."}
        assert error.message == "Values already taken."

    async def test_value_is_trimmed_before_lookup(self, handler, store):
        await store.create({"email": "taken@example.com"})

        result = await handler.handle(CheckUnique(value={"email": "  taken@example.com "}))

        assert isinstance(result, Failure)
        assert result.error.conflicting_fields == ("email",)

    async def test_two_holders_conflict_even_with_own_id(self, handler, store):
        own = await store.create({"email": "a@example.com", "team": "shared"})
        await store.create({"email": "b@example.com", "team": "shared"})

        result = await handler.handle(
            CheckUnique(value={"team": "shared"}, own_id=own.id)
        )

        assert isinstance(result, Failure)

    async def test_every_conflicting_field_is_reported(self, handler, store):
        await store.create({"email": "taken@example.com", "username": "taken"})

        result = await handler.handle(
            CheckUnique(value={"email": "taken@example.com", "username": "taken"})
        )

        assert isinstance(result, Failure)
        assert set(result.error.conflicting_fields) == {"email", "username"}

    async def test_no_err_msg_suppresses_message(self, handler, store):
        await store.create({"email": "taken@example.com"})

        result = await handler.handle(
            CheckUnique(value={"email": "taken@example.com"}, no_err_msg=True)
        )

        assert isinstance(result, Failure)
        assert result.error.message == ""
        assert result.error.details == {"email": "Already taken."}


@pytest.mark.unit
class TestCheckUniqueFieldRestriction:
    """Test that only identity fields can be checked."""

    @pytest.mark.parametrize(
        "field",
        ["reset_short_token", "verify_token", "password", "is_verified"],
    )
    async def test_non_identity_field_rejected(self, handler, field):
        result = await handler.handle(CheckUnique(value={field: "123456"}))

        assert isinstance(result, Failure)
        assert isinstance(result.error, ValidationError)
        assert result.error.code == ErrorCode.BAD_INPUT
        assert result.error.field == field

    async def test_non_identity_field_rejected_even_when_none(self, handler):
        result = await handler.handle(CheckUnique(value={"reset_token": None}))

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.BAD_INPUT

    async def test_stored_short_token_is_not_matched(self, handler, store, hasher):
        # Arrange
        account = await seed_account(store, hasher)
        await install_pending_pair(
            store,
            hasher,
            account,
            SecretPair.RESET,
            short_token="123456",
            attempts=0,
            raw=True,
        )

        # Act
        result = await handler.handle(
            CheckUnique(value={"email": "other@example.com", "reset_short_token": "123456"})
        )

        # Assert
        assert isinstance(result, Failure)
        assert isinstance(result.error, ValidationError)
        assert result.error.field == "reset_short_token"
        stored = await store.get(account.id)
        assert stored.reset_short_token == "123456"
        assert stored.reset_attempts == 0
