"""Unit tests for AuthManagementService.

Tests cover:
- dispatch(): routing every command kind, options, unknown command
- create(): wire parsing (camelCase aliases), INVALID_ACTION, BAD_INPUT
"""

import pytest

from authmgmt.application.commands import CheckUnique, GetOptions, SendResetPassword
from authmgmt.core.config import AuthManagementSettings
from authmgmt.core.enums import ErrorCode
from authmgmt.core.result import Failure, Success
from tests.conftest import DEFAULT_EMAIL, DEFAULT_PASSWORD, build_service, seed_account


@pytest.fixture
def service(store, hasher, notifier, logger):
    return build_service(store, hasher, notifier, logger, reset_attempts=2)


@pytest.mark.unit
class TestDispatch:
    """Test command dispatch."""

    async def test_options_returns_active_settings(self, service):
        result = await service.dispatch(GetOptions())

        assert isinstance(result, Success)
        assert isinstance(result.value, AuthManagementSettings)
        assert result.value.reset_attempts == 2

    async def test_routes_send_reset_password(self, service, store, hasher, notifier):
        await seed_account(store, hasher)

        result = await service.dispatch(SendResetPassword(identify={"email": DEFAULT_EMAIL}))

        assert isinstance(result, Success)
        assert notifier.notify.call_args.args[0] == "sendResetPwd"

    async def test_routes_check_unique(self, service):
        result = await service.dispatch(CheckUnique(value={"email": "free@example.com"}))

        assert result == Success(value=None)

    async def test_unknown_command_is_invalid_action(self, service):
        result = await service.dispatch(object())

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.INVALID_ACTION


@pytest.mark.unit
class TestCreate:
    """Test wire request handling."""

    @pytest.mark.parametrize(
        "action",
        ["unknown", None, "SENDRESETPWD", ["sendResetPwd"], {"a": 1}, 3],
    )
    async def test_unknown_action(self, service, action):
        result = await service.create({"action": action, "value": {}})

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.INVALID_ACTION
        assert result.error.field == "action"

    async def test_missing_action(self, service):
        result = await service.create({"value": {}})

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.INVALID_ACTION

    async def test_wrong_value_shape_is_bad_input(self, service):
        result = await service.create({"action": "resetPwdLong", "value": "just-a-token"})

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.BAD_INPUT
        assert result.error.details

    async def test_missing_password_is_bad_input(self, service):
        result = await service.create(
            {"action": "resetPwdShort", "value": {"token": "123456", "user": {}}}
        )

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.BAD_INPUT
        assert any("password" in location for location in result.error.details)

    async def test_options_action(self, service):
        result = await service.create({"action": "options"})

        assert isinstance(result, Success)
        assert isinstance(result.value, AuthManagementSettings)

    async def test_notifier_options_alias_passed_through(
        self, service, store, hasher, notifier
    ):
        await seed_account(store, hasher)

        result = await service.create(
            {
                "action": "sendResetPwd",
                "value": {"email": DEFAULT_EMAIL},
                "notifierOptions": {"lang": "de"},
            }
        )

        assert isinstance(result, Success)
        assert notifier.notify.call_args.args[2] == {"lang": "de"}

    async def test_check_unique_own_id_and_meta_aliases(self, service, store, hasher):
        account = await seed_account(store, hasher)

        own = await service.create(
            {"action": "checkUnique", "value": {"email": DEFAULT_EMAIL}, "ownId": account.id}
        )
        other = await service.create(
            {
                "action": "checkUnique",
                "value": {"email": DEFAULT_EMAIL},
                "meta": {"noErrMsg": True},
            }
        )

        assert own == Success(value=None)
        assert isinstance(other, Failure)
        assert other.error.code == ErrorCode.NOT_UNIQUE
        assert other.error.message == ""

    async def test_check_unique_rejects_secret_field(self, service, store, hasher):
        await seed_account(store, hasher)

        result = await service.create(
            {"action": "checkUnique", "value": {"reset_short_token": "123456"}}
        )

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.BAD_INPUT
        assert result.error.field == "reset_short_token"

    async def test_password_change_old_password_alias(self, service, store, hasher):
        await seed_account(store, hasher)

        result = await service.create(
            {
                "action": "passwordChange",
                "value": {
                    "user": {"email": DEFAULT_EMAIL},
                    "oldPassword": DEFAULT_PASSWORD,
                    "password": "NewPass456!",
                },
            }
        )

        assert isinstance(result, Success)
