"""Credential management service.

Single entry point for every credential flow. Commands are dispatched over
the ``AuthManagementCommand`` tagged union; wire requests are validated by
the pydantic request models first.

Usage:
    service = AuthManagementService(
        settings=get_settings(),
        store=store,
        hasher=BcryptSecretHasher(),
        notifier=notifier,
        logger=logger,
    )

    result = await service.dispatch(SendResetPassword(identify={"email": email}))

    result = await service.create(
        {"action": "resetPwdLong", "value": {"token": token, "password": password}}
    )
"""

from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError as RequestValidationError

from authmgmt.application.account_lookup import AccountLookup
from authmgmt.application.commands import (
    AuthManagementCommand,
    CheckUnique,
    GetOptions,
    IdentityChange,
    PasswordChange,
    ResendVerifySignup,
    ResetPasswordLong,
    ResetPasswordShort,
    SendResetPassword,
    VerifySignupLong,
    VerifySignupSetPasswordLong,
    VerifySignupSetPasswordShort,
    VerifySignupShort,
)
from authmgmt.application.commands.handlers import (
    CheckUniqueHandler,
    IdentityChangeHandler,
    PasswordChangeHandler,
    ResendVerifySignupHandler,
    ResetPasswordHandler,
    SendResetPasswordHandler,
    VerifySignupHandler,
)
from authmgmt.application.secret_issuer import SecretIssuer
from authmgmt.core.config import AuthManagementSettings
from authmgmt.core.enums import ErrorCode
from authmgmt.core.errors import DomainError, ValidationError
from authmgmt.core.result import Failure, Result, Success
from authmgmt.domain.entities.account import sanitize_account
from authmgmt.domain.protocols import (
    AccountStore,
    LoggerProtocol,
    NotifierProtocol,
    Sanitizer,
    SecretHasherProtocol,
)
from authmgmt.domain.token_codec import TokenCodec
from authmgmt.domain.verification import VerificationEngine
from authmgmt.schemas.requests import ACTIONS, parse_request


class AuthManagementService:
    """Dispatch credential commands to their handlers.

    Results:
        - checkUnique: Success(None)
        - options: Success(settings)
        - every other flow: Success(sanitized account)
    """

    def __init__(
        self,
        settings: AuthManagementSettings,
        store: AccountStore,
        hasher: SecretHasherProtocol,
        notifier: NotifierProtocol,
        logger: LoggerProtocol,
        sanitize: Sanitizer = sanitize_account,
    ) -> None:
        """Wire the handlers from the injected collaborators.

        Args:
            settings: Active settings.
            store: Account store.
            hasher: Secret hasher (passwords, and tokens unless stored raw).
            notifier: Outbound notifier.
            logger: Structured logger.
            sanitize: Account sanitizer applied to every returned view.
        """
        self._settings = settings
        self._logger = logger

        codec = TokenCodec()
        lookup = AccountLookup(store=store, codec=codec)
        engine = VerificationEngine(store=store, hasher=hasher, logger=logger)
        issuer = SecretIssuer(settings=settings, codec=codec, hasher=hasher)

        self._check_unique = CheckUniqueHandler(
            settings=settings, store=store, logger=logger
        )
        self._resend_verify_signup = ResendVerifySignupHandler(
            settings=settings,
            lookup=lookup,
            issuer=issuer,
            store=store,
            notifier=notifier,
            logger=logger,
            sanitize=sanitize,
        )
        self._verify_signup = VerifySignupHandler(
            settings=settings,
            lookup=lookup,
            engine=engine,
            hasher=hasher,
            store=store,
            notifier=notifier,
            logger=logger,
            sanitize=sanitize,
        )
        self._send_reset_password = SendResetPasswordHandler(
            settings=settings,
            lookup=lookup,
            issuer=issuer,
            codec=codec,
            store=store,
            notifier=notifier,
            logger=logger,
            sanitize=sanitize,
        )
        self._reset_password = ResetPasswordHandler(
            settings=settings,
            lookup=lookup,
            engine=engine,
            hasher=hasher,
            store=store,
            notifier=notifier,
            logger=logger,
            sanitize=sanitize,
        )
        self._password_change = PasswordChangeHandler(
            settings=settings,
            lookup=lookup,
            hasher=hasher,
            store=store,
            notifier=notifier,
            logger=logger,
            sanitize=sanitize,
        )
        self._identity_change = IdentityChangeHandler(
            settings=settings,
            lookup=lookup,
            hasher=hasher,
            issuer=issuer,
            store=store,
            notifier=notifier,
            logger=logger,
            sanitize=sanitize,
        )

    async def dispatch(self, command: AuthManagementCommand) -> Result[Any, DomainError]:
        """Run the flow for a command.

        Args:
            command: Any member of AuthManagementCommand.

        Returns:
            The handler's Result, or Failure(INVALID_ACTION) for anything
            that is not a command.
        """
        match command:
            case CheckUnique():
                return await self._check_unique.handle(command)
            case ResendVerifySignup():
                return await self._resend_verify_signup.handle(command)
            case (
                VerifySignupLong()
                | VerifySignupShort()
                | VerifySignupSetPasswordLong()
                | VerifySignupSetPasswordShort()
            ):
                return await self._verify_signup.handle(command)
            case SendResetPassword():
                return await self._send_reset_password.handle(command)
            case ResetPasswordLong() | ResetPasswordShort():
                return await self._reset_password.handle(command)
            case PasswordChange():
                return await self._password_change.handle(command)
            case IdentityChange():
                return await self._identity_change.handle(command)
            case GetOptions():
                return Success(value=self._settings)
            case _:
                return Failure(
                    error=ValidationError(
                        code=ErrorCode.INVALID_ACTION,
                        message=f"Invalid action: {type(command).__name__}",
                        field="action",
                    )
                )

    async def create(self, request: Mapping[str, Any]) -> Result[Any, DomainError]:
        """Validate a wire request and run its flow.

        Args:
            request: ``{action, value, notifierOptions?, ownId?, meta?}``.

        Returns:
            The flow's Result, Failure(INVALID_ACTION) for an unknown action
            or Failure(BAD_INPUT) when the payload does not fit the action.
        """
        action = request.get("action")
        if not isinstance(action, str) or action not in ACTIONS:
            self._logger.warning("Rejected request", action=str(action), reason="invalid_action")
            return Failure(
                error=ValidationError(
                    code=ErrorCode.INVALID_ACTION,
                    message=f"Invalid action: {action!r}",
                    field="action",
                )
            )

        try:
            command = parse_request(request)
        except RequestValidationError as e:
            details = {
                ".".join(str(part) for part in error["loc"]): error["msg"]
                for error in e.errors()
            }
            self._logger.warning("Rejected request", action=action, reason="bad_input")
            return Failure(
                error=ValidationError(
                    code=ErrorCode.BAD_INPUT,
                    message=f"Invalid payload for {action}",
                    field="value",
                    details=details,
                )
            )

        return await self.dispatch(command)
