"""Password Change handler.

Flow:
1. Validate identity fields and both passwords
2. Look up exactly one account by identity
3. Compare the current password against the stored digest
4. Hash and persist the new password
5. Notify passwordChange
"""

from authmgmt.application.account_lookup import AccountLookup
from authmgmt.application.commands.credential_commands import PasswordChange
from authmgmt.core.config import AuthManagementSettings
from authmgmt.core.enums import ErrorCode
from authmgmt.core.errors import AuthenticationError, DomainError
from authmgmt.core.result import Failure, Result, Success
from authmgmt.core.validation import validate_identify, validate_secret
from authmgmt.domain.entities.account import PublicAccount
from authmgmt.domain.protocols import (
    AccountStore,
    LoggerProtocol,
    NotifierProtocol,
    Sanitizer,
    SecretHasherProtocol,
)


class PasswordChangeHandler:
    """Handler for password change command."""

    EVENT = "passwordChange"

    def __init__(
        self,
        settings: AuthManagementSettings,
        lookup: AccountLookup,
        hasher: SecretHasherProtocol,
        store: AccountStore,
        notifier: NotifierProtocol,
        logger: LoggerProtocol,
        sanitize: Sanitizer,
    ) -> None:
        self._settings = settings
        self._lookup = lookup
        self._hasher = hasher
        self._store = store
        self._notifier = notifier
        self._logger = logger
        self._sanitize = sanitize

    async def handle(self, cmd: PasswordChange) -> Result[PublicAccount, DomainError]:
        """Handle password change command.

        Returns:
            Success(sanitized account), or Failure with INCORRECT_PASSWORD
            when the current password does not match.
        """
        identify = validate_identify(cmd.identify, self._settings.identify_user_props)
        if isinstance(identify, Failure):
            return identify
        for value, name in ((cmd.old_password, "old_password"), (cmd.password, "password")):
            checked = validate_secret(value, name)
            if isinstance(checked, Failure):
                return checked

        found = await self._lookup.by_identity(identify.value)
        if isinstance(found, Failure):
            return found
        account = found.value

        if account.password_hash is None or not await self._hasher.compare(
            cmd.old_password, account.password_hash
        ):
            self._logger.warning(
                "Password change rejected",
                account_id=account.id,
                reason=ErrorCode.INCORRECT_PASSWORD.value,
            )
            return Failure(
                error=AuthenticationError(
                    code=ErrorCode.INCORRECT_PASSWORD,
                    message="Current password is incorrect.",
                    details={"old_password": "Current password is incorrect."},
                )
            )

        password_hash = await self._hasher.hash(cmd.password)
        updated = await self._store.patch(account.id, {"password_hash": password_hash})

        public = self._sanitize(updated)
        await self._notifier.notify(self.EVENT, public, cmd.notifier_options)

        self._logger.info("Password changed", account_id=account.id)
        return Success(value=public)
