"""Send Reset Password handler.

Flow:
1. Validate identity fields
2. Look up exactly one account by identity
3. Require a verified account (unless the check is skipped)
4. Re-send the existing reset token while more than half of its window
   remains (reuse policy only)
5. Otherwise issue a fresh reset pair
6. Notify sendResetPwd with the raw tokens
7. Persist the pair and the attempt budget
8. Return Success(sanitized account)

Security:
- The notifier is called before persisting. A failed notification leaves
  the previous pair in place.
"""

from datetime import UTC, datetime

from authmgmt.application.account_lookup import AccountLookup
from authmgmt.application.commands.credential_commands import SendResetPassword
from authmgmt.application.secret_issuer import SecretIssuer, notification_view
from authmgmt.core.config import AuthManagementSettings
from authmgmt.core.errors import DomainError
from authmgmt.core.result import Failure, Result, Success
from authmgmt.core.validation import validate_identify
from authmgmt.domain.entities.account import Account, PublicAccount, SecretPair
from authmgmt.domain.gates import GateCheck, apply_verification_gate
from authmgmt.domain.protocols import (
    AccountStore,
    LoggerProtocol,
    NotifierProtocol,
    Sanitizer,
)
from authmgmt.domain.token_codec import TokenCodec


class SendResetPasswordHandler:
    """Handler for send reset password command.

    Dependencies (injected via constructor):
        - AccountLookup: Resolve the account from identity fields
        - SecretIssuer: Generate the reset pair
        - TokenCodec: Recognize a raw long token under the reuse policy
        - AccountStore: Persist the pair
        - NotifierProtocol: sendResetPwd event
    """

    EVENT = "sendResetPwd"

    def __init__(
        self,
        settings: AuthManagementSettings,
        lookup: AccountLookup,
        issuer: SecretIssuer,
        codec: TokenCodec,
        store: AccountStore,
        notifier: NotifierProtocol,
        logger: LoggerProtocol,
        sanitize: Sanitizer,
    ) -> None:
        self._settings = settings
        self._lookup = lookup
        self._issuer = issuer
        self._codec = codec
        self._store = store
        self._notifier = notifier
        self._logger = logger
        self._sanitize = sanitize

    async def handle(self, cmd: SendResetPassword) -> Result[PublicAccount, DomainError]:
        """Handle send reset password command.

        Args:
            cmd: SendResetPassword command with identity fields.

        Returns:
            Success(sanitized account), or Failure(BAD_INPUT,
            AMBIGUOUS_OR_MISSING_ACCOUNT, ACCOUNT_NOT_VERIFIED).
        """
        # Step 1: Validate input
        identify = validate_identify(cmd.identify, self._settings.identify_user_props)
        if isinstance(identify, Failure):
            return identify

        # Step 2: Locate account
        found = await self._lookup.by_identity(identify.value)
        if isinstance(found, Failure):
            return found
        account = found.value

        # Step 3: Verified accounts only
        if not self._settings.skip_is_verified_check:
            gate = apply_verification_gate(account, {GateCheck.IS_VERIFIED})
            if isinstance(gate, Failure):
                return gate

        # Step 4: Re-send the live token
        if self._can_reuse(account):
            await self._notifier.notify(
                self.EVENT,
                notification_view(
                    self._sanitize,
                    account,
                    {
                        "reset_token": account.reset_token,
                        "reset_short_token": account.reset_short_token,
                    },
                ),
                cmd.notifier_options,
            )
            self._logger.info("Reset token re-sent", account_id=account.id)
            return Success(value=self._sanitize(account))

        # Step 5: Issue a fresh pair
        issued = await self._issuer.issue(account.id, SecretPair.RESET)

        # Steps 6-7: Notify, then persist
        await self._notifier.notify(
            self.EVENT,
            notification_view(self._sanitize, account, issued.raw_fields()),
            cmd.notifier_options,
        )
        updated = await self._store.patch(
            account.id,
            {**issued.stored_fields(), "reset_attempts": self._settings.reset_attempts},
        )

        self._logger.info(
            "Reset token issued",
            account_id=account.id,
            expires_at=issued.expires.isoformat(),
        )
        return Success(value=self._sanitize(updated))

    def _can_reuse(self, account: Account) -> bool:
        if not self._settings.reuse_reset_token:
            return False
        if not self._codec.is_long_token(account.reset_token):
            return False
        if account.reset_expires is None:
            return False
        remaining = account.reset_expires - datetime.now(UTC)
        return remaining > self._settings.reset_delay / 2
