"""Reset Password handler.

Flow:
1. Validate token, identity fields and new password
2. Locate account (embedded id for long tokens, identity for short tokens)
3. Verify the claim against the pending reset pair (verified accounts only,
   unless the check is skipped)
4. Hash the new password
5. Clear the reset pair and store the new digest in one patch
6. Notify resetPwd
7. Return Success(sanitized account)

Security:
- A wrong token decrements reset_attempts, or discards the pair once none
  are left.
- The long token is single use: the pair is cleared on success.
"""

from authmgmt.application.account_lookup import AccountLookup
from authmgmt.application.commands.credential_commands import (
    ResetPasswordLong,
    ResetPasswordShort,
)
from authmgmt.core.config import AuthManagementSettings
from authmgmt.core.errors import DomainError
from authmgmt.core.result import Failure, Result, Success
from authmgmt.core.validation import validate_identify, validate_secret
from authmgmt.domain.entities.account import PublicAccount, SecretPair
from authmgmt.domain.protocols import (
    AccountStore,
    LoggerProtocol,
    NotifierProtocol,
    Sanitizer,
    SecretHasherProtocol,
)
from authmgmt.domain.verification import TokenClaims, VerificationEngine


class ResetPasswordHandler:
    """Handler for reset password commands (long and short token)."""

    EVENT = "resetPwd"

    def __init__(
        self,
        settings: AuthManagementSettings,
        lookup: AccountLookup,
        engine: VerificationEngine,
        hasher: SecretHasherProtocol,
        store: AccountStore,
        notifier: NotifierProtocol,
        logger: LoggerProtocol,
        sanitize: Sanitizer,
    ) -> None:
        """Initialize reset password handler with dependencies.

        Args:
            settings: Active settings.
            lookup: Account lookup.
            engine: Verification state machine.
            hasher: Password hasher.
            store: Account store.
            notifier: Outbound notifier.
            logger: Structured logger.
            sanitize: Account sanitizer.
        """
        self._settings = settings
        self._lookup = lookup
        self._engine = engine
        self._hasher = hasher
        self._store = store
        self._notifier = notifier
        self._logger = logger
        self._sanitize = sanitize

    async def handle(
        self, cmd: ResetPasswordLong | ResetPasswordShort
    ) -> Result[PublicAccount, DomainError]:
        """Handle reset password command.

        Args:
            cmd: ResetPasswordLong or ResetPasswordShort.

        Returns:
            Success(sanitized account) when the token matched.
            Failure(DomainError) otherwise.

        Side Effects:
            - Replaces the password digest and clears the reset pair.
            - On mismatch, decrements or clears the reset pair.
        """
        identify = cmd.identify if isinstance(cmd, ResetPasswordShort) else None

        # Step 1: Validate input
        for value, name in ((cmd.token, "token"), (cmd.password, "password")):
            checked = validate_secret(value, name)
            if isinstance(checked, Failure):
                return checked
        if identify is not None:
            validated = validate_identify(identify, self._settings.identify_user_props)
            if isinstance(validated, Failure):
                return validated
            identify = validated.value

        # Step 2: Locate account
        found = await self._lookup.for_claim(cmd.token, identify)
        if isinstance(found, Failure):
            return found
        account = found.value

        # Step 3: Verify claim
        claims = (
            TokenClaims(token=cmd.token)
            if identify is None
            else TokenClaims(short_token=cmd.token)
        )
        consumed = await self._engine.verify(
            account,
            SecretPair.RESET,
            claims,
            reuse_raw=self._settings.reuse_reset_token,
            require_verified=not self._settings.skip_is_verified_check,
        )
        if isinstance(consumed, Failure):
            return consumed

        # Steps 4-5: Hash and persist
        password_hash = await self._hasher.hash(cmd.password)
        updated = await self._store.patch(
            account.id, {**consumed.value.changes, "password_hash": password_hash}
        )

        # Step 6: Notify
        public = self._sanitize(updated)
        await self._notifier.notify(self.EVENT, public, cmd.notifier_options)

        self._logger.info("Password reset", account_id=account.id)
        return Success(value=public)
