"""Resend Verify Signup handler.

Flow:
1. Validate identity fields
2. Look up exactly one account by identity
3. Reject verified accounts without staged changes (configurable)
4. Issue a fresh verify pair (previous one is overwritten)
5. Persist the stored form of the pair
6. Notify resendVerifySignup with the raw tokens
7. Return Success(sanitized account)
"""

from authmgmt.application.account_lookup import AccountLookup
from authmgmt.application.commands.credential_commands import ResendVerifySignup
from authmgmt.application.secret_issuer import SecretIssuer, notification_view
from authmgmt.core.config import AuthManagementSettings
from authmgmt.core.errors import DomainError
from authmgmt.core.result import Failure, Result, Success
from authmgmt.core.validation import validate_identify
from authmgmt.domain.entities.account import PublicAccount, SecretPair
from authmgmt.domain.gates import GateCheck, apply_verification_gate
from authmgmt.domain.protocols import (
    AccountStore,
    LoggerProtocol,
    NotifierProtocol,
    Sanitizer,
)


class ResendVerifySignupHandler:
    """Handler for resend verify signup command."""

    EVENT = "resendVerifySignup"

    def __init__(
        self,
        settings: AuthManagementSettings,
        lookup: AccountLookup,
        issuer: SecretIssuer,
        store: AccountStore,
        notifier: NotifierProtocol,
        logger: LoggerProtocol,
        sanitize: Sanitizer,
    ) -> None:
        """Initialize resend verify signup handler with dependencies.

        Args:
            settings: Active settings.
            lookup: Account lookup.
            issuer: Secret pair issuer.
            store: Account store.
            notifier: Outbound notifier.
            logger: Structured logger.
            sanitize: Account sanitizer.
        """
        self._settings = settings
        self._lookup = lookup
        self._issuer = issuer
        self._store = store
        self._notifier = notifier
        self._logger = logger
        self._sanitize = sanitize

    async def handle(
        self, cmd: ResendVerifySignup
    ) -> Result[PublicAccount, DomainError]:
        """Handle resend verify signup command.

        Args:
            cmd: ResendVerifySignup command with identity fields.

        Returns:
            Success(sanitized account), or Failure(BAD_INPUT,
            AMBIGUOUS_OR_MISSING_ACCOUNT, ALREADY_VERIFIED).

        Side Effects:
            - Replaces the verify pair.
            - Notifies resendVerifySignup.
        """
        identify = validate_identify(cmd.identify, self._settings.identify_user_props)
        if isinstance(identify, Failure):
            return identify

        found = await self._lookup.by_identity(identify.value)
        if isinstance(found, Failure):
            return found
        account = found.value

        if self._settings.resend_requires_unverified:
            gate = apply_verification_gate(
                account, {GateCheck.IS_NOT_VERIFIED_OR_HAS_VERIFY_CHANGES}
            )
            if isinstance(gate, Failure):
                return gate

        issued = await self._issuer.issue(account.id, SecretPair.VERIFY)
        updated = await self._store.patch(account.id, issued.stored_fields())

        await self._notifier.notify(
            self.EVENT,
            notification_view(self._sanitize, updated, issued.raw_fields()),
            cmd.notifier_options,
        )

        self._logger.info("Verify token issued", account_id=account.id, action=self.EVENT)
        return Success(value=self._sanitize(updated))
