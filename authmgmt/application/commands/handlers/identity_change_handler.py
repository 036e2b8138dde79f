"""Identity Change handler.

Flow:
1. Validate identity fields, password and the requested changes
2. Look up exactly one account by identity
3. Compare the password against the stored digest
4. Issue a fresh verify pair and stage the changes next to it
5. Notify identityChange (raw verify tokens plus the staged identity)
6. Return Success(sanitized account)

The identity itself is left untouched until the verify pair is verified.
"""

from authmgmt.application.account_lookup import AccountLookup
from authmgmt.application.commands.credential_commands import IdentityChange
from authmgmt.application.secret_issuer import SecretIssuer, notification_view
from authmgmt.core.config import AuthManagementSettings
from authmgmt.core.enums import ErrorCode
from authmgmt.core.errors import AuthenticationError, DomainError
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


class IdentityChangeHandler:
    """Handler for identity change command.

    Dependencies (injected via constructor):
        - AccountLookup: Resolve the account from identity fields
        - SecretHasherProtocol: Check the password
        - SecretIssuer: Generate the verify pair
        - AccountStore: Persist the staged changes
        - NotifierProtocol: identityChange event
    """

    EVENT = "identityChange"

    def __init__(
        self,
        settings: AuthManagementSettings,
        lookup: AccountLookup,
        hasher: SecretHasherProtocol,
        issuer: SecretIssuer,
        store: AccountStore,
        notifier: NotifierProtocol,
        logger: LoggerProtocol,
        sanitize: Sanitizer,
    ) -> None:
        self._settings = settings
        self._lookup = lookup
        self._hasher = hasher
        self._issuer = issuer
        self._store = store
        self._notifier = notifier
        self._logger = logger
        self._sanitize = sanitize

    async def handle(self, cmd: IdentityChange) -> Result[PublicAccount, DomainError]:
        """Handle identity change command.

        Args:
            cmd: IdentityChange command.

        Returns:
            Success(sanitized account, identity unchanged), or Failure with
            BAD_INPUT, AMBIGUOUS_OR_MISSING_ACCOUNT or INCORRECT_PASSWORD.

        Side Effects:
            - Replaces the verify pair and any previously staged changes.
        """
        props = self._settings.identify_user_props

        # Step 1: Validate input
        identify = validate_identify(cmd.identify, props)
        if isinstance(identify, Failure):
            return identify
        password = validate_secret(cmd.password, "password")
        if isinstance(password, Failure):
            return password
        changes = validate_identify(cmd.changes, props, "changes")
        if isinstance(changes, Failure):
            return changes

        # Step 2: Locate account
        found = await self._lookup.by_identity(identify.value)
        if isinstance(found, Failure):
            return found
        account = found.value

        # Step 3: Check password
        if account.password_hash is None or not await self._hasher.compare(
            cmd.password, account.password_hash
        ):
            self._logger.warning(
                "Identity change rejected",
                account_id=account.id,
                reason=ErrorCode.INCORRECT_PASSWORD.value,
            )
            return Failure(
                error=AuthenticationError(
                    code=ErrorCode.INCORRECT_PASSWORD,
                    message="Password is incorrect.",
                    details={"password": "Password is incorrect."},
                )
            )

        # Step 4: Stage changes behind a fresh verify pair
        issued = await self._issuer.issue(account.id, SecretPair.VERIFY)
        updated = await self._store.patch(
            account.id,
            {**issued.stored_fields(), "verify_changes": changes.value},
        )

        # Step 5: Notify
        await self._notifier.notify(
            self.EVENT,
            notification_view(self._sanitize, updated, issued.raw_fields()),
            cmd.notifier_options,
            new_identity=changes.value,
        )

        self._logger.info(
            "Identity change staged",
            account_id=account.id,
            changed_fields=sorted(changes.value),
        )
        return Success(value=self._sanitize(updated))
