"""Verify Signup handler.

Handles the four verify-signup variants (long/short token, with or without
setting a first password).

Flow:
1. Validate token, identity fields and password
2. Locate account (embedded id for long tokens, identity for short tokens)
3. Verify the claim against the pending verify pair
4. Hash the new password (set-password variants)
5. Clear the verify pair, apply staged identity changes, mark verified
6. Notify verifySignup
7. Return Success(sanitized account)

Mismatch bookkeeping (step 3) is persisted even though the flow fails.
"""

from authmgmt.application.account_lookup import AccountLookup
from authmgmt.application.commands.credential_commands import (
    VerifySignupLong,
    VerifySignupSetPasswordLong,
    VerifySignupSetPasswordShort,
    VerifySignupShort,
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

type VerifySignupCommand = (
    VerifySignupLong
    | VerifySignupShort
    | VerifySignupSetPasswordLong
    | VerifySignupSetPasswordShort
)


class VerifySignupHandler:
    """Handler for every verify signup command.

    Dependencies (injected via constructor):
        - AccountLookup: Resolve the account from the claim
        - VerificationEngine: Verify pair state machine
        - SecretHasherProtocol: Hash the first password
        - AccountStore: Persist the outcome
        - NotifierProtocol: verifySignup event
    """

    EVENT = "verifySignup"

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
        self._settings = settings
        self._lookup = lookup
        self._engine = engine
        self._hasher = hasher
        self._store = store
        self._notifier = notifier
        self._logger = logger
        self._sanitize = sanitize

    async def handle(self, cmd: VerifySignupCommand) -> Result[PublicAccount, DomainError]:
        """Handle a verify signup command.

        Args:
            cmd: Long or short, with or without password.

        Returns:
            Success(sanitized account) when the token matched.
            Failure(DomainError) with BAD_INPUT, MALFORMED_TOKEN,
            NO_SUCH_ACCOUNT, AMBIGUOUS_OR_MISSING_ACCOUNT, MISSING_TOKEN,
            TOKEN_EXPIRED or INVALIDATED_TOKEN.
        """
        match cmd:
            case VerifySignupLong(token=token):
                identify, password = None, None
            case VerifySignupShort(token=token, identify=identify):
                password = None
            case VerifySignupSetPasswordLong(token=token, password=password):
                identify = None
            case VerifySignupSetPasswordShort(
                token=token, identify=identify, password=password
            ):
                pass

        # Step 1: Validate input
        checked = validate_secret(token, "token")
        if isinstance(checked, Failure):
            return checked
        if password is not None:
            checked = validate_secret(password, "password")
            if isinstance(checked, Failure):
                return checked
        if identify is not None:
            validated = validate_identify(identify, self._settings.identify_user_props)
            if isinstance(validated, Failure):
                return validated
            identify = validated.value

        # Step 2: Locate account
        found = await self._lookup.for_claim(token, identify)
        if isinstance(found, Failure):
            return found
        account = found.value

        # Step 3: Verify claim
        claims = (
            TokenClaims(token=token) if identify is None else TokenClaims(short_token=token)
        )
        consumed = await self._engine.verify(
            account,
            SecretPair.VERIFY,
            claims,
            reuse_raw=self._settings.reuse_verify_token,
        )
        if isinstance(consumed, Failure):
            return consumed

        # Steps 4-5: Persist outcome in one patch
        changes = {**consumed.value.changes, "is_verified": True}
        if password is not None:
            changes["password_hash"] = await self._hasher.hash(password)
        updated = await self._store.patch(account.id, changes)

        # Step 6: Notify
        public = self._sanitize(updated)
        await self._notifier.notify(self.EVENT, public, cmd.notifier_options)

        self._logger.info(
            "Signup verified",
            account_id=account.id,
            password_set=password is not None,
        )
        return Success(value=public)
