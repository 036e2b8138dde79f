"""Verification gates evaluated against a resolved account.

Each gate names one precondition. Gates run in a fixed order and the first
violation wins.

Usage:
    result = apply_verification_gate(account, {GateCheck.IS_VERIFIED})
"""

from collections.abc import Collection
from datetime import UTC, datetime
from enum import Enum

from authmgmt.core.enums import ErrorCode
from authmgmt.core.errors import AuthenticationError
from authmgmt.core.result import Failure, Result, Success
from authmgmt.domain.entities.account import Account, SecretPair


class GateCheck(str, Enum):
    """Preconditions a flow can require of an account."""

    RESET_NOT_EXPIRED = "reset_not_expired"
    VERIFY_NOT_EXPIRED = "verify_not_expired"
    IS_VERIFIED = "is_verified"
    IS_NOT_VERIFIED_OR_HAS_VERIFY_CHANGES = "is_not_verified_or_has_verify_changes"


def apply_verification_gate(
    account: Account,
    checks: Collection[GateCheck],
    now: datetime | None = None,
) -> Result[Account, AuthenticationError]:
    """Evaluate the requested gates.

    Args:
        account: Resolved account.
        checks: Gates to evaluate. Order of evaluation is fixed, not the
            order of this collection.
        now: Reference time (defaults to the current UTC time).

    Returns:
        Success(account) unchanged, or Failure with the first violated gate.
    """
    now = now or datetime.now(UTC)

    if GateCheck.IS_NOT_VERIFIED_OR_HAS_VERIFY_CHANGES in checks and (
        account.is_verified and not account.has_verify_changes()
    ):
        return Failure(
            error=AuthenticationError(
                code=ErrorCode.ALREADY_VERIFIED,
                message="Account is already verified and has no pending changes.",
            )
        )

    if GateCheck.VERIFY_NOT_EXPIRED in checks and account.is_expired(
        SecretPair.VERIFY, now
    ):
        return Failure(
            error=AuthenticationError(
                code=ErrorCode.TOKEN_EXPIRED,
                message="Verification token has expired.",
            )
        )

    if GateCheck.RESET_NOT_EXPIRED in checks and account.is_expired(
        SecretPair.RESET, now
    ):
        return Failure(
            error=AuthenticationError(
                code=ErrorCode.TOKEN_EXPIRED,
                message="Password reset token has expired.",
            )
        )

    if GateCheck.IS_VERIFIED in checks and not account.is_verified:
        return Failure(
            error=AuthenticationError(
                code=ErrorCode.ACCOUNT_NOT_VERIFIED,
                message="Account is not verified.",
            )
        )

    return Success(value=account)
