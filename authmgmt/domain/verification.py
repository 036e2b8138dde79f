"""Verification state machine for pending secret pairs.

One machine serves both the verify pair (signup, identity change) and the
reset pair (forgotten password). Only the reset pair tracks attempts.

States:
    NoPendingSecret -> PendingSecret(expires, attempts) -> Verified | Invalidated

Transitions on a claim comparison:
    matched                           -> Verified
    mismatch, attempts > 0            -> PendingSecret(attempts - 1)
    mismatch, attempts 0 or untracked -> Invalidated

Decrement and invalidation are the two exclusive outcomes of one failed
comparison. An attempts counter of 0 is what triggers invalidation; it is not
checked before comparing.

Usage:
    engine = VerificationEngine(store=store, hasher=hasher, logger=logger)
    result = await engine.verify(
        account,
        SecretPair.RESET,
        TokenClaims(token=claimed),
        reuse_raw=settings.reuse_reset_token,
        require_verified=not settings.skip_is_verified_check,
    )
"""

import asyncio
import secrets
from dataclasses import dataclass, replace
from datetime import UTC, datetime
from typing import Any

from authmgmt.core.enums import ErrorCode
from authmgmt.core.errors import AuthenticationError
from authmgmt.core.result import Failure, Result, Success
from authmgmt.domain.entities.account import Account, SecretPair, cleared_pair
from authmgmt.domain.gates import GateCheck, apply_verification_gate
from authmgmt.domain.protocols import (
    AccountStore,
    LoggerProtocol,
    SecretHasherProtocol,
)


@dataclass(frozen=True, slots=True)
class NoPendingSecret:
    """No secret pair outstanding."""


@dataclass(frozen=True, slots=True, kw_only=True)
class PendingSecret:
    """Outstanding secret pair.

    Attributes:
        token: Stored long token (digest or raw).
        short_token: Stored short token (digest or raw).
        expires: Expiry of the pair.
        attempts: Mismatches still tolerated (None when not tracked).
    """

    token: str | None
    short_token: str | None
    expires: datetime
    attempts: int | None = None


@dataclass(frozen=True, slots=True)
class Verified:
    """Terminal success: the claim matched."""


@dataclass(frozen=True, slots=True)
class Invalidated:
    """Terminal failure: the pair is discarded and a new one must be requested."""


type SecretState = NoPendingSecret | PendingSecret | Verified | Invalidated


def pending_state(account: Account, pair: SecretPair) -> NoPendingSecret | PendingSecret:
    """Read the state of one secret pair from an account."""
    expires = account.expires_at(pair)
    if expires is None or not account.has_pending(pair):
        return NoPendingSecret()
    return PendingSecret(
        token=getattr(account, pair.token_field),
        short_token=getattr(account, pair.short_token_field),
        expires=expires,
        attempts=account.reset_attempts if pair is SecretPair.RESET else None,
    )


def transition(
    state: PendingSecret, matched: bool
) -> PendingSecret | Verified | Invalidated:
    """Apply one comparison outcome to a pending pair.

    Args:
        state: Pending pair before the claim.
        matched: Whether every claim matched its stored value.

    Returns:
        Verified, the pair with one fewer attempt, or Invalidated.

    Example:
        >>> transition(PendingSecret(token="t", short_token=None, expires=e, attempts=1), False)
        PendingSecret(token='t', short_token=None, expires=e, attempts=0)
        >>> transition(PendingSecret(token="t", short_token=None, expires=e, attempts=0), False)
        Invalidated()
    """
    if matched:
        return Verified()
    if state.attempts is not None and state.attempts > 0:
        return replace(state, attempts=state.attempts - 1)
    return Invalidated()


@dataclass(frozen=True, slots=True, kw_only=True)
class TokenClaims:
    """Token values presented by a caller.

    Either or both may be present; each is checked against its own stored
    value.
    """

    token: str | None = None
    short_token: str | None = None

    def by_field(self, pair: SecretPair) -> dict[str, str]:
        claims: dict[str, str] = {}
        if self.token is not None:
            claims[pair.token_field] = self.token
        if self.short_token is not None:
            claims[pair.short_token_field] = self.short_token
        return claims


@dataclass(frozen=True, slots=True, kw_only=True)
class ConsumedSecret:
    """Successful verification.

    Attributes:
        account: Account as read before the claim.
        changes: Patch that clears the pair and applies staged identity
            changes. The flow merges its own mutation into it.
    """

    account: Account
    changes: dict[str, Any]


class VerificationEngine:
    """Checks claims against a pending secret pair and records the outcome.

    Mismatch bookkeeping (decrement or clear) is written to the store before
    the failure is returned and is never undone.
    """

    def __init__(
        self,
        store: AccountStore,
        hasher: SecretHasherProtocol,
        logger: LoggerProtocol,
    ) -> None:
        """Initialize verification engine with dependencies.

        Args:
            store: Account store for mismatch bookkeeping.
            hasher: Hasher used to compare claims against stored digests.
            logger: Structured logger.
        """
        self._store = store
        self._hasher = hasher
        self._logger = logger

    async def verify(
        self,
        account: Account,
        pair: SecretPair,
        claims: TokenClaims,
        *,
        reuse_raw: bool,
        require_verified: bool = False,
    ) -> Result[ConsumedSecret, AuthenticationError]:
        """Run one verification attempt.

        Args:
            account: Account resolved by the flow.
            pair: Secret pair being claimed.
            claims: Presented token values.
            reuse_raw: Stored values are raw secrets (compare by equality).
            require_verified: Reject unverified accounts (reset flows).

        Returns:
            Success(ConsumedSecret) when every claim matched.
            Failure(AuthenticationError) with MISSING_TOKEN, TOKEN_EXPIRED,
            ACCOUNT_NOT_VERIFIED, INCORRECT_TOKEN or INVALIDATED_TOKEN.
        """
        state = pending_state(account, pair)
        claimed = claims.by_field(pair)

        if isinstance(state, NoPendingSecret) or not claimed:
            return self._reject(
                account,
                pair,
                ErrorCode.MISSING_TOKEN,
                "No token is pending for this account.",
            )

        gates = {
            GateCheck.VERIFY_NOT_EXPIRED
            if pair is SecretPair.VERIFY
            else GateCheck.RESET_NOT_EXPIRED
        }
        if require_verified:
            gates.add(GateCheck.IS_VERIFIED)
        gate = apply_verification_gate(account, gates, datetime.now(UTC))
        if isinstance(gate, Failure):
            self._logger.warning(
                "Token claim rejected",
                account_id=account.id,
                pair=pair.value,
                reason=gate.error.code.value,
            )
            return gate

        outcomes = await asyncio.gather(
            *(
                self._compare(value, getattr(account, field), reuse_raw)
                for field, value in claimed.items()
            )
        )
        next_state = transition(state, all(outcomes))

        match next_state:
            case Verified():
                changes = cleared_pair(pair)
                if pair is SecretPair.VERIFY and account.has_verify_changes():
                    changes["identity"] = {
                        **account.identity,
                        **account.verify_changes,
                    }
                return Success(value=ConsumedSecret(account=account, changes=changes))
            case PendingSecret(attempts=attempts):
                await self._store.patch(account.id, {"reset_attempts": attempts})
                return self._reject(
                    account,
                    pair,
                    ErrorCode.INCORRECT_TOKEN,
                    "Token is incorrect.",
                    attempts_remaining=attempts,
                )
            case Invalidated():
                await self._store.patch(account.id, cleared_pair(pair))
                return self._reject(
                    account,
                    pair,
                    ErrorCode.INVALIDATED_TOKEN,
                    "Invalid token. Request a new one.",
                )

    async def _compare(self, claim: str, stored: str | None, reuse_raw: bool) -> bool:
        if stored is None:
            return False
        if reuse_raw:
            return secrets.compare_digest(claim.encode("utf-8"), stored.encode("utf-8"))
        return await self._hasher.compare(claim, stored)

    def _reject(
        self,
        account: Account,
        pair: SecretPair,
        code: ErrorCode,
        message: str,
        **context: Any,
    ) -> Failure[AuthenticationError]:
        self._logger.warning(
            "Token claim rejected",
            account_id=account.id,
            pair=pair.value,
            reason=code.value,
            **context,
        )
        return Failure(error=AuthenticationError(code=code, message=message))
