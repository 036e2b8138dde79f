"""Account domain entity for credential management.

Pure business logic, no framework dependencies.

The account record itself is owned by an external store. This entity is the
view the credential flows read and the shape their patches are written in.

Pending Secret Pairs:
    - verify pair: verify_token, verify_short_token, verify_expires (+ verify_changes)
    - reset pair: reset_token, reset_short_token, reset_expires, reset_attempts
    - A pair is pending when its long or short token is set; a pending pair
      always carries an expiry. Clearing a pair nulls every field together.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any

# Fields stripped from every account view returned to callers or notifiers
SECRET_FIELDS: frozenset[str] = frozenset(
    {
        "password_hash",
        "verify_token",
        "verify_short_token",
        "verify_expires",
        "verify_changes",
        "reset_token",
        "reset_short_token",
        "reset_expires",
        "reset_attempts",
    }
)

# Sanitized account projection
type PublicAccount = dict[str, Any]


class SecretPair(str, Enum):
    """Which pending secret pair a flow operates on."""

    VERIFY = "verify"
    RESET = "reset"

    @property
    def token_field(self) -> str:
        return f"{self.value}_token"

    @property
    def short_token_field(self) -> str:
        return f"{self.value}_short_token"

    @property
    def expires_field(self) -> str:
        return f"{self.value}_expires"


@dataclass
class Account:
    """Account domain entity with credential state.

    Attributes:
        id: Store-assigned identifier (immutable).
        identity: Identity/profile fields (email, username, ...). Identity
            fields used for lookup must be unique across accounts.
        password_hash: Digest of the current password.
        is_verified: Signup verification status; gates password reset.
        verify_token: Pending long verify token (digest, or raw under reuse).
        verify_short_token: Pending short verify token.
        verify_expires: Expiry of the verify pair.
        verify_changes: Identity changes applied when verification succeeds.
        reset_token: Pending long reset token (digest, or raw under reuse).
        reset_short_token: Pending short reset token.
        reset_expires: Expiry of the reset pair.
        reset_attempts: Mismatched claims still tolerated for the reset pair.

    Example:
        >>> account = Account(id="a1", identity={"email": "a@example.com"})
        >>> account.has_pending(SecretPair.RESET)
        False
    """

    id: str
    identity: dict[str, Any] = field(default_factory=dict)
    password_hash: str | None = None
    is_verified: bool = False

    verify_token: str | None = None
    verify_short_token: str | None = None
    verify_expires: datetime | None = None
    verify_changes: dict[str, Any] = field(default_factory=dict)

    reset_token: str | None = None
    reset_short_token: str | None = None
    reset_expires: datetime | None = None
    reset_attempts: int | None = None

    def has_pending(self, pair: SecretPair) -> bool:
        """Check whether a secret pair is outstanding.

        A pair with neither token set is not pending, whatever its expiry says.
        """
        return (
            getattr(self, pair.token_field) is not None
            or getattr(self, pair.short_token_field) is not None
        ) and getattr(self, pair.expires_field) is not None

    def expires_at(self, pair: SecretPair) -> datetime | None:
        return getattr(self, pair.expires_field)

    def is_expired(self, pair: SecretPair, now: datetime | None = None) -> bool:
        """Check whether the pair's expiry has passed.

        A pair with no expiry counts as expired.
        """
        expires = self.expires_at(pair)
        if expires is None:
            return True
        return expires < (now or datetime.now(UTC))

    def has_verify_changes(self) -> bool:
        return bool(self.verify_changes)


def cleared_pair(pair: SecretPair) -> dict[str, Any]:
    """Patch that removes every field of a pending secret pair.

    Args:
        pair: Secret pair to clear.

    Returns:
        Field changes nulling the pair (and its staged changes or attempt counter).
    """
    changes: dict[str, Any] = {
        pair.token_field: None,
        pair.short_token_field: None,
        pair.expires_field: None,
    }
    if pair is SecretPair.RESET:
        changes["reset_attempts"] = None
    else:
        changes["verify_changes"] = {}
    return changes


def sanitize_account(account: Account) -> PublicAccount:
    """Default account sanitizer.

    Returns the account with the password digest and every token/secret field
    removed. Identity fields are flattened next to ``id`` and ``is_verified``.

    Args:
        account: Account to project.

    Returns:
        PublicAccount safe to return to a caller or pass to a notifier.
    """
    public: PublicAccount = {"id": account.id, **account.identity}
    public["is_verified"] = account.is_verified
    for name in SECRET_FIELDS:
        public.pop(name, None)
    return public
