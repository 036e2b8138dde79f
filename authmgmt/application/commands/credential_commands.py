"""Credential commands (CQRS write operations).

Commands represent user intent to change credential state.
All commands are immutable (frozen=True) and use keyword-only arguments (kw_only=True).

Pattern:
- Commands are data containers (no logic)
- Handlers execute business logic and return Result types
- AuthManagementCommand is the tagged union the service dispatches on

Naming:
- identify: identity fields locating the account, e.g. {"email": "a@example.com"}
- token: long token (``<id>___<secret>``) or short token, depending on the command
- notifier_options: passed through to the notifier untouched
"""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, kw_only=True)
class CheckUnique:
    """Check identity values are not held by another account.

    Attributes:
        value: Field name to candidate value. None values are skipped.
        own_id: Caller's own account id, excluded from the search.
        no_err_msg: Return the conflict without a human-readable message.

    Example:
        >>> command = CheckUnique(value={"email": "a@example.com"}, own_id="0192...")
    """

    value: dict[str, Any]
    own_id: str | None = None
    no_err_msg: bool = False


@dataclass(frozen=True, kw_only=True)
class ResendVerifySignup:
    """Issue a fresh signup verification token pair and notify."""

    identify: dict[str, Any]
    notifier_options: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, kw_only=True)
class VerifySignupLong:
    """Verify signup (or identity change) with a long token."""

    token: str
    notifier_options: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, kw_only=True)
class VerifySignupShort:
    """Verify signup (or identity change) with a short token."""

    token: str
    identify: dict[str, Any]
    notifier_options: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, kw_only=True)
class VerifySignupSetPasswordLong:
    """Verify signup with a long token and set the first password."""

    token: str
    password: str
    notifier_options: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, kw_only=True)
class VerifySignupSetPasswordShort:
    """Verify signup with a short token and set the first password."""

    token: str
    identify: dict[str, Any]
    password: str
    notifier_options: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, kw_only=True)
class SendResetPassword:
    """Issue a password reset token pair and notify.

    Example:
        >>> command = SendResetPassword(identify={"email": "a@example.com"})
    """

    identify: dict[str, Any]
    notifier_options: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, kw_only=True)
class ResetPasswordLong:
    """Reset a forgotten password with a long token."""

    token: str
    password: str
    notifier_options: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, kw_only=True)
class ResetPasswordShort:
    """Reset a forgotten password with a short token."""

    token: str
    identify: dict[str, Any]
    password: str
    notifier_options: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, kw_only=True)
class PasswordChange:
    """Change password for a caller who knows the current one."""

    identify: dict[str, Any]
    old_password: str
    password: str
    notifier_options: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, kw_only=True)
class IdentityChange:
    """Stage identity changes behind a fresh verification.

    The changes are applied only once the new verify token is verified.

    Example:
        >>> command = IdentityChange(
        ...     identify={"email": "old@example.com"},
        ...     password="SecurePass123!",
        ...     changes={"email": "new@example.com"},
        ... )
    """

    identify: dict[str, Any]
    password: str
    changes: dict[str, Any]
    notifier_options: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, kw_only=True)
class GetOptions:
    """Return the active settings."""


type AuthManagementCommand = (
    CheckUnique
    | ResendVerifySignup
    | VerifySignupLong
    | VerifySignupShort
    | VerifySignupSetPasswordLong
    | VerifySignupSetPasswordShort
    | SendResetPassword
    | ResetPasswordLong
    | ResetPasswordShort
    | PasswordChange
    | IdentityChange
    | GetOptions
)
