"""Credential commands (CQRS write operations) and their handlers."""

from authmgmt.application.commands.credential_commands import (
    AuthManagementCommand,
    CheckUnique,
    GetOptions,
    IdentityChange,
    PasswordChange,
    ResendVerifySignup,
    ResetPasswordLong,
    ResetPasswordShort,
    SendResetPassword,
    VerifySignupLong,
    VerifySignupSetPasswordLong,
    VerifySignupSetPasswordShort,
    VerifySignupShort,
)

__all__ = [
    "AuthManagementCommand",
    "CheckUnique",
    "GetOptions",
    "IdentityChange",
    "PasswordChange",
    "ResendVerifySignup",
    "ResetPasswordLong",
    "ResetPasswordShort",
    "SendResetPassword",
    "VerifySignupLong",
    "VerifySignupSetPasswordLong",
    "VerifySignupSetPasswordShort",
    "VerifySignupShort",
]
