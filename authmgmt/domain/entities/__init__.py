"""Domain entities package."""

from authmgmt.domain.entities.account import (
    SECRET_FIELDS,
    Account,
    PublicAccount,
    SecretPair,
    cleared_pair,
    sanitize_account,
)

__all__ = [
    "SECRET_FIELDS",
    "Account",
    "PublicAccount",
    "SecretPair",
    "cleared_pair",
    "sanitize_account",
]
