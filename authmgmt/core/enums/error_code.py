"""Domain-level error codes (machine-readable).

Every failure a credential flow can return maps to exactly one code.
The code is the stable contract; messages are for humans and may change.

Categories:
- Token errors (MISSING_TOKEN, TOKEN_EXPIRED, INCORRECT_TOKEN, ...)
- Account errors (ACCOUNT_NOT_VERIFIED, ALREADY_VERIFIED, ...)
- Lookup errors (*_ACCOUNT)
- Input errors (BAD_INPUT, INVALID_ACTION)
"""

from enum import Enum


class ErrorCode(Enum):
    """Domain-level error codes (machine-readable)."""

    # Token errors
    MISSING_TOKEN = "missing_token"
    TOKEN_EXPIRED = "token_expired"
    INCORRECT_TOKEN = "incorrect_token"
    INVALIDATED_TOKEN = "invalidated_token"
    MALFORMED_TOKEN = "malformed_token"

    # Account state errors
    ACCOUNT_NOT_VERIFIED = "account_not_verified"
    ALREADY_VERIFIED = "already_verified"
    INCORRECT_PASSWORD = "incorrect_password"

    # Lookup errors
    AMBIGUOUS_OR_MISSING_ACCOUNT = "ambiguous_or_missing_account"
    NO_SUCH_ACCOUNT = "no_such_account"

    # Conflict errors
    NOT_UNIQUE = "not_unique"

    # Input errors
    INVALID_ACTION = "invalid_action"
    BAD_INPUT = "bad_input"
