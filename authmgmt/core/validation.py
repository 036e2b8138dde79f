"""Validation helpers for flow input.

All validation functions return Result types for consistent error handling.

Usage:
    from authmgmt.core.validation import validate_identify, validate_secret

    match validate_identify(cmd.identify, settings.identify_user_props):
        case Success(value=identify):
            ...
        case Failure(error=error):
            return Failure(error=error)
"""

from collections.abc import Collection, Mapping
from typing import Any

from authmgmt.core.enums import ErrorCode
from authmgmt.core.errors import ValidationError
from authmgmt.core.result import Failure, Result, Success

# bcrypt only reads the first 72 bytes of a secret
MAX_SECRET_BYTES = 72


def validate_secret(value: Any, field_name: str) -> Result[str, ValidationError]:
    """Validate a token or password value.

    Args:
        value: Value to validate.
        field_name: Name of the field being validated.

    Returns:
        Success with the string if it is non-empty and hashable without
        truncation, Failure with BAD_INPUT otherwise.
    """
    if not isinstance(value, str) or not value:
        return Failure(
            error=ValidationError(
                code=ErrorCode.BAD_INPUT,
                message=f"{field_name} must be a non-empty string",
                field=field_name,
            )
        )
    if len(value.encode("utf-8")) > MAX_SECRET_BYTES:
        return Failure(
            error=ValidationError(
                code=ErrorCode.BAD_INPUT,
                message=f"{field_name} must be at most {MAX_SECRET_BYTES} bytes",
                field=field_name,
            )
        )
    return Success(value=value)


def validate_identify(
    identify: Any,
    allowed_props: Collection[str],
    field_name: str = "user",
) -> Result[dict[str, str], ValidationError]:
    """Validate an identity mapping used to locate an account.

    Args:
        identify: Mapping of identity field to value.
        allowed_props: Configured identity fields.
        field_name: Name reported in errors.

    Returns:
        Success with a plain dict copy, or Failure with BAD_INPUT when the
        mapping is empty, uses an unknown field, or holds a non-string value.
    """
    if not isinstance(identify, Mapping) or not identify:
        return Failure(
            error=ValidationError(
                code=ErrorCode.BAD_INPUT,
                message=f"{field_name} must identify the account",
                field=field_name,
            )
        )
    for key, value in identify.items():
        if key not in allowed_props:
            return Failure(
                error=ValidationError(
                    code=ErrorCode.BAD_INPUT,
                    message=f"{key} is not an identity field",
                    field=key,
                )
            )
        if not isinstance(value, str):
            return Failure(
                error=ValidationError(
                    code=ErrorCode.BAD_INPUT,
                    message=f"{key} must be a string",
                    field=key,
                )
            )
    return Success(value=dict(identify))
