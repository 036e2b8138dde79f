"""Error classes shared by every flow.

Error Types:
- ValidationError: Malformed input (bad payload, malformed token, unknown action)
- NotFoundError: Account lookup did not resolve to exactly one record
- ConflictError: Identity values already held by another account
- AuthenticationError: Token or password claims rejected

Usage:
    from authmgmt.core.errors import ValidationError
    from authmgmt.core.enums import ErrorCode
    from authmgmt.core.result import Failure

    return Failure(error=ValidationError(
        code=ErrorCode.BAD_INPUT,
        message="Expected string value",
        field="password",
    ))
"""

from dataclasses import dataclass

from authmgmt.core.errors.domain_error import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class ValidationError(DomainError):
    """Input validation failure.

    Attributes:
        field: Field name that failed validation.
    """

    field: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class NotFoundError(DomainError):
    """Account lookup failure.

    Attributes:
        resource_type: Type of resource (always "Account" here).
        resource_id: Id or identity query that was looked up.
    """

    resource_type: str
    resource_id: str


@dataclass(frozen=True, slots=True, kw_only=True)
class ConflictError(DomainError):
    """Identity values already taken.

    Attributes:
        resource_type: Type of resource in conflict.
        conflicting_fields: Every field whose value is held by another account.
    """

    resource_type: str
    conflicting_fields: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True, kw_only=True)
class AuthenticationError(DomainError):
    """A token or password claim was rejected."""

    pass
