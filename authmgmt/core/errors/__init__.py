"""Core errors package.

Usage:
    from authmgmt.core.errors import DomainError, ValidationError, NotFoundError
"""

from authmgmt.core.errors.common_errors import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from authmgmt.core.errors.domain_error import DomainError

__all__ = [
    "AuthenticationError",
    "ConflictError",
    "DomainError",
    "NotFoundError",
    "ValidationError",
]
