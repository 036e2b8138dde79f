"""Result types for railway-oriented programming.

Credential flows fail in many expected ways (expired token, wrong code,
ambiguous identity). Those outcomes are returned as values instead of raised,
so every caller has to look at them.

Usage:
    def decompose(token: str) -> Result[str, ValidationError]:
        if SEPARATOR not in token:
            return Failure(error=malformed)
        return Success(value=token.split(SEPARATOR, 1)[0])

    match decompose(token):
        case Success(value=account_id):
            ...
        case Failure(error=error):
            ...
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")  # Success type
E = TypeVar("E")  # Error type


@dataclass(frozen=True, slots=True, kw_only=True)
class Success(Generic[T]):
    """Represents a successful operation result.

    Attributes:
        value: The successful result value.
    """

    value: T


@dataclass(frozen=True, slots=True, kw_only=True)
class Failure(Generic[E]):
    """Represents a failed operation result.

    Attributes:
        error: The error that occurred.
    """

    error: E


# Type alias for Result union
type Result[T, E] = Success[T] | Failure[E]
