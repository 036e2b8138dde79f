"""Token codec.

Generates the secrets handed to account holders and encodes the owning
account id into long tokens.

Token Strategy:
    - Long token: ``<accountId>___<hex secret>``, delivered as a link.
      The id segment only locates the account; the whole string is what is
      hashed and compared, so the secret must still match.
    - Short token: a few digits (or upper-case alphanumerics) typed by hand.
      Never carries an id; resolved through an identity lookup.
"""

import secrets
import string

from authmgmt.core.enums import ErrorCode
from authmgmt.core.errors import ValidationError
from authmgmt.core.result import Failure, Result, Success

TOKEN_SEPARATOR = "___"

_ALPHANUMERIC = string.ascii_uppercase + string.digits


class TokenCodec:
    """Long/short token generation and id embedding.

    Usage:
        codec = TokenCodec()
        secret = codec.generate_long_token(15)
        token = codec.compose_long_token(account.id, secret)

        match codec.decompose_long_token(token):
            case Success(value=account_id):
                account = await store.get(account_id)
    """

    def generate_long_token(self, length: int) -> str:
        """Generate a long random token.

        Args:
            length: Random bytes of entropy.

        Returns:
            Hex string of ``2 * length`` characters.

        Example:
            >>> len(TokenCodec().generate_long_token(15))
            30
        """
        return secrets.token_hex(length)

    def generate_short_token(self, length: int, digits: bool = True) -> str:
        """Generate a short token for manual entry.

        Args:
            length: Number of characters.
            digits: Use decimal digits only; otherwise upper-case letters
                and digits.

        Returns:
            Random string of ``length`` characters.
        """
        alphabet = string.digits if digits else _ALPHANUMERIC
        return "".join(secrets.choice(alphabet) for _ in range(length))

    def compose_long_token(self, account_id: str, secret: str) -> str:
        """Embed the account id in front of a secret."""
        return f"{account_id}{TOKEN_SEPARATOR}{secret}"

    def decompose_long_token(self, token: str) -> Result[str, ValidationError]:
        """Extract the account id from a long token.

        Args:
            token: Long token as presented by the caller.

        Returns:
            Success(account_id), or Failure(MALFORMED_TOKEN) when the
            separator is missing or the id segment is empty.
        """
        account_id, separator, _ = token.partition(TOKEN_SEPARATOR)
        if not separator or not account_id:
            return Failure(
                error=ValidationError(
                    code=ErrorCode.MALFORMED_TOKEN,
                    message="Token is malformed.",
                    field="token",
                )
            )
        return Success(value=account_id)

    def is_long_token(self, value: str | None) -> bool:
        """Check whether a stored value is a raw (unhashed) long token.

        Bcrypt digests never contain the separator.
        """
        return value is not None and TOKEN_SEPARATOR in value
