"""Secret pair issuance.

Generates a long and a short token for one account, derives the values to
store (digests, or the raw tokens under the reuse policy) and the expiry.

The raw tokens exist only in memory: they go to the notifier and are never
persisted when hashing is on.
"""

import asyncio
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

from authmgmt.core.config import AuthManagementSettings
from authmgmt.domain.entities.account import Account, PublicAccount, SecretPair
from authmgmt.domain.protocols import SecretHasherProtocol, Sanitizer
from authmgmt.domain.token_codec import TokenCodec


@dataclass(frozen=True, slots=True, kw_only=True)
class IssuedSecrets:
    """A freshly issued secret pair.

    Attributes:
        pair: Which pair was issued.
        token: Raw long token (``<id>___<secret>``).
        short_token: Raw short token.
        stored_token: Value to persist for the long token.
        stored_short_token: Value to persist for the short token.
        expires: Expiry of the pair.
    """

    pair: SecretPair
    token: str
    short_token: str
    stored_token: str
    stored_short_token: str
    expires: datetime

    def raw_fields(self) -> dict[str, str]:
        return {
            self.pair.token_field: self.token,
            self.pair.short_token_field: self.short_token,
        }

    def stored_fields(self) -> dict[str, Any]:
        return {
            self.pair.token_field: self.stored_token,
            self.pair.short_token_field: self.stored_short_token,
            self.pair.expires_field: self.expires,
        }


def notification_view(
    sanitize: Sanitizer, account: Account, raw_tokens: dict[str, str]
) -> PublicAccount:
    """Sanitized account plus the raw tokens the notifier has to deliver."""
    return {**sanitize(account), **raw_tokens}


class SecretIssuer:
    """Issue verify or reset secret pairs.

    Usage:
        issuer = SecretIssuer(settings=settings, codec=TokenCodec(), hasher=hasher)
        issued = await issuer.issue(account.id, SecretPair.RESET)
        await store.patch(account.id, issued.stored_fields())
    """

    def __init__(
        self,
        settings: AuthManagementSettings,
        codec: TokenCodec,
        hasher: SecretHasherProtocol,
    ) -> None:
        self._settings = settings
        self._codec = codec
        self._hasher = hasher

    def stores_raw(self, pair: SecretPair) -> bool:
        """Whether a pair is persisted unhashed under the reuse policy."""
        if pair is SecretPair.RESET:
            return self._settings.reuse_reset_token
        return self._settings.reuse_verify_token

    async def issue(self, account_id: str, pair: SecretPair) -> IssuedSecrets:
        """Generate a secret pair for an account.

        Args:
            account_id: Owner embedded in the long token.
            pair: Pair to issue.

        Returns:
            IssuedSecrets with raw and storable values.
        """
        settings = self._settings
        token = self._codec.compose_long_token(
            account_id, self._codec.generate_long_token(settings.long_token_len)
        )
        short_token = self._codec.generate_short_token(
            settings.short_token_len, settings.short_token_digits
        )

        if self.stores_raw(pair):
            stored_token, stored_short_token = token, short_token
        else:
            stored_token, stored_short_token = await asyncio.gather(
                self._hasher.hash(token), self._hasher.hash(short_token)
            )

        delay = settings.reset_delay if pair is SecretPair.RESET else settings.verify_delay
        return IssuedSecrets(
            pair=pair,
            token=token,
            short_token=short_token,
            stored_token=stored_token,
            stored_short_token=stored_short_token,
            expires=datetime.now(UTC) + delay,
        )
