"""Account lookup for credential flows.

Long tokens carry the account id; short tokens never do and are resolved
through identity fields. An identity lookup must resolve to exactly one
account: the store is queried with a limit of 2 so ambiguity is visible.
"""

from collections.abc import Mapping

from authmgmt.core.enums import ErrorCode
from authmgmt.core.errors import DomainError, NotFoundError
from authmgmt.core.result import Failure, Result, Success
from authmgmt.domain.entities.account import Account
from authmgmt.domain.protocols import AccountStore
from authmgmt.domain.token_codec import TokenCodec


class AccountLookup:
    """Resolve the account a request is about.

    Usage:
        lookup = AccountLookup(store=store, codec=TokenCodec())

        result = await lookup.by_embedded_id(cmd.token)
        result = await lookup.by_identity({"email": "a@example.com"})
    """

    # Two results are enough to tell "exactly one" from "more than one"
    IDENTITY_QUERY_LIMIT = 2

    def __init__(self, store: AccountStore, codec: TokenCodec) -> None:
        self._store = store
        self._codec = codec

    async def by_embedded_id(self, long_token: str) -> Result[Account, DomainError]:
        """Locate the account named by a long token.

        The id is only a locator. The caller still has to verify the token
        against stored state.

        Returns:
            Success(account), Failure(MALFORMED_TOKEN) or Failure(NO_SUCH_ACCOUNT).
        """
        decomposed = self._codec.decompose_long_token(long_token)
        if isinstance(decomposed, Failure):
            return decomposed

        account_id = decomposed.value
        account = await self._store.get(account_id)
        if account is None:
            return Failure(
                error=NotFoundError(
                    code=ErrorCode.NO_SUCH_ACCOUNT,
                    message="Account not found.",
                    resource_type="Account",
                    resource_id=account_id,
                )
            )
        return Success(value=account)

    async def by_identity(
        self, identify: Mapping[str, str], limit: int = IDENTITY_QUERY_LIMIT
    ) -> Result[Account, NotFoundError]:
        """Locate exactly one account by identity fields.

        Returns:
            Success(account), or Failure(AMBIGUOUS_OR_MISSING_ACCOUNT) when the
            query matches no account or more than one.
        """
        accounts = await self._store.find(identify, limit=limit)
        if len(accounts) != 1:
            return Failure(
                error=NotFoundError(
                    code=ErrorCode.AMBIGUOUS_OR_MISSING_ACCOUNT,
                    message="Account not found.",
                    resource_type="Account",
                    resource_id=",".join(sorted(identify)),
                    details={"matches": "none" if not accounts else "many"},
                )
            )
        return Success(value=accounts[0])

    async def for_claim(
        self, token: str, identify: Mapping[str, str] | None = None
    ) -> Result[Account, DomainError]:
        """Locate the account a token claim is about.

        Short-token claims carry identity fields; long-token claims do not and
        are resolved through the embedded id.
        """
        if identify is None:
            return await self.by_embedded_id(token)
        return await self.by_identity(identify)
