"""AccountStore protocol for account persistence.

Port (interface) for hexagonal architecture.
The store owns the records; credential flows only read and patch them.
"""

from collections.abc import Mapping
from typing import Any, Protocol

from authmgmt.domain.entities.account import Account


class AccountStore(Protocol):
    """Account store protocol (port).

    This is a Protocol (not ABC) for structural typing.
    Implementations don't need to inherit from this.

    Methods:
        get: Retrieve account by id
        find: Retrieve accounts matching identity field values
        patch: Atomically update fields of one account

    Consistency:
        ``patch`` must be atomic per record. Nothing else is assumed: two
        concurrent flows on the same account can interleave between their
        read and their patch.
    """

    async def get(self, account_id: str) -> Account | None:
        """Find account by id.

        Args:
            account_id: Store-assigned identifier.

        Returns:
            Account if found, None otherwise.
        """
        ...

    async def find(self, query: Mapping[str, Any], limit: int) -> list[Account]:
        """Find accounts whose identity fields equal every value in ``query``.

        Args:
            query: Identity field name to value.
            limit: Maximum number of accounts to return.

        Returns:
            Up to ``limit`` matching accounts.

        Example:
            >>> matches = await store.find({"email": "a@example.com"}, limit=2)
            >>> len(matches) == 1  # unambiguous
        """
        ...

    async def patch(self, account_id: str, changes: Mapping[str, Any]) -> Account:
        """Apply field changes to one account atomically.

        Keys are Account attribute names. ``identity`` replaces the whole
        identity mapping.

        Args:
            account_id: Account to update.
            changes: Attribute name to new value.

        Returns:
            The account after the update.

        Raises:
            KeyError: If the account does not exist.
        """
        ...
