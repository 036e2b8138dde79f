"""In-memory account store (adapter).

Implements the AccountStore protocol over plain documents keyed by id, the
way a document database would hold them. Used by tests, examples and
single-process deployments.

Document Layout:
    {
        "id": "0192...",
        "email": "user@example.com",      # identity fields, top level
        "password": "$2b$12$...",         # key set by password_field
        "is_verified": True,
        "verify_token": None, ...         # credential fields
    }

Consistency:
    patch() has no suspension point between read and write, so it is atomic
    per record within one event loop.
"""

import copy
from collections.abc import Mapping
from typing import Any

from uuid_extensions import uuid7

from authmgmt.domain.entities.account import Account

_CREDENTIAL_FIELDS: tuple[str, ...] = (
    "is_verified",
    "verify_token",
    "verify_short_token",
    "verify_expires",
    "verify_changes",
    "reset_token",
    "reset_short_token",
    "reset_expires",
    "reset_attempts",
)


class InMemoryAccountStore:
    """Dictionary-backed account store.

    Usage:
        store = InMemoryAccountStore(password_field=settings.password_field)
        account = await store.create({"email": "a@example.com"}, password_hash=digest)

        matches = await store.find({"email": "a@example.com"}, limit=2)
        account = await store.patch(account.id, {"is_verified": True})
    """

    def __init__(self, password_field: str = "password") -> None:
        """Initialize empty store.

        Args:
            password_field: Document key holding the password digest.
        """
        self._password_field = password_field
        self._documents: dict[str, dict[str, Any]] = {}

    async def create(
        self,
        identity: Mapping[str, Any],
        *,
        account_id: str | None = None,
        password_hash: str | None = None,
        is_verified: bool = False,
        **credentials: Any,
    ) -> Account:
        """Insert a new account document.

        Args:
            identity: Identity/profile fields.
            account_id: Explicit id (a UUIDv7 is assigned otherwise).
            password_hash: Password digest.
            is_verified: Verification status.
            **credentials: Initial credential fields (verify_token, ...).

        Returns:
            The stored account.

        Raises:
            ValueError: If the id is already taken or a credential field is unknown.
        """
        account_id = account_id or str(uuid7())
        if account_id in self._documents:
            raise ValueError(f"Account id already exists: {account_id}")
        unknown = set(credentials) - set(_CREDENTIAL_FIELDS)
        if unknown:
            raise ValueError(f"Unknown credential fields: {sorted(unknown)}")

        account = Account(
            id=account_id,
            identity=dict(identity),
            password_hash=password_hash,
            is_verified=is_verified,
            **credentials,
        )
        self._documents[account_id] = self._to_document(account)
        return self._to_account(self._documents[account_id])

    async def get(self, account_id: str) -> Account | None:
        document = self._documents.get(account_id)
        return self._to_account(document) if document is not None else None

    async def find(self, query: Mapping[str, Any], limit: int) -> list[Account]:
        matches: list[Account] = []
        for document in self._documents.values():
            if all(document.get(key) == value for key, value in query.items()):
                matches.append(self._to_account(document))
                if len(matches) >= limit:
                    break
        return matches

    async def patch(self, account_id: str, changes: Mapping[str, Any]) -> Account:
        document = self._documents.get(account_id)
        if document is None:
            raise KeyError(account_id)

        account = self._to_account(document)
        for name, value in changes.items():
            if name == "id" or not hasattr(account, name):
                raise ValueError(f"Cannot patch field: {name}")
            setattr(account, name, copy.deepcopy(value))

        self._documents[account_id] = self._to_document(account)
        return self._to_account(self._documents[account_id])

    def documents(self) -> list[dict[str, Any]]:
        """Return copies of every stored document."""
        return [copy.deepcopy(document) for document in self._documents.values()]

    def _to_document(self, account: Account) -> dict[str, Any]:
        document: dict[str, Any] = {"id": account.id}
        document.update(copy.deepcopy(account.identity))
        document[self._password_field] = account.password_hash
        for name in _CREDENTIAL_FIELDS:
            document[name] = copy.deepcopy(getattr(account, name))
        return document

    def _to_account(self, document: Mapping[str, Any]) -> Account:
        reserved = {"id", self._password_field, *_CREDENTIAL_FIELDS}
        credentials: dict[str, Any] = {
            name: copy.deepcopy(document.get(name)) for name in _CREDENTIAL_FIELDS
        }
        credentials["is_verified"] = bool(credentials["is_verified"])
        credentials["verify_changes"] = credentials["verify_changes"] or {}
        return Account(
            id=document["id"],
            identity={
                key: copy.deepcopy(value)
                for key, value in document.items()
                if key not in reserved
            },
            password_hash=document.get(self._password_field),
            **credentials,
        )
