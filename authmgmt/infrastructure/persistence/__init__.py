"""Persistence adapters."""

from authmgmt.infrastructure.persistence.in_memory_account_store import (
    InMemoryAccountStore,
)

__all__ = ["InMemoryAccountStore"]
