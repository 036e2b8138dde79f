"""Dependency factories (composition root).

Application-scoped singletons built from the cached settings:
- Logging (structlog console adapter)
- Secret hashing (bcrypt)
- Account store (in-memory document store)
- Notifier (logging notifier)
- AuthManagementService

Adapters are imported inside the factories so that importing ``authmgmt.core``
never pulls in infrastructure.

Usage:
    from authmgmt.core.container import get_auth_management_service

    service = get_auth_management_service()
    result = await service.create({"action": "sendResetPwd", "value": {...}})

Tests construct collaborators explicitly instead of going through these
factories, or call ``cache_clear()`` between cases.
"""

from functools import lru_cache
from typing import TYPE_CHECKING

from authmgmt.core.config import get_settings
from authmgmt.core.enums import Environment

if TYPE_CHECKING:
    from authmgmt.application.service import AuthManagementService
    from authmgmt.domain.protocols import (
        AccountStore,
        LoggerProtocol,
        NotifierProtocol,
        SecretHasherProtocol,
    )


@lru_cache()
def get_logger() -> "LoggerProtocol":
    """Return the application-scoped logger singleton.

    Adapter selection:
    - development: ConsoleAdapter (human-readable)
    - testing/ci/production: ConsoleAdapter (JSON)

    Returns:
        LoggerProtocol: Logger instance implementing the protocol.
    """
    from authmgmt.infrastructure.logging import ConsoleAdapter

    settings = get_settings()
    use_json = settings.environment != Environment.DEVELOPMENT
    return ConsoleAdapter(use_json=use_json, level=settings.log_level)


@lru_cache()
def get_secret_hasher() -> "SecretHasherProtocol":
    """Return the bcrypt hasher singleton using the configured cost factor."""
    from authmgmt.infrastructure.security import BcryptSecretHasher

    return BcryptSecretHasher(cost_factor=get_settings().bcrypt_rounds)


@lru_cache()
def get_account_store() -> "AccountStore":
    """Return the in-memory account store singleton.

    Embedding applications replace this with an adapter over their own store.
    """
    from authmgmt.infrastructure.persistence import InMemoryAccountStore

    return InMemoryAccountStore(password_field=get_settings().password_field)


@lru_cache()
def get_notifier() -> "NotifierProtocol":
    """Return the default notifier (logs events, delivers nothing)."""
    from authmgmt.infrastructure.notifications import LoggingNotifier

    return LoggingNotifier(logger=get_logger())


@lru_cache()
def get_auth_management_service() -> "AuthManagementService":
    """Return the service wired with the default collaborators."""
    from authmgmt.application.service import AuthManagementService

    return AuthManagementService(
        settings=get_settings(),
        store=get_account_store(),
        hasher=get_secret_hasher(),
        notifier=get_notifier(),
        logger=get_logger(),
    )
