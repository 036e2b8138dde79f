"""Domain protocols (ports) package.

Infrastructure adapters implement these protocols without inheritance.

Usage:
    from authmgmt.domain.protocols import AccountStore, SecretHasherProtocol
"""

from authmgmt.domain.protocols.account_store import AccountStore
from authmgmt.domain.protocols.logger_protocol import LoggerProtocol
from authmgmt.domain.protocols.notifier_protocol import NotifierProtocol, Sanitizer
from authmgmt.domain.protocols.secret_hasher_protocol import SecretHasherProtocol

__all__ = [
    "AccountStore",
    "LoggerProtocol",
    "NotifierProtocol",
    "Sanitizer",
    "SecretHasherProtocol",
]
