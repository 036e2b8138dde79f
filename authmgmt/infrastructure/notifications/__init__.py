"""Notifier adapters implementing NotifierProtocol."""

from authmgmt.infrastructure.notifications.logging_notifier import LoggingNotifier

__all__ = ["LoggingNotifier"]
