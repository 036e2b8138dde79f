"""Logging adapters implementing LoggerProtocol."""

from authmgmt.infrastructure.logging.console_adapter import ConsoleAdapter

__all__ = ["ConsoleAdapter"]
