"""Logging notifier (adapter).

Default notifier: records the event instead of delivering it. Applications
that send email or SMS provide their own NotifierProtocol implementation.
"""

from collections.abc import Mapping
from typing import Any

from authmgmt.domain.entities.account import PublicAccount
from authmgmt.domain.protocols import LoggerProtocol


class LoggingNotifier:
    """Notifier that only logs.

    Issued token values are never written to the log.
    """

    def __init__(self, logger: LoggerProtocol) -> None:
        self._logger = logger

    async def notify(
        self,
        event: str,
        account: PublicAccount,
        notifier_options: Mapping[str, Any],
        new_identity: Mapping[str, Any] | None = None,
    ) -> None:
        self._logger.info(
            "Notification not delivered (logging notifier)",
            notification_event=event,
            account_id=account.get("id"),
            changed_fields=sorted(new_identity) if new_identity else None,
        )
