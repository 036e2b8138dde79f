"""Notifier protocol (outbound channel) and sanitizer contract.

The notifier delivers issued tokens and change confirmations to the account
holder (email, SMS, ...). Delivery is not this package's concern; only the
call contract is.

Event names:
    resendVerifySignup, verifySignup, sendResetPwd, resetPwd,
    passwordChange, identityChange
"""

from collections.abc import Callable, Mapping
from typing import Any, Protocol

from authmgmt.domain.entities.account import Account, PublicAccount

# Projection applied to every account before it leaves a flow
type Sanitizer = Callable[[Account], PublicAccount]


class NotifierProtocol(Protocol):
    """Outbound notification interface.

    Implementations:
        - LoggingNotifier: logs the event (default, development)
        - Application-provided adapters (email/SMS delivery)
    """

    async def notify(
        self,
        event: str,
        account: PublicAccount,
        notifier_options: Mapping[str, Any],
        new_identity: Mapping[str, Any] | None = None,
    ) -> None:
        """Notify the account holder about a credential event.

        Args:
            event: Event name.
            account: Sanitized account view. For flows that issue secrets it
                also carries the raw tokens issued by that request
                (``verify_token``/``verify_short_token`` or
                ``reset_token``/``reset_short_token``).
            notifier_options: Caller-supplied options passed through untouched.
            new_identity: Staged identity changes (identityChange only).

        Note:
            Errors propagate to the flow's caller. Account state persisted
            before the notification is not rolled back.
        """
        ...
