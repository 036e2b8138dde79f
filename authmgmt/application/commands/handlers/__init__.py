"""Command handlers, one module per credential flow.

Each handler owns one flow end to end and returns a Result.
"""

from authmgmt.application.commands.handlers.check_unique_handler import (
    CheckUniqueHandler,
)
from authmgmt.application.commands.handlers.identity_change_handler import (
    IdentityChangeHandler,
)
from authmgmt.application.commands.handlers.password_change_handler import (
    PasswordChangeHandler,
)
from authmgmt.application.commands.handlers.resend_verify_signup_handler import (
    ResendVerifySignupHandler,
)
from authmgmt.application.commands.handlers.reset_password_handler import (
    ResetPasswordHandler,
)
from authmgmt.application.commands.handlers.send_reset_password_handler import (
    SendResetPasswordHandler,
)
from authmgmt.application.commands.handlers.verify_signup_handler import (
    VerifySignupHandler,
)

__all__ = [
    "CheckUniqueHandler",
    "IdentityChangeHandler",
    "PasswordChangeHandler",
    "ResendVerifySignupHandler",
    "ResetPasswordHandler",
    "SendResetPasswordHandler",
    "VerifySignupHandler",
]
