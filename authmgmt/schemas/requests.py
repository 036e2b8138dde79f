"""Wire request schemas.

Pydantic models for the ``{action, value, notifierOptions?, ownId?, meta?}``
request shape. Kept separate from the commands: these models own the wire
names (camelCase) and structure, the commands own the meaning.

Actions:
    checkUnique                   value: {field: candidate}, ownId, meta.noErrMsg
    resendVerifySignup            value: identity fields
    verifySignupLong              value: long token
    verifySignupShort             value: {token, user}
    verifySignupSetPasswordLong   value: {token, password}
    verifySignupSetPasswordShort  value: {token, user, password}
    sendResetPwd                  value: identity fields
    resetPwdLong                  value: {token, password}
    resetPwdShort                 value: {token, user, password}
    passwordChange                value: {user, oldPassword, password}
    identityChange                value: {user, password, changes}
    options                       (no value)
"""

from collections.abc import Mapping
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from authmgmt.application.commands import (
    AuthManagementCommand,
    CheckUnique,
    GetOptions,
    IdentityChange,
    PasswordChange,
    ResendVerifySignup,
    ResetPasswordLong,
    ResetPasswordShort,
    SendResetPassword,
    VerifySignupLong,
    VerifySignupSetPasswordLong,
    VerifySignupSetPasswordShort,
    VerifySignupShort,
)

_WIRE_CONFIG = ConfigDict(populate_by_name=True, extra="ignore")


# =============================================================================
# Value payloads
# =============================================================================


class ShortTokenValue(BaseModel):
    """Short token plus the identity fields that locate the account."""

    model_config = _WIRE_CONFIG

    token: str
    user: dict[str, Any]


class ShortTokenPasswordValue(ShortTokenValue):
    password: str


class LongTokenPasswordValue(BaseModel):
    model_config = _WIRE_CONFIG

    token: str
    password: str


class PasswordChangeValue(BaseModel):
    model_config = _WIRE_CONFIG

    user: dict[str, Any]
    old_password: str = Field(..., alias="oldPassword")
    password: str


class IdentityChangeValue(BaseModel):
    model_config = _WIRE_CONFIG

    user: dict[str, Any]
    password: str
    changes: dict[str, Any]


class CheckUniqueMeta(BaseModel):
    model_config = _WIRE_CONFIG

    no_err_msg: bool = Field(default=False, alias="noErrMsg")


# =============================================================================
# Requests
# =============================================================================


class _ActionRequest(BaseModel):
    """Fields shared by every notifying action."""

    model_config = _WIRE_CONFIG

    notifier_options: dict[str, Any] = Field(
        default_factory=dict,
        alias="notifierOptions",
        description="Passed through to the notifier untouched",
    )


class CheckUniqueRequest(BaseModel):
    model_config = _WIRE_CONFIG

    action: Literal["checkUnique"]
    value: dict[str, Any]
    own_id: str | None = Field(default=None, alias="ownId")
    meta: CheckUniqueMeta = Field(default_factory=CheckUniqueMeta)

    def to_command(self) -> CheckUnique:
        return CheckUnique(
            value=self.value, own_id=self.own_id, no_err_msg=self.meta.no_err_msg
        )


class ResendVerifySignupRequest(_ActionRequest):
    action: Literal["resendVerifySignup"]
    value: dict[str, Any]

    def to_command(self) -> ResendVerifySignup:
        return ResendVerifySignup(
            identify=self.value, notifier_options=self.notifier_options
        )


class VerifySignupLongRequest(_ActionRequest):
    action: Literal["verifySignupLong"]
    value: str

    def to_command(self) -> VerifySignupLong:
        return VerifySignupLong(token=self.value, notifier_options=self.notifier_options)


class VerifySignupShortRequest(_ActionRequest):
    action: Literal["verifySignupShort"]
    value: ShortTokenValue

    def to_command(self) -> VerifySignupShort:
        return VerifySignupShort(
            token=self.value.token,
            identify=self.value.user,
            notifier_options=self.notifier_options,
        )


class VerifySignupSetPasswordLongRequest(_ActionRequest):
    action: Literal["verifySignupSetPasswordLong"]
    value: LongTokenPasswordValue

    def to_command(self) -> VerifySignupSetPasswordLong:
        return VerifySignupSetPasswordLong(
            token=self.value.token,
            password=self.value.password,
            notifier_options=self.notifier_options,
        )


class VerifySignupSetPasswordShortRequest(_ActionRequest):
    action: Literal["verifySignupSetPasswordShort"]
    value: ShortTokenPasswordValue

    def to_command(self) -> VerifySignupSetPasswordShort:
        return VerifySignupSetPasswordShort(
            token=self.value.token,
            identify=self.value.user,
            password=self.value.password,
            notifier_options=self.notifier_options,
        )


class SendResetPasswordRequest(_ActionRequest):
    action: Literal["sendResetPwd"]
    value: dict[str, Any]

    def to_command(self) -> SendResetPassword:
        return SendResetPassword(
            identify=self.value, notifier_options=self.notifier_options
        )


class ResetPasswordLongRequest(_ActionRequest):
    action: Literal["resetPwdLong"]
    value: LongTokenPasswordValue

    def to_command(self) -> ResetPasswordLong:
        return ResetPasswordLong(
            token=self.value.token,
            password=self.value.password,
            notifier_options=self.notifier_options,
        )


class ResetPasswordShortRequest(_ActionRequest):
    action: Literal["resetPwdShort"]
    value: ShortTokenPasswordValue

    def to_command(self) -> ResetPasswordShort:
        return ResetPasswordShort(
            token=self.value.token,
            identify=self.value.user,
            password=self.value.password,
            notifier_options=self.notifier_options,
        )


class PasswordChangeRequest(_ActionRequest):
    action: Literal["passwordChange"]
    value: PasswordChangeValue

    def to_command(self) -> PasswordChange:
        return PasswordChange(
            identify=self.value.user,
            old_password=self.value.old_password,
            password=self.value.password,
            notifier_options=self.notifier_options,
        )


class IdentityChangeRequest(_ActionRequest):
    action: Literal["identityChange"]
    value: IdentityChangeValue

    def to_command(self) -> IdentityChange:
        return IdentityChange(
            identify=self.value.user,
            password=self.value.password,
            changes=self.value.changes,
            notifier_options=self.notifier_options,
        )


class OptionsRequest(BaseModel):
    model_config = _WIRE_CONFIG

    action: Literal["options"]

    def to_command(self) -> GetOptions:
        return GetOptions()


AuthManagementRequest = Annotated[
    CheckUniqueRequest
    | ResendVerifySignupRequest
    | VerifySignupLongRequest
    | VerifySignupShortRequest
    | VerifySignupSetPasswordLongRequest
    | VerifySignupSetPasswordShortRequest
    | SendResetPasswordRequest
    | ResetPasswordLongRequest
    | ResetPasswordShortRequest
    | PasswordChangeRequest
    | IdentityChangeRequest
    | OptionsRequest,
    Field(discriminator="action"),
]

ACTIONS: frozenset[str] = frozenset(
    {
        "checkUnique",
        "resendVerifySignup",
        "verifySignupLong",
        "verifySignupShort",
        "verifySignupSetPasswordLong",
        "verifySignupSetPasswordShort",
        "sendResetPwd",
        "resetPwdLong",
        "resetPwdShort",
        "passwordChange",
        "identityChange",
        "options",
    }
)

_request_adapter = TypeAdapter(AuthManagementRequest)


def parse_request(request: Mapping[str, Any]) -> AuthManagementCommand:
    """Validate a wire request and convert it to its command.

    Args:
        request: Decoded wire request.

    Returns:
        The command for the request's action.

    Raises:
        pydantic.ValidationError: If the payload does not match its action.
    """
    return _request_adapter.validate_python(dict(request)).to_command()
