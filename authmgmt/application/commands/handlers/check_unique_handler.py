"""Check Unique handler.

Flow:
1. Reject any field not listed in identify_user_props (BAD_INPUT)
2. Skip fields whose candidate value is None
3. Query the store for each remaining field (limit 2)
4. A field conflicts when two accounts hold the value, or one account other
   than the caller does
5. Return Success(None), or one Failure naming every conflicting field
"""

from authmgmt.application.commands.credential_commands import CheckUnique
from authmgmt.core.config import AuthManagementSettings
from authmgmt.core.enums import ErrorCode
from authmgmt.core.errors import ConflictError, DomainError, ValidationError
from authmgmt.core.result import Failure, Result, Success
from authmgmt.domain.protocols import AccountStore, LoggerProtocol


class CheckUniqueHandler:
    """Handler for check unique command.

    Uniqueness is opt-in per field: only fields present with a value are
    checked. Only identity fields may be queried; stored secrets and other
    account columns are never matched against caller input here.
    """

    def __init__(
        self,
        settings: AuthManagementSettings,
        store: AccountStore,
        logger: LoggerProtocol,
    ) -> None:
        """Initialize check unique handler with dependencies.

        Args:
            settings: Settings naming the identity fields that may be checked.
            store: Account store queried for conflicting values.
            logger: Structured logger.
        """
        self._settings = settings
        self._store = store
        self._logger = logger

    async def handle(self, cmd: CheckUnique) -> Result[None, DomainError]:
        """Handle check unique command.

        Args:
            cmd: CheckUnique command with candidate values and own id.

        Returns:
            Success(None) when every value is free.
            Failure(ValidationError) with BAD_INPUT for a non-identity field.
            Failure(ConflictError) with NOT_UNIQUE otherwise.
        """
        allowed = self._settings.identify_user_props
        for field in cmd.value:
            if field not in allowed:
                self._logger.warning(
                    "Uniqueness check rejected",
                    field=field,
                    reason="not_identity_field",
                )
                return Failure(
                    error=ValidationError(
                        code=ErrorCode.BAD_INPUT,
                        message=f"Field {field!r} cannot be checked for uniqueness.",
                        field=field,
                    )
                )

        conflicting: list[str] = []
        for field, value in cmd.value.items():
            if value is None:
                continue
            if isinstance(value, str):
                value = value.strip()

            matches = await self._store.find({field: value}, limit=2)
            if len(matches) > 1 or (len(matches) == 1 and matches[0].id != cmd.own_id):
                conflicting.append(field)

        if conflicting:
            self._logger.info(
                "Identity values already taken",
                fields=conflicting,
                own_id=cmd.own_id,
            )
            return Failure(
                error=ConflictError(
                    code=ErrorCode.NOT_UNIQUE,
                    message="" if cmd.no_err_msg else "Values already taken.",
                    resource_type="Account",
                    conflicting_fields=tuple(conflicting),
                    details={field: "Already taken." for field in conflicting},
                )
            )

        return Success(value=None)
