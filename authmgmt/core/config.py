"""
Configuration management using Pydantic Settings.

Settings are built once per process and handed to every handler explicitly.
Nothing in the application layer reads a module-level settings object.

Architecture:
- Flat Settings structure (no nesting)
- Loaded from environment variables prefixed with AUTHMGMT_
- Frozen after construction
- Type validation via Pydantic

Usage:
    from authmgmt.core.config import get_settings

    settings = get_settings()
    service = AuthManagementService(settings=settings, ...)

    # Explicit construction (tests, embedding applications)
    settings = AuthManagementSettings(reset_attempts=3, reuse_reset_token=True)
"""

from datetime import timedelta
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from authmgmt.core.enums import Environment


class AuthManagementSettings(BaseSettings):
    """
    Credential flow settings (flat structure).

    Configuration precedence:
        1. Explicit constructor arguments
        2. Environment variables (AUTHMGMT_ prefix)
        3. Default values

    Returns:
        AuthManagementSettings: Immutable configuration shared by all flows.
    """

    # Environment detection
    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Application environment (development, testing, ci, production)",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    # Account lookup
    identify_user_props: list[str] = Field(
        default_factory=lambda: ["email"],
        description="Identity fields accepted when locating an account",
    )
    password_field: str = Field(
        default="password",
        description="Record field that holds the password digest",
    )

    # Token shape
    # A UUID id, the separator and 2 * 16 hex characters fill the 72 bytes bcrypt reads
    long_token_len: int = Field(
        default=15,
        ge=1,
        le=16,
        description="Random bytes in a long token (rendered as 2x hex characters)",
    )
    short_token_len: int = Field(
        default=6,
        ge=1,
        description="Characters in a short token",
    )
    short_token_digits: bool = Field(
        default=True,
        description="Short tokens use digits only (False adds upper-case letters)",
    )

    # Validity windows
    verify_delay: timedelta = Field(
        default=timedelta(days=5),
        description="Validity window of signup/identity-change tokens",
    )
    reset_delay: timedelta = Field(
        default=timedelta(hours=2),
        description="Validity window of password reset tokens",
    )
    reset_attempts: int = Field(
        default=0,
        ge=0,
        description="Mismatched reset claims tolerated before the reset token is invalidated",
    )

    # Policy flags
    skip_is_verified_check: bool = Field(
        default=False,
        description="Allow password reset for accounts that are not verified",
    )
    reuse_reset_token: bool = Field(
        default=False,
        description="Store reset tokens raw and re-send an existing one while "
        "more than half of its validity window remains",
    )
    reuse_verify_token: bool = Field(
        default=False,
        description="Store verify tokens raw and compare them by equality",
    )
    resend_requires_unverified: bool = Field(
        default=True,
        description="Reject resendVerifySignup for verified accounts without staged changes",
    )

    # Hashing
    bcrypt_rounds: int = Field(
        default=12,
        description="Number of bcrypt hashing rounds (10-14 recommended, 12 = ~250ms)",
    )

    model_config = SettingsConfigDict(
        env_prefix="AUTHMGMT_",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    @field_validator("bcrypt_rounds")
    @classmethod
    def validate_bcrypt_rounds(cls, v: int) -> int:
        """
        Validate bcrypt rounds are within safe range.

        Args:
            v: Number of bcrypt rounds.

        Returns:
            int: Validated bcrypt rounds.

        Raises:
            ValueError: If rounds are not between 10 and 20.
        """
        if not 10 <= v <= 20:
            raise ValueError("bcrypt_rounds must be between 10 and 20")
        return v

    @field_validator("identify_user_props")
    @classmethod
    def validate_identify_user_props(cls, v: list[str]) -> list[str]:
        """
        Require at least one identity field.

        Args:
            v: Identity field names.

        Returns:
            list[str]: Field names with surrounding whitespace removed.

        Raises:
            ValueError: If no field name is given.
        """
        props = [prop.strip() for prop in v if prop.strip()]
        if not props:
            raise ValueError("identify_user_props must name at least one field")
        return props

    @field_validator("verify_delay", "reset_delay")
    @classmethod
    def validate_delay(cls, v: timedelta) -> timedelta:
        """
        Validity windows must be positive.

        Raises:
            ValueError: If the window is zero or negative.
        """
        if v <= timedelta(0):
            raise ValueError("validity window must be positive")
        return v

    @property
    def is_production(self) -> bool:
        """
        Check if running in production environment.

        Returns:
            bool: True if environment is PRODUCTION, False otherwise.
        """
        return self.environment == Environment.PRODUCTION


@lru_cache()
def get_settings() -> AuthManagementSettings:
    """
    Get cached settings instance.

    Returns:
        AuthManagementSettings: Process-wide settings built from the environment.
    """
    return AuthManagementSettings()
