"""Runtime environment enumeration.

Used by settings and the logger factory to pick environment-specific
behavior (console vs JSON log rendering).
"""

from enum import Enum


class Environment(str, Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    TESTING = "testing"
    CI = "ci"
    PRODUCTION = "production"
