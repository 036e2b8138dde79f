"""Core enums package.

Usage:
    from authmgmt.core.enums import ErrorCode, Environment
"""

from authmgmt.core.enums.environment import Environment
from authmgmt.core.enums.error_code import ErrorCode

__all__ = ["ErrorCode", "Environment"]
