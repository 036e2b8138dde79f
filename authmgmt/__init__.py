"""Credential lifecycle management for user accounts.

Signup verification, forgotten-password recovery, password change and
identity change with re-verification, driven by hashed single-purpose
tokens and an explicit verification state machine.

Usage:
    from authmgmt.application.service import AuthManagementService
"""

__version__ = "0.1.0"
