"""Wire request schemas (pydantic)."""

from authmgmt.schemas.requests import (
    ACTIONS,
    AuthManagementRequest,
    parse_request,
)

__all__ = ["ACTIONS", "AuthManagementRequest", "parse_request"]
