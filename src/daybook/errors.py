"""Daybook exception hierarchy.

Every error carries the HTTP status it maps to so the server can turn it into
an ``{"error": ..., "details": ...}`` response without a lookup table.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class DaybookError(Exception):
    """Base exception for all application errors."""

    status_code: int = 500

    def __init__(self, message: str, details: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"error": self.message}
        if self.details:
            payload["details"] = self.details
        return payload


class InvalidArgumentError(DaybookError):
    """Missing or malformed input."""

    status_code = 400


class UnauthenticatedError(DaybookError):
    """Missing, malformed or unresolvable bearer token."""

    status_code = 401


class NotFoundError(DaybookError):
    """No record matches both the id and the caller."""

    status_code = 404


class InternalError(DaybookError):
    """Unexpected upstream or logic failure."""

    status_code = 500


class PlatformError(InternalError):
    """The hosted platform rejected a call or could not be reached."""

    pass
