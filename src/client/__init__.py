"""Terminal front end: API client, auth state machine and session."""

from .api import ApiError, DaybookApiClient
from .session import AuthSession
from .state import AuthState, AuthStatus

__all__ = ["ApiError", "DaybookApiClient", "AuthSession", "AuthState", "AuthStatus"]
