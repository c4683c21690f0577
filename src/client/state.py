"""
Client-side auth state.

An immutable value moved between idle/loading/authenticated/error by pure
transition functions; callers keep the latest value.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict, Optional


class AuthStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    AUTHENTICATED = "authenticated"
    ERROR = "error"


@dataclass(frozen=True)
class AuthState:
    status: AuthStatus = AuthStatus.IDLE
    user: Optional[Dict[str, Any]] = None
    token: Optional[str] = None
    error: Optional[str] = None

    @property
    def is_authenticated(self) -> bool:
        return self.status is AuthStatus.AUTHENTICATED


def initial_state(token: Optional[str] = None) -> AuthState:
    """Idle, possibly holding a token persisted by an earlier session."""
    return AuthState(token=token)


def start(state: AuthState) -> AuthState:
    return replace(state, status=AuthStatus.LOADING, error=None)


def succeed(state: AuthState, user: Dict[str, Any], token: Optional[str]) -> AuthState:
    return AuthState(status=AuthStatus.AUTHENTICATED, user=user, token=token, error=None)


def fail(state: AuthState, message: str) -> AuthState:
    """Any failure drops the user and the token."""
    return AuthState(status=AuthStatus.ERROR, user=None, token=None, error=message)


def logout(state: AuthState) -> AuthState:
    return AuthState()


def clear_error(state: AuthState) -> AuthState:
    if state.status is AuthStatus.ERROR:
        return replace(state, status=AuthStatus.IDLE, error=None)
    return replace(state, error=None)
