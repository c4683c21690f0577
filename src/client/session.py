"""Auth session: drives the state transitions and persists the token between runs."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from . import state as auth
from .api import ApiError, DaybookApiClient
from .state import AuthState

logger = logging.getLogger(__name__)

DEFAULT_TOKEN_PATH = Path.home() / ".daybook" / "token"


class AuthSession:
    """Login/register/restore/logout for the terminal client."""

    def __init__(self, api: DaybookApiClient, token_path: Optional[Path] = None):
        self.api = api
        self.token_path = Path(token_path) if token_path else DEFAULT_TOKEN_PATH
        token = self._load_token()
        self.state: AuthState = auth.initial_state(token)
        self.api.token = token

    def _load_token(self) -> Optional[str]:
        if not self.token_path.exists():
            return None
        return self.token_path.read_text(encoding="utf-8").strip() or None

    def _save_token(self, token: str) -> None:
        self.token_path.parent.mkdir(parents=True, exist_ok=True)
        self.token_path.write_text(token, encoding="utf-8")

    def _drop_token(self) -> None:
        self.token_path.unlink(missing_ok=True)
        self.api.token = None

    def _accept(self, payload: dict) -> AuthState:
        token = payload.get("token")
        if token:
            self._save_token(token)
            self.api.token = token
            self.state = auth.succeed(self.state, payload["user"], token)
        else:
            # Hosted signup issues no token until the email is confirmed.
            self.state = auth.logout(self.state)
        return self.state

    def login(self, email: str, password: str) -> AuthState:
        self.state = auth.start(self.state)
        try:
            payload = self.api.login(email, password)
        except ApiError as exc:
            self.state = auth.fail(self.state, exc.error or "Login failed")
            raise
        return self._accept(payload)

    def register(self, first_name: str, last_name: str, email: str, password: str) -> AuthState:
        self.state = auth.start(self.state)
        try:
            payload = self.api.register(first_name, last_name, email, password)
        except ApiError as exc:
            self.state = auth.fail(self.state, exc.error or "Registration failed")
            raise
        return self._accept(payload)

    def restore(self) -> AuthState:
        """Verify a persisted token with /auth/me; a rejected token is discarded."""
        token = self.state.token
        if not token:
            return self.state
        self.state = auth.start(self.state)
        try:
            payload = self.api.me()
        except ApiError as exc:
            logger.info("Stored token rejected: %s", exc.error)
            self._drop_token()
            self.state = auth.fail(self.state, "Session expired")
            return self.state
        self.state = auth.succeed(self.state, payload["user"], token)
        return self.state

    def expire(self) -> None:
        """Forget a token the server no longer accepts."""
        self._drop_token()
        self.state = auth.fail(self.state, "Session expired")

    def logout(self) -> AuthState:
        try:
            self.api.logout()
        except ApiError as exc:
            logger.warning("Logout request failed: %s", exc.error)
        self._drop_token()
        self.state = auth.logout(self.state)
        return self.state
