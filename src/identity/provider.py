"""
Identity adapters.

Two interchangeable providers behind one interface: a mock that fabricates
users and opaque base64 tokens for local development, and an adapter over the
hosted platform's user management.
"""

from __future__ import annotations

import base64
import binascii
import logging
import time
import uuid
from abc import ABC, abstractmethod
from typing import Dict, Optional

from src.catalyst_client import CatalystClient
from src.daybook.errors import InvalidArgumentError, PlatformError, UnauthenticatedError

from .models import AuthResult, User

logger = logging.getLogger(__name__)

REGISTRATION_FIELDS_REQUIRED = "First name, last name, and email are required"


def _require_registration_fields(
    first_name: Optional[str], last_name: Optional[str], email: Optional[str]
) -> None:
    if not first_name or not last_name or not email:
        raise InvalidArgumentError(REGISTRATION_FIELDS_REQUIRED)


class IdentityProvider(ABC):
    """Register/login/logout/current-user over some identity backend."""

    @abstractmethod
    def register(self, first_name: str, last_name: str, email: str) -> AuthResult:
        """
        Create a user.

        Raises:
            InvalidArgumentError: a name or the email is missing
        """

    @abstractmethod
    def login(self, email: str, password: str, token: Optional[str] = None) -> AuthResult:
        """Return the session for a user. Passwords are not verified here."""

    @abstractmethod
    def resolve(self, token: str) -> User:
        """
        Map a bearer token to its user.

        Raises:
            UnauthenticatedError: the token cannot be resolved
        """

    def logout(self) -> None:
        """Stateless: the client discards its token."""
        return None


class MockIdentityProvider(IdentityProvider):
    """In-process identity for development. Tokens are base64("<email>:<epoch-ms>")."""

    def __init__(self) -> None:
        self._profiles: Dict[str, User] = {}

    @staticmethod
    def user_id_for(email: str) -> str:
        """Stable id per email so tokens keep resolving across restarts."""
        return "user_" + uuid.uuid5(uuid.NAMESPACE_URL, f"mailto:{email.lower()}").hex[:12]

    @staticmethod
    def issue_token(email: str) -> str:
        raw = f"{email}:{int(time.time() * 1000)}"
        return base64.b64encode(raw.encode("utf-8")).decode("ascii")

    def _synthesize(self, email: str) -> User:
        local_part = email.split("@", 1)[0]
        names = [part.capitalize() for part in local_part.replace("_", ".").split(".") if part]
        return User(
            id=self.user_id_for(email),
            first_name=names[0] if names else "Demo",
            last_name=" ".join(names[1:]) if len(names) > 1 else "User",
            email_id=email,
        )

    def _profile(self, email: str) -> User:
        return self._profiles.get(email.lower()) or self._synthesize(email)

    def register(self, first_name: str, last_name: str, email: str) -> AuthResult:
        _require_registration_fields(first_name, last_name, email)
        user = User(
            id=self.user_id_for(email),
            first_name=first_name,
            last_name=last_name,
            email_id=email,
        )
        self._profiles[email.lower()] = user
        logger.info("Registered mock user %s", user.id)
        return AuthResult(user=user, token=self.issue_token(email), message="Registration successful")

    def login(self, email: str, password: str, token: Optional[str] = None) -> AuthResult:
        if not email or not password:
            raise InvalidArgumentError("Email and password are required")
        user = self._profile(email)
        return AuthResult(user=user, token=self.issue_token(email), message="Login successful")

    def resolve(self, token: str) -> User:
        try:
            decoded = base64.b64decode(token.encode("ascii"), validate=True).decode("utf-8")
        except (binascii.Error, UnicodeError, ValueError) as exc:
            raise UnauthenticatedError("Invalid token") from exc

        email, sep, _ = decoded.rpartition(":")
        if not sep or "@" not in email:
            raise UnauthenticatedError("Invalid token")
        return self._profile(email)


class HostedIdentityProvider(IdentityProvider):
    """
    Delegates to the hosted platform's user management.

    Login itself happens client-side against the platform; this adapter only
    reads back the session that the client's token belongs to.
    """

    def __init__(self, client: CatalystClient, redirect_url: str):
        self.client = client
        self.redirect_url = redirect_url

    def register(self, first_name: str, last_name: str, email: str) -> AuthResult:
        _require_registration_fields(first_name, last_name, email)
        data = self.client.signup(
            {"first_name": first_name, "last_name": last_name, "email_id": email},
            redirect_url=self.redirect_url,
        )
        user = User.from_platform(data.get("user_details") or data)
        logger.info("Signup initiated for user %s", user.id or email)
        return AuthResult(
            user=user,
            token=None,
            message="Registration initiated. Please check your email to confirm.",
        )

    def login(self, email: str, password: str, token: Optional[str] = None) -> AuthResult:
        if not token:
            raise UnauthenticatedError("Not authenticated")
        return AuthResult(user=self.resolve(token), token=token, message="Login successful")

    def resolve(self, token: str) -> User:
        try:
            data = self.client.current_user(token)
        except PlatformError as exc:
            logger.warning("Token resolution failed: %s", exc.details)
            raise UnauthenticatedError("Invalid token") from exc
        if not data:
            raise UnauthenticatedError("Invalid token")
        return User.from_platform(data)
