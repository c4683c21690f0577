from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional


@dataclass(slots=True)
class User:
    """A user profile owned by the identity provider. Read-only to the app."""

    id: str
    first_name: str
    last_name: str
    email_id: str
    org_id: Optional[str] = None

    @classmethod
    def from_platform(cls, data: Dict[str, Any]) -> "User":
        """Build from a hosted platform user payload (``user_id``/``email_id`` keys)."""
        user_id = data.get("user_id") or data.get("id")
        org_id = data.get("org_id")
        return cls(
            id=str(user_id) if user_id is not None else "",
            first_name=data.get("first_name") or "",
            last_name=data.get("last_name") or "",
            email_id=data.get("email_id") or data.get("email") or "",
            org_id=str(org_id) if org_id is not None else None,
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(slots=True)
class AuthResult:
    """Outcome of register/login: the profile and, where issued, a session token."""

    user: User
    token: Optional[str]
    message: str
