"""User identity: profiles, tokens and the providers that issue them."""

from .models import AuthResult, User
from .provider import HostedIdentityProvider, IdentityProvider, MockIdentityProvider

__all__ = [
    "AuthResult",
    "User",
    "IdentityProvider",
    "MockIdentityProvider",
    "HostedIdentityProvider",
]
