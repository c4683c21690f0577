"""Bearer-token authentication, mounted ahead of every protected route."""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from fastapi import Request

from src.daybook.errors import UnauthenticatedError
from src.identity import User

from .dependencies import get_identity_provider

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


def bearer_token(request: Request) -> Optional[str]:
    """Return the bearer credential from the Authorization header, if any."""
    header = request.headers.get("Authorization")
    if not header or not header.startswith(BEARER_PREFIX):
        return None
    return header[len(BEARER_PREFIX):].strip()


async def authenticate(request: Request) -> User:
    """
    Resolve the caller and attach it to ``request.state.user``.

    Raises:
        UnauthenticatedError: header missing or malformed, token empty, or
            the identity provider cannot resolve it
    """
    token = bearer_token(request)
    if token is None:
        raise UnauthenticatedError("No token provided")
    if not token or token == "undefined":
        raise UnauthenticatedError("Invalid token")

    provider = get_identity_provider()
    try:
        user = await asyncio.to_thread(provider.resolve, token)
    except UnauthenticatedError:
        raise
    except Exception as exc:
        logger.exception("Authentication failed: %s", exc)
        raise UnauthenticatedError("Authentication failed") from exc

    request.state.user = user
    request.state.token = token
    return user
