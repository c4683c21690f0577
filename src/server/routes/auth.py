"""Auth endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, FastAPI, Request

from src.identity import User

from ..auth import authenticate, bearer_token
from ..dependencies import get_identity_provider, run_service, serialize_user
from ..schemas import (
    ERROR_RESPONSES,
    AuthResponse,
    CurrentUserResponse,
    LoginRequest,
    MessageResponse,
    RegisterRequest,
)


def register_auth_routes(app: FastAPI, prefix: str = "/api") -> None:
    """Register register/login/logout/me endpoints."""
    router = APIRouter(prefix=f"{prefix}/auth", tags=["auth"], responses=ERROR_RESPONSES)

    @router.post(
        "/register",
        status_code=201,
        response_model=AuthResponse,
        response_model_exclude_none=True,
    )
    async def register(body: RegisterRequest) -> AuthResponse:
        """Create a user; the mock provider also issues a token."""
        provider = get_identity_provider()
        result = await run_service(
            "Registration failed", provider.register, body.first_name, body.last_name, body.email
        )
        return AuthResponse(user=serialize_user(result.user), token=result.token, message=result.message)

    @router.post("/login", response_model=AuthResponse)
    async def login(body: LoginRequest, request: Request) -> AuthResponse:
        """Return the caller's session (hosted: read back from the bearer token)."""
        provider = get_identity_provider()
        result = await run_service(
            "Login failed", provider.login, body.email, body.password, bearer_token(request)
        )
        return AuthResponse(user=serialize_user(result.user), token=result.token, message=result.message)

    @router.post("/logout", response_model=MessageResponse)
    async def logout() -> MessageResponse:
        """Stateless; the client discards its token."""
        get_identity_provider().logout()
        return MessageResponse(message="Logout successful")

    @router.get("/me", response_model=CurrentUserResponse)
    async def current_user(user: User = Depends(authenticate)) -> CurrentUserResponse:
        return CurrentUserResponse(user=serialize_user(user))

    app.include_router(router)
