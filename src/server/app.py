"""FastAPI application bootstrap."""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.daybook import setup_logger

from .dependencies import get_config
from .errors import register_exception_handlers
from .routes import (
    register_auth_routes,
    register_expense_routes,
    register_health_routes,
    register_todo_routes,
)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    config = get_config()
    setup_logger(log_level=config.log_level, log_file=config.log_file)

    app = FastAPI(title="Daybook API", version="1.0.0")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.server.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    prefix = config.server.base_path.rstrip("/")
    register_health_routes(app, prefix)
    register_auth_routes(app, prefix)
    register_todo_routes(app, prefix)
    register_expense_routes(app, prefix)

    return app


app = create_app()
