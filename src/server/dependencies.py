"""Dependency helpers shared across FastAPI routes."""

from __future__ import annotations

import asyncio
import logging
from functools import lru_cache
from typing import Any, Callable, TypeVar

from src.daybook import Config, load_config
from src.daybook.errors import DaybookError, InternalError, PlatformError
from src.expenses import Expense, ExpenseService, ExpenseSummary
from src.identity import (
    HostedIdentityProvider,
    IdentityProvider,
    MockIdentityProvider,
    User,
)
from src.records import RecordStore, create_catalyst_client, create_record_store
from src.todo import Todo, TodoService

from .schemas import (
    ExpenseResponse,
    ExpenseSummaryResponse,
    TodoResponse,
    UserResponse,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


@lru_cache(maxsize=1)
def get_config() -> Config:
    """Settings singleton."""
    return load_config()


@lru_cache(maxsize=1)
def get_record_store() -> RecordStore:
    """Singleton record store for the configured backend."""
    return create_record_store(get_config())


@lru_cache(maxsize=1)
def get_identity_provider() -> IdentityProvider:
    """Singleton identity provider."""
    config = get_config()
    if config.auth.provider == "hosted":
        return HostedIdentityProvider(create_catalyst_client(config), config.hosted.redirect_url)
    return MockIdentityProvider()


@lru_cache(maxsize=1)
def get_todo_service() -> TodoService:
    return TodoService(get_record_store())


@lru_cache(maxsize=1)
def get_expense_service() -> ExpenseService:
    return ExpenseService(get_record_store())


def clear_dependency_caches() -> None:
    """Drop every singleton so the next request rebuilds from fresh settings."""
    for factory in (
        get_config,
        get_record_store,
        get_identity_provider,
        get_todo_service,
        get_expense_service,
    ):
        factory.cache_clear()


async def run_service(failure: str, func: Callable[..., T], *args: Any, **kwargs: Any) -> T:
    """
    Run a blocking service call in a worker thread.

    Application errors pass through unchanged; platform failures and anything
    unexpected become InternalError(failure) with the cause in ``details``.
    """
    try:
        return await asyncio.to_thread(func, *args, **kwargs)
    except PlatformError as exc:
        logger.error("%s: %s", failure, exc.details or exc.message)
        raise InternalError(failure, details=exc.details or exc.message) from exc
    except DaybookError:
        raise
    except Exception as exc:
        logger.exception("%s: %s", failure, exc)
        raise InternalError(failure, details=str(exc)) from exc


def serialize_user(user: User) -> UserResponse:
    return UserResponse(**user.to_dict())


def serialize_todo(item: Todo) -> TodoResponse:
    """Convert domain Todo to API response."""
    return TodoResponse(**item.to_dict())


def serialize_expense(item: Expense) -> ExpenseResponse:
    """Convert domain Expense to API response."""
    return ExpenseResponse(**item.to_dict())


def serialize_summary(summary: ExpenseSummary) -> ExpenseSummaryResponse:
    return ExpenseSummaryResponse.model_validate(summary.to_dict())
