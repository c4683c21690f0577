"""Pydantic schemas for the FastAPI server."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class ErrorResponse(BaseModel):
    """Body of every error response."""

    error: str
    details: Optional[str] = None


# Documented on every router; the bodies come from src/server/errors.py.
ERROR_RESPONSES: Dict[Union[int, str], Dict[str, Any]] = {
    400: {"model": ErrorResponse, "description": "Invalid input"},
    401: {"model": ErrorResponse, "description": "Missing or invalid token"},
    404: {"model": ErrorResponse, "description": "Not found or not owned"},
    500: {"model": ErrorResponse, "description": "Unexpected failure"},
}


class HealthResponse(BaseModel):
    """Response for health check endpoint."""

    status: str


# Auth


class RegisterRequest(BaseModel):
    """Request body for registration. Presence of the fields is checked by the provider."""

    model_config = ConfigDict(populate_by_name=True)

    first_name: Optional[str] = Field(default=None, alias="firstName")
    last_name: Optional[str] = Field(default=None, alias="lastName")
    email: Optional[str] = None
    password: Optional[str] = None


class LoginRequest(BaseModel):
    """Request body for login."""

    email: Optional[str] = None
    password: Optional[str] = None


class UserResponse(BaseModel):
    """Serialized user profile."""

    id: str
    first_name: str
    last_name: str
    email_id: str
    org_id: Optional[str] = None


class AuthResponse(BaseModel):
    """Response for register/login."""

    success: bool = True
    user: UserResponse
    token: Optional[str] = None
    message: str


class CurrentUserResponse(BaseModel):
    success: bool = True
    user: UserResponse


class MessageResponse(BaseModel):
    """Success without payload (logout, delete)."""

    success: bool = True
    message: str


# Todos


class TodoResponse(BaseModel):
    """Serialized todo."""

    id: str
    title: str
    description: str
    completed: bool
    priority: str
    user_id: str
    created_at: str
    updated_at: Optional[str] = None


class TodoListResponse(BaseModel):
    success: bool = True
    todos: List[TodoResponse]


class TodoEnvelope(BaseModel):
    success: bool = True
    todo: TodoResponse
    message: str


class TodoCreateRequest(BaseModel):
    """Request body for creating a todo."""

    title: Optional[str] = Field(default=None, max_length=200)
    description: Optional[str] = Field(default=None, max_length=2000)
    priority: Optional[str] = Field(default=None, description="low | medium | high")


class TodoUpdateRequest(BaseModel):
    """Request body for updating a todo. Omitted fields keep their values."""

    title: Optional[str] = Field(default=None, max_length=200)
    description: Optional[str] = Field(default=None, max_length=2000)
    completed: Optional[bool] = None
    priority: Optional[str] = None


# Expenses


class ExpenseResponse(BaseModel):
    """Serialized expense."""

    id: str
    title: str
    amount: float
    category: str
    date: str
    description: str
    user_id: str
    created_at: str
    updated_at: Optional[str] = None


class ExpenseListResponse(BaseModel):
    success: bool = True
    expenses: List[ExpenseResponse]


class ExpenseEnvelope(BaseModel):
    success: bool = True
    expense: ExpenseResponse
    message: str


class ExpenseCreateRequest(BaseModel):
    """Request body for creating an expense. ``amount`` is checked by the service."""

    title: Optional[str] = Field(default=None, max_length=200)
    amount: Any = None
    category: Optional[str] = None
    date: Optional[str] = Field(default=None, description="ISO-8601 date or datetime")
    description: Optional[str] = Field(default=None, max_length=2000)


class ExpenseUpdateRequest(BaseModel):
    """Request body for updating an expense. Omitted fields keep their values."""

    title: Optional[str] = Field(default=None, max_length=200)
    amount: Any = None
    category: Optional[str] = None
    date: Optional[str] = None
    description: Optional[str] = Field(default=None, max_length=2000)


class DailyTotalResponse(BaseModel):
    date: str
    total: float
    count: int


class WeekBucketResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    week: int
    start_date: str = Field(alias="startDate")
    end_date: str = Field(alias="endDate")
    total: float
    count: int


class ExpenseSummaryResponse(BaseModel):
    """Serialized summary; keys are camelCase on the wire."""

    model_config = ConfigDict(populate_by_name=True)

    total_expenses: float = Field(alias="totalExpenses")
    weekly_total: float = Field(alias="weeklyTotal")
    monthly_total: float = Field(alias="monthlyTotal")
    category_totals: Dict[str, float] = Field(alias="categoryTotals")
    weekly_breakdown: List[DailyTotalResponse] = Field(alias="weeklyBreakdown")
    monthly_breakdown: List[WeekBucketResponse] = Field(alias="monthlyBreakdown")
    total_count: int = Field(alias="totalCount")
    weekly_count: int = Field(alias="weeklyCount")
    monthly_count: int = Field(alias="monthlyCount")


class ExpenseSummaryEnvelope(BaseModel):
    success: bool = True
    summary: ExpenseSummaryResponse
