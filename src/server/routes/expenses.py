"""Expense endpoints."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, FastAPI, Query

from src.identity import User

from ..auth import authenticate
from ..dependencies import (
    get_expense_service,
    run_service,
    serialize_expense,
    serialize_summary,
)
from ..schemas import (
    ERROR_RESPONSES,
    ExpenseCreateRequest,
    ExpenseEnvelope,
    ExpenseListResponse,
    ExpenseSummaryEnvelope,
    ExpenseUpdateRequest,
    MessageResponse,
)


def register_expense_routes(app: FastAPI, prefix: str = "/api") -> None:
    """Register expense CRUD and summary endpoints behind bearer authentication."""
    router = APIRouter(
        prefix=f"{prefix}/expenses",
        tags=["expenses"],
        dependencies=[Depends(authenticate)],
        responses=ERROR_RESPONSES,
    )

    @router.get("", response_model=ExpenseListResponse)
    async def list_expenses(
        start_date: Optional[str] = Query(default=None, alias="startDate"),
        end_date: Optional[str] = Query(default=None, alias="endDate"),
        category: Optional[str] = Query(default=None),
        user: User = Depends(authenticate),
    ) -> ExpenseListResponse:
        """List the caller's expenses, newest first."""
        service = get_expense_service()
        expenses = await run_service(
            "Failed to fetch expenses",
            service.list,
            user.id,
            start_date=start_date,
            end_date=end_date,
            category=category,
        )
        return ExpenseListResponse(expenses=[serialize_expense(e) for e in expenses])

    @router.get("/summary", response_model=ExpenseSummaryEnvelope)
    async def expense_summary(user: User = Depends(authenticate)) -> ExpenseSummaryEnvelope:
        """Totals, per-category totals, this week by day and this month by week."""
        service = get_expense_service()
        summary = await run_service("Failed to get expense summary", service.summary, user.id)
        return ExpenseSummaryEnvelope(summary=serialize_summary(summary))

    @router.post("", status_code=201, response_model=ExpenseEnvelope)
    async def create_expense(
        request: ExpenseCreateRequest, user: User = Depends(authenticate)
    ) -> ExpenseEnvelope:
        """Create an expense; date defaults to now."""
        service = get_expense_service()
        expense = await run_service(
            "Failed to create expense",
            service.create,
            user.id,
            request.title,
            request.amount,
            request.category,
            date=request.date,
            description=request.description,
        )
        return ExpenseEnvelope(
            expense=serialize_expense(expense), message="Expense created successfully"
        )

    @router.put("/{expense_id}", response_model=ExpenseEnvelope)
    async def update_expense(
        expense_id: str, request: ExpenseUpdateRequest, user: User = Depends(authenticate)
    ) -> ExpenseEnvelope:
        """Partially update an expense."""
        service = get_expense_service()
        expense = await run_service(
            "Failed to update expense",
            service.update,
            user.id,
            expense_id,
            request.model_dump(exclude_unset=True),
        )
        return ExpenseEnvelope(
            expense=serialize_expense(expense), message="Expense updated successfully"
        )

    @router.delete("/{expense_id}", response_model=MessageResponse)
    async def delete_expense(
        expense_id: str, user: User = Depends(authenticate)
    ) -> MessageResponse:
        """Delete an expense."""
        service = get_expense_service()
        await run_service("Failed to delete expense", service.delete, user.id, expense_id)
        return MessageResponse(message="Expense deleted successfully")

    app.include_router(router)
