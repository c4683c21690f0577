"""HTTP client for the Daybook REST API."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import requests

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:5000/api"


class ApiError(Exception):
    """Non-2xx answer (or no answer) from the API."""

    def __init__(self, status_code: int, error: str, details: Optional[str] = None):
        super().__init__(f"{status_code}: {error}")
        self.status_code = status_code
        self.error = error
        self.details = details


class DaybookApiClient:
    """
    One method per endpoint. Responses are returned as the decoded JSON body.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        token: Optional[str] = None,
        timeout: float = 10.0,
        session: Any = None,
    ):
        """
        Args:
            base_url: API root including the base path, e.g. http://localhost:5000/api
            token: bearer token sent with every request
            timeout: request timeout in seconds
            session: requests-compatible session (tests pass a TestClient)
        """
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.timeout = timeout
        self.session = session or requests.Session()

    def _request(
        self,
        method: str,
        path: str,
        *,
        json_body: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"

        try:
            response = self.session.request(
                method,
                f"{self.base_url}{path}",
                headers=headers,
                params=params,
                json=json_body,
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            logger.error(f"{method} {path} failed: {e}")
            raise ApiError(0, "Could not reach the server", str(e)) from e

        try:
            payload = response.json()
        except ValueError:
            payload = {}

        if response.status_code >= 400:
            raise ApiError(
                response.status_code,
                payload.get("error") or f"HTTP {response.status_code}",
                payload.get("details"),
            )
        return payload

    # Auth

    def register(self, first_name: str, last_name: str, email: str, password: str) -> Dict[str, Any]:
        return self._request(
            "POST",
            "/auth/register",
            json_body={
                "firstName": first_name,
                "lastName": last_name,
                "email": email,
                "password": password,
            },
        )

    def login(self, email: str, password: str) -> Dict[str, Any]:
        return self._request("POST", "/auth/login", json_body={"email": email, "password": password})

    def logout(self) -> Dict[str, Any]:
        return self._request("POST", "/auth/logout")

    def me(self) -> Dict[str, Any]:
        return self._request("GET", "/auth/me")

    # Todos

    def list_todos(self) -> Dict[str, Any]:
        return self._request("GET", "/todos")

    def create_todo(
        self, title: str, description: Optional[str] = None, priority: Optional[str] = None
    ) -> Dict[str, Any]:
        body: Dict[str, Any] = {"title": title}
        if description is not None:
            body["description"] = description
        if priority is not None:
            body["priority"] = priority
        return self._request("POST", "/todos", json_body=body)

    def update_todo(self, todo_id: str, **changes: Any) -> Dict[str, Any]:
        return self._request("PUT", f"/todos/{todo_id}", json_body=changes)

    def delete_todo(self, todo_id: str) -> Dict[str, Any]:
        return self._request("DELETE", f"/todos/{todo_id}")

    # Expenses

    def list_expenses(
        self,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
        category: Optional[str] = None,
    ) -> Dict[str, Any]:
        params = {
            key: value
            for key, value in (("startDate", start_date), ("endDate", end_date), ("category", category))
            if value
        }
        return self._request("GET", "/expenses", params=params or None)

    def create_expense(
        self,
        title: str,
        amount: Any,
        category: str,
        date: Optional[str] = None,
        description: Optional[str] = None,
    ) -> Dict[str, Any]:
        body: Dict[str, Any] = {"title": title, "amount": amount, "category": category}
        if date is not None:
            body["date"] = date
        if description is not None:
            body["description"] = description
        return self._request("POST", "/expenses", json_body=body)

    def update_expense(self, expense_id: str, **changes: Any) -> Dict[str, Any]:
        return self._request("PUT", f"/expenses/{expense_id}", json_body=changes)

    def delete_expense(self, expense_id: str) -> Dict[str, Any]:
        return self._request("DELETE", f"/expenses/{expense_id}")

    def expense_summary(self) -> Dict[str, Any]:
        return self._request("GET", "/expenses/summary")
