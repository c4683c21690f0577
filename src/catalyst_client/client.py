"""HTTP client for the hosted platform's REST API (user management + datastore)."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import requests

from src.daybook.errors import PlatformError

logger = logging.getLogger(__name__)


class CatalystClient:
    """
    Thin wrapper over the hosted platform's project-scoped REST endpoints.

    Every response is an envelope ``{"status": "success", "data": ...}``;
    anything else is raised as PlatformError.
    """

    def __init__(
        self,
        api_url: str,
        project_id: str,
        access_token: str = "",
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
    ):
        """
        Args:
            api_url: platform API root, e.g. https://api.catalyst.zoho.com/baas/v1
            project_id: project the tables and users belong to
            access_token: server credential used for datastore calls
            timeout: per-request timeout in seconds
            session: requests session (injected in tests)
        """
        self.api_url = api_url.rstrip("/")
        self.project_id = project_id
        self.access_token = access_token
        self.timeout = timeout
        self.session = session or requests.Session()

    def _url(self, path: str) -> str:
        return f"{self.api_url}/project/{self.project_id}{path}"

    def _call(
        self,
        method: str,
        path: str,
        *,
        token: Optional[str] = None,
        params: Optional[Dict[str, Any]] = None,
        json_body: Any = None,
    ) -> Dict[str, Any]:
        headers = {"Content-Type": "application/json"}
        credential = token or self.access_token
        if credential:
            headers["Authorization"] = f"Zoho-oauthtoken {credential}"

        try:
            response = self.session.request(
                method,
                self._url(path),
                headers=headers,
                params=params,
                json=json_body,
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            logger.error(f"Hosted platform unreachable ({method} {path}): {e}")
            raise PlatformError("Hosted platform unreachable", details=str(e)) from e

        try:
            payload = response.json()
        except ValueError as e:
            logger.error(f"Non-JSON response from {method} {path}: HTTP {response.status_code}")
            raise PlatformError(
                "Invalid response from hosted platform",
                details=f"HTTP {response.status_code}",
            ) from e

        if not isinstance(payload, dict):
            raise PlatformError("Invalid response from hosted platform", details="Unexpected payload")

        if not response.ok or payload.get("status") != "success":
            data = payload.get("data")
            message = data.get("message") if isinstance(data, dict) else None
            logger.error(f"{method} {path} failed: HTTP {response.status_code} {message}")
            raise PlatformError(
                "Hosted platform request failed",
                details=message or f"HTTP {response.status_code}",
            )

        return payload

    @staticmethod
    def _first(data: Any) -> Dict[str, Any]:
        if isinstance(data, list):
            if not data:
                raise PlatformError("Hosted platform returned no row")
            return data[0]
        return data

    # User management

    def signup(self, user_details: Dict[str, Any], redirect_url: str) -> Dict[str, Any]:
        """Start the platform's signup flow; returns the created user details."""
        payload = self._call(
            "POST",
            "/project-user/signup",
            json_body={
                "platform_type": "web",
                "redirect_url": redirect_url,
                "user_details": user_details,
            },
        )
        return payload.get("data") or {}

    def current_user(self, token: str) -> Dict[str, Any]:
        """Return the user that owns the given session token."""
        payload = self._call("GET", "/project-user/current", token=token)
        return payload.get("data") or {}

    # Datastore

    def list_rows(self, table: str, page_size: int = 100) -> List[Dict[str, Any]]:
        """Fetch every row of a table, following next_token pagination."""
        rows: List[Dict[str, Any]] = []
        next_token: Optional[str] = None
        while True:
            params: Dict[str, Any] = {"max_rows": page_size}
            if next_token:
                params["next_token"] = next_token
            payload = self._call("GET", f"/table/{table}/row", params=params)
            rows.extend(payload.get("data") or [])
            next_token = payload.get("next_token")
            if not payload.get("more_records") or not next_token:
                break
        return rows

    def insert_row(self, table: str, row: Dict[str, Any]) -> Dict[str, Any]:
        payload = self._call("POST", f"/table/{table}/row", json_body=[row])
        return self._first(payload.get("data"))

    def update_row(self, table: str, row: Dict[str, Any]) -> Dict[str, Any]:
        """Update a row; ``row`` must carry its ROWID."""
        payload = self._call("PUT", f"/table/{table}/row", json_body=[row])
        return self._first(payload.get("data"))

    def delete_row(self, table: str, row_id: str) -> None:
        self._call("DELETE", f"/table/{table}/row/{row_id}")
