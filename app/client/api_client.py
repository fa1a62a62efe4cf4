"""
HTTP client for the admin API
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional

import requests

from app.client.session_cache import SessionRecord
from app.core.config import settings
from app.core.errors import AdminAuthRequired, ApiError, NotFound, ValidationError

logger = logging.getLogger(__name__)

SESSION_HEADER = "X-Admin-Session"


class AdminApiClient:
    """Thin wrapper over the REST API that speaks in domain errors.

    ``http`` is anything with a requests-style ``get/post/patch/delete``
    (a ``requests.Session`` by default; tests pass FastAPI's ``TestClient``).
    ``on_auth_failure`` is called whenever an authenticated call comes back
    with 401, before the error is raised.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        http: Any = None,
        timeout: Optional[float] = None,
        on_auth_failure: Optional[Callable[[], None]] = None
    ):
        self.base_url = (base_url or settings.API_BASE_URL).rstrip("/")
        self.http = http if http is not None else requests.Session()
        self.timeout = timeout if timeout is not None else settings.CLIENT_TIMEOUT_SECONDS
        self.on_auth_failure = on_auth_failure

    def _request(
        self,
        method: str,
        path: str,
        session_id: Optional[str] = None,
        json_body: Optional[Dict[str, Any]] = None
    ):
        headers = {SESSION_HEADER: session_id} if session_id else {}
        kwargs: Dict[str, Any] = {"headers": headers, "timeout": self.timeout}
        if json_body is not None:
            kwargs["json"] = json_body
        try:
            response = getattr(self.http, method)(f"{self.base_url}{path}", **kwargs)
        except requests.RequestException as e:
            raise ApiError(f"{method.upper()} {path} failed: {e}") from e

        if response.status_code < 400:
            if response.status_code == 204 or not response.content:
                return None
            try:
                body = response.json()
            except ValueError as e:
                raise ApiError(f"{method.upper()} {path} returned a non-JSON body") from e
            if not isinstance(body, dict):
                raise ApiError(f"{method.upper()} {path} returned an unexpected body")
            return body.get("data")

        message = self._error_message(response)
        if response.status_code == 401:
            logger.info(f"{method.upper()} {path} rejected: {message}")
            if session_id and self.on_auth_failure is not None:
                self.on_auth_failure()
            raise AdminAuthRequired(message)
        if response.status_code == 404:
            raise NotFound(message=message)
        if response.status_code in (400, 422):
            raise ValidationError(message)
        raise ApiError(f"{method.upper()} {path} returned {response.status_code}: {message}")

    @staticmethod
    def _error_message(response) -> str:
        try:
            body = response.json()
        except ValueError:
            return response.text or f"HTTP {response.status_code}"
        if isinstance(body, dict):
            return str(body.get("message") or body.get("detail") or body)
        return str(body)

    # -------- sessions --------

    @staticmethod
    def _session_record(data: Any, path: str) -> SessionRecord:
        try:
            return SessionRecord.from_dict(data)
        except (TypeError, ValueError) as e:
            raise ApiError(f"POST {path} returned an invalid session: {e}") from e

    def login(self, token: str) -> SessionRecord:
        data = self._request("post", "/admin/session", json_body={"token": token})
        return self._session_record(data, "/admin/session")

    def refresh(self, session_id: str) -> SessionRecord:
        data = self._request("post", "/admin/session/refresh", session_id=session_id)
        return self._session_record(data, "/admin/session/refresh")

    def logout(self, session_id: str) -> None:
        self._request("delete", "/admin/session", session_id=session_id)

    # -------- wheels --------

    def list_wheels(self) -> List[Dict[str, Any]]:
        return self._request("get", "/wheels")

    def get_wheel(self, wheel_id: int) -> Dict[str, Any]:
        return self._request("get", f"/wheels/{wheel_id}")

    def create_wheel(self, session_id: str, name: str, spin_duration_seconds: Any = None) -> Dict[str, Any]:
        return self._request("post", "/wheels", session_id=session_id, json_body={
            "name": name,
            "spin_duration_seconds": spin_duration_seconds,
        })

    def update_wheel(self, session_id: str, wheel_id: int, **changes: Any) -> Dict[str, Any]:
        return self._request("patch", f"/wheels/{wheel_id}", session_id=session_id, json_body=changes)

    def delete_wheel(self, session_id: str, wheel_id: int) -> None:
        self._request("delete", f"/wheels/{wheel_id}", session_id=session_id)

    def add_entries(
        self,
        session_id: str,
        wheel_id: int,
        label: str,
        person_name: str,
        count: Any = 1
    ) -> List[Dict[str, Any]]:
        return self._request("post", f"/wheels/{wheel_id}/entries", session_id=session_id, json_body={
            "label": label,
            "person_name": person_name,
            "count": count,
        })

    def update_entry(self, session_id: str, wheel_id: int, entry_id: int, **changes: Any) -> Dict[str, Any]:
        return self._request(
            "patch", f"/wheels/{wheel_id}/entries/{entry_id}", session_id=session_id, json_body=changes
        )

    def delete_entry(self, session_id: str, wheel_id: int, entry_id: int) -> None:
        self._request("delete", f"/wheels/{wheel_id}/entries/{entry_id}", session_id=session_id)
