"""HTTP client for the ``/api/sets`` endpoints."""
from __future__ import annotations

from typing import Any, Iterable, Optional

import httpx

from settracker.schemas.logged_set import LoggedSet, SetCreate, SetPatch


class SyncError(Exception):
    """A request to the sets API failed (network error or non-2xx response)."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class SetsApiClient:
    PATH = "/api/sets"

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        *,
        device_id: str = "",
        client: Optional[httpx.Client] = None,
        timeout: float = 10.0,
    ):
        # Any httpx.Client works here, including FastAPI's TestClient
        self.client = client or httpx.Client(base_url=base_url.rstrip("/"), timeout=timeout)
        self.device_id = device_id

    def close(self) -> None:
        self.client.close()

    def _request(self, method: str, path: str = "", **kwargs) -> Any:
        headers = {"Content-Type": "application/json"}
        if self.device_id:
            headers["X-Device-ID"] = self.device_id
        try:
            response = self.client.request(method, self.PATH + path, headers=headers, **kwargs)
        except httpx.HTTPError as e:
            raise SyncError(f"{method} {self.PATH}{path} failed: {e}") from e

        payload = None
        if response.content:
            try:
                payload = response.json()
            except ValueError:
                payload = None

        if response.is_error:
            message = (payload or {}).get("error") if isinstance(payload, dict) else None
            raise SyncError(message or response.reason_phrase or "Request failed.", response.status_code)
        return payload

    def list_sets(self) -> list[LoggedSet]:
        return [LoggedSet.model_validate(item) for item in self._request("GET") or []]

    def create_set(self, **fields) -> LoggedSet:
        body = SetCreate(**fields).model_dump(by_alias=True)
        return LoggedSet.model_validate(self._request("POST", json=body))

    def update_set(self, set_id: str, **fields) -> LoggedSet:
        body = SetPatch(id=set_id, **fields).model_dump(by_alias=True, exclude_unset=True)
        return LoggedSet.model_validate(self._request("PATCH", json=body))

    def delete_set(self, set_id: str) -> None:
        self._request("DELETE", json={"id": set_id})

    def sync(self, sets: Iterable[LoggedSet], deleted_ids: Iterable[str]) -> list[LoggedSet]:
        """Bulk push: server applies the deletes, then upserts, and returns everything it holds."""
        body = {
            "sets": [s.model_dump(by_alias=True) for s in sets],
            "deletedIds": list(deleted_ids),
        }
        return [LoggedSet.model_validate(item) for item in self._request("PUT", json=body) or []]

    def export(self) -> dict:
        return self._request("GET", "/export")
