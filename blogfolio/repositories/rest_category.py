"""Category store backed by a PostgREST-compatible hosted backend."""
from __future__ import annotations

from typing import Any, Optional

import requests

from blogfolio.repositories.base import CATEGORY_FIELDS, CategoryRow, StoreError


def _row(data: dict[str, Any]) -> CategoryRow:
    row = {field: data.get(field) for field in CATEGORY_FIELDS}
    if row["id"] is not None:
        row["id"] = str(row["id"])
    return row


def _error_message(response: requests.Response) -> str:
    """Pull the service's own error text out of a failed response."""
    try:
        payload = response.json()
    except ValueError:
        payload = None
    if isinstance(payload, dict) and payload.get("message"):
        return str(payload["message"])
    return response.text or f"Store request failed with status {response.status_code}"


class RestCategoryStore:
    """Issue category CRUD calls against ``{base_url}/rest/v1/categories``.

    Filters use the PostgREST query syntax (``id=eq.<id>``, ``order=name.asc``)
    and writes ask for the affected rows back with ``Prefer: return=representation``.
    """

    table = "categories"

    def __init__(
        self,
        base_url: str | None,
        api_key: str | None,
        *,
        timeout: float = 10.0,
        session: requests.Session | None = None,
    ):
        if not base_url:
            raise ValueError("STORE_URL is required for the rest category store")
        if not base_url.startswith(("http://", "https://")):
            raise ValueError(f"Invalid store URL '{base_url}'. Only HTTP/HTTPS allowed.")

        self.endpoint = f"{base_url.rstrip('/')}/rest/v1/{self.table}"
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({"Accept": "application/json"})
        if api_key:
            self.session.headers.update({
                "apikey": api_key,
                "Authorization": f"Bearer {api_key}",
            })

    def _request(
        self,
        method: str,
        *,
        params: dict[str, str] | None = None,
        json: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        try:
            response = self.session.request(
                method,
                self.endpoint,
                params=params,
                json=json,
                headers=headers,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise StoreError(str(e)) from e

        if not response.ok:
            raise StoreError(_error_message(response))
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise StoreError(f"Invalid JSON from store: {e}") from e

    def list_all(self) -> list[CategoryRow]:
        rows = self._request("GET", params={"select": "*", "order": "name.asc"})
        return [_row(r) for r in rows or []]

    def get_by_id(self, category_id: str) -> Optional[CategoryRow]:
        rows = self._request("GET", params={"select": "*", "id": f"eq.{category_id}"})
        if not rows:
            return None
        return _row(rows[0])

    def insert(self, fields: dict[str, Any]) -> CategoryRow:
        rows = self._request(
            "POST",
            json=fields,
            headers={"Prefer": "return=representation"},
        )
        if not rows:
            raise StoreError("Store returned no row for insert")
        return _row(rows[0])

    def update(self, category_id: str, fields: dict[str, Any]) -> Optional[CategoryRow]:
        rows = self._request(
            "PATCH",
            params={"id": f"eq.{category_id}"},
            json=fields,
            headers={"Prefer": "return=representation"},
        )
        if not rows:
            return None
        return _row(rows[0])

    def delete(self, category_id: str) -> None:
        self._request("DELETE", params={"id": f"eq.{category_id}"})
