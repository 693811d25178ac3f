"""Client for the categories JSON API.

Every call returns the parsed envelope as-is: failures the API reports come
back as envelopes with a non-2xx ``code``. Only transport problems raise.
"""
from __future__ import annotations

from typing import Any
from urllib.parse import quote

import requests
from pydantic import ValidationError

from blogfolio.schemas.envelope import Envelope
from blogfolio.utils.http_client import HTTPClient


class CategoryClientError(Exception):
    """The request never produced an envelope (network failure or non-JSON reply)."""


class CategoryClient:
    base_path = "/api/categories"

    def __init__(self, http: HTTPClient | None = None):
        self.http = http or HTTPClient()

    def _path(self, category_id: str | None = None) -> str:
        if category_id is None:
            return self.base_path
        return f"{self.base_path}/{quote(str(category_id), safe='')}"

    def _call(self, method: str, path: str, **kwargs: Any) -> Envelope:
        try:
            response = self.http.request(method, path, **kwargs)
        except (requests.RequestException, ValueError) as e:
            raise CategoryClientError(str(e)) from e

        try:
            return Envelope.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise CategoryClientError(
                f"Unexpected response from {path} (HTTP {response.status_code})"
            ) from e

    def get_all(self) -> Envelope:
        return self._call("GET", self._path())

    def get_by_id(self, category_id: str) -> Envelope:
        return self._call("GET", self._path(category_id))

    def create(self, name: str, description: str | None = None) -> Envelope:
        return self._call("POST", self._path(), json={"name": name, "description": description})

    def update(self, category_id: str, name: str, description: str | None = None) -> Envelope:
        return self._call("PUT", self._path(category_id), json={"name": name, "description": description})

    def delete(self, category_id: str) -> Envelope:
        return self._call("DELETE", self._path(category_id))
