from __future__ import annotations

from typing import Any, Optional, Protocol

CategoryRow = dict[str, Any]

# Columns every backend returns for a category row
CATEGORY_FIELDS = ("id", "name", "slug", "description", "created_at")


class StoreError(Exception):
    """A failure reported by the category store; the message is the store's own text."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class CategoryStore(Protocol):
    def list_all(self) -> list[CategoryRow]:
        ...

    def get_by_id(self, category_id: str) -> Optional[CategoryRow]:
        ...

    def insert(self, fields: dict[str, Any]) -> CategoryRow:
        ...

    def update(self, category_id: str, fields: dict[str, Any]) -> Optional[CategoryRow]:
        ...

    def delete(self, category_id: str) -> None:
        ...
