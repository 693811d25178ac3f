from __future__ import annotations

from flask import Flask, current_app

from blogfolio.extensions import db
from blogfolio.repositories.base import CategoryStore, CategoryRow, StoreError
from blogfolio.repositories.category import SqlCategoryStore
from blogfolio.repositories.rest_category import RestCategoryStore


def build_category_store(app: Flask) -> CategoryStore:
    """Build the category store selected by CATEGORY_STORE_BACKEND."""
    backend = (app.config.get("CATEGORY_STORE_BACKEND") or "sql").lower()
    if backend == "sql":
        return SqlCategoryStore(db.session)
    if backend == "rest":
        return RestCategoryStore(
            app.config.get("STORE_URL"),
            app.config.get("STORE_API_KEY"),
            timeout=float(app.config.get("STORE_TIMEOUT", 10)),
        )
    raise ValueError(f"Unknown CATEGORY_STORE_BACKEND '{backend}'")


def get_category_store() -> CategoryStore:
    """The store built for the current app at startup."""
    return current_app.extensions["category_store"]


__all__ = [
    "CategoryStore",
    "CategoryRow",
    "StoreError",
    "SqlCategoryStore",
    "RestCategoryStore",
    "build_category_store",
    "get_category_store",
]
