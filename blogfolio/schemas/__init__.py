from __future__ import annotations

# Re-export common schema classes for convenient imports
from .categories import CategoryInput, EMPTY_NAME_MESSAGE, EMPTY_SLUG_MESSAGE  # noqa: F401
from .envelope import Envelope  # noqa: F401

__all__ = [
    "CategoryInput",
    "EMPTY_NAME_MESSAGE",
    "EMPTY_SLUG_MESSAGE",
    "Envelope",
]
