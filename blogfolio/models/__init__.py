from __future__ import annotations

import secrets


def generate_hex_id(length: int = 32) -> str:
    """Generate a secure random hex string of specified length."""
    return secrets.token_hex(length // 2)


# Import all models so metadata is complete for create_all
from blogfolio.models.category import Category  # noqa: E402

__all__ = [
    "generate_hex_id",
    "Category",
]
