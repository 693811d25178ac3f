"""Slug generation utilities."""
from __future__ import annotations

import re


def slugify(text: str | None) -> str:
    """
    Convert a display name to a URL-friendly slug.

    Word characters outside ASCII are kept as-is, so names written in
    non-Latin scripts still produce a usable slug.

    Args:
        text: The text to convert to a slug

    Returns:
        A lowercase, hyphen-separated slug (possibly empty)
    """
    if not text:
        return ""

    text = text.lower()

    # Whitespace runs become a single hyphen
    text = re.sub(r'\s+', '-', text)

    # Drop everything that is not a word character or hyphen
    text = re.sub(r'[^\w-]+', '', text)

    text = re.sub(r'-{2,}', '-', text)

    text = re.sub(r'^-', '', text)
    text = re.sub(r'-$', '', text)

    return text
