from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

EMPTY_NAME_MESSAGE = "Category name cannot be empty"
EMPTY_SLUG_MESSAGE = "Category name must contain at least one letter or digit"


class CategoryInput(BaseModel):
    """Body of create and update requests; any client-supplied slug is ignored."""

    model_config = ConfigDict(extra="ignore")

    # validate_default so a missing name gets the same message as a blank one
    name: str = Field(default=None, validate_default=True)
    description: str | None = None

    @field_validator("name", mode="before")
    @classmethod
    def name_not_blank(cls, v: Any) -> str:
        if not isinstance(v, str) or not v.strip():
            raise ValueError(EMPTY_NAME_MESSAGE)
        return v.strip()

    @field_validator("description", mode="before")
    @classmethod
    def blank_description_is_null(cls, v: Any) -> Any:
        # absent, null and "" all store as null; other non-strings fail validation
        return None if v == "" else v
