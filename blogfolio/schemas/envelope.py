from __future__ import annotations

from typing import Any

from pydantic import BaseModel


class Envelope(BaseModel):
    """Uniform wrapper returned by every category API call.

    Only fields that were explicitly set are serialized, so ``data`` is absent
    on failures and deletes and ``error_code`` is absent on success.
    """

    code: int
    data: Any = None
    msg: str
    error_code: str | None = None

    @classmethod
    def failure(cls, code: int, error_code: str, msg: str) -> "Envelope":
        return cls(code=code, error_code=error_code, msg=msg)

    @property
    def ok(self) -> bool:
        return 200 <= self.code < 300

    def to_json(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_unset=True)
