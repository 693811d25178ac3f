"""Category resource handlers.

Each handler takes the category store and an ``ApiRequest`` and returns an
``ApiResponse`` carrying the HTTP status and the response envelope, so the
handlers can be exercised without a running server. Failures of every kind
are turned into envelopes here; nothing propagates past this module.
"""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from functools import wraps
from typing import Any, Callable

import structlog
from pydantic import ValidationError

from blogfolio.repositories.base import CategoryStore, StoreError
from blogfolio.schemas.categories import CategoryInput, EMPTY_SLUG_MESSAGE
from blogfolio.schemas.envelope import Envelope
from blogfolio.utils.slug import slugify

log = structlog.get_logger(__name__)

NOT_FOUND_MESSAGE = "Category not found"


@dataclass(frozen=True)
class ApiRequest:
    method: str
    path_params: dict[str, str] = field(default_factory=dict)
    body: str | bytes | None = None


@dataclass(frozen=True)
class ApiResponse:
    status: int
    envelope: Envelope


Handler = Callable[[CategoryStore, ApiRequest], ApiResponse]


def _respond(envelope: Envelope) -> ApiResponse:
    return ApiResponse(status=envelope.code, envelope=envelope)


def _fail(code: int, error_code: str, msg: str) -> ApiResponse:
    log.warning("category_request_rejected", code=code, error_code=error_code, msg=msg)
    return _respond(Envelope.failure(code, error_code, msg))


def _guarded(handler: Handler) -> Handler:
    """Turn any unexpected fault into a 500 envelope carrying the raw fault text."""

    @wraps(handler)
    def wrapper(store: CategoryStore, request: ApiRequest) -> ApiResponse:
        try:
            return handler(store, request)
        except Exception as e:
            log.exception("category_handler_error", handler=handler.__name__)
            return _respond(Envelope.failure(500, "server_error", str(e)))

    return wrapper


def _parse_body(request: ApiRequest) -> dict[str, Any]:
    data = json.loads(request.body if request.body is not None else "")
    if not isinstance(data, dict):
        raise TypeError("Request body must be a JSON object")
    return data


def _validation_message(exc: ValidationError) -> str:
    messages = []
    for err in exc.errors():
        ctx_error = (err.get("ctx") or {}).get("error")
        if ctx_error is not None:
            messages.append(str(ctx_error))
        else:
            loc = "/".join(map(str, err["loc"]))
            messages.append(f"{loc}: {err['msg']}")
    return "; ".join(messages)


def _category_fields(data: dict[str, Any]) -> tuple[dict[str, Any] | None, str | None]:
    """
    Validate a create/update body and derive the slug.
    Returns (fields, error_message) tuple.
    """
    try:
        payload = CategoryInput.model_validate(data)
    except ValidationError as e:
        return None, _validation_message(e)

    slug = slugify(payload.name)
    if not slug:
        return None, EMPTY_SLUG_MESSAGE

    return {
        "name": payload.name,
        "description": payload.description,
        "slug": slug,
    }, None


@_guarded
def list_categories(store: CategoryStore, request: ApiRequest) -> ApiResponse:
    try:
        rows = store.list_all()
    except StoreError as e:
        return _fail(400, "query_failed", e.message)
    return _respond(Envelope(code=200, data=rows, msg="Categories fetched successfully"))


@_guarded
def get_category(store: CategoryStore, request: ApiRequest) -> ApiResponse:
    category_id = request.path_params["id"]
    try:
        row = store.get_by_id(category_id)
    except StoreError as e:
        log.warning("category_lookup_failed", category_id=category_id, error=e.message)
        row = None
    if row is None:
        return _fail(404, "not_found", NOT_FOUND_MESSAGE)
    return _respond(Envelope(code=200, data=row, msg="Category fetched successfully"))


@_guarded
def create_category(store: CategoryStore, request: ApiRequest) -> ApiResponse:
    data = _parse_body(request)
    fields, error = _category_fields(data)
    if error:
        return _fail(400, "validation_failed", error)

    try:
        row = store.insert(fields)
    except StoreError as e:
        return _fail(400, "insert_failed", e.message)

    log.info("category_created", category_id=row.get("id"), slug=row.get("slug"))
    return _respond(Envelope(code=201, data=row, msg="Category created successfully"))


@_guarded
def update_category(store: CategoryStore, request: ApiRequest) -> ApiResponse:
    category_id = request.path_params["id"]
    data = _parse_body(request)
    fields, error = _category_fields(data)
    if error:
        return _fail(400, "validation_failed", error)

    try:
        row = store.update(category_id, fields)
    except StoreError as e:
        return _fail(400, "update_failed", e.message)
    if row is None:
        return _fail(404, "not_found", NOT_FOUND_MESSAGE)

    log.info("category_updated", category_id=category_id, slug=row.get("slug"))
    return _respond(Envelope(code=200, data=row, msg="Category updated successfully"))


@_guarded
def delete_category(store: CategoryStore, request: ApiRequest) -> ApiResponse:
    # Unknown ids succeed too: the store treats them as a no-op
    category_id = request.path_params["id"]
    try:
        store.delete(category_id)
    except StoreError as e:
        return _fail(400, "delete_failed", e.message)

    log.info("category_deleted", category_id=category_id)
    return _respond(Envelope(code=200, msg="Category deleted successfully"))
