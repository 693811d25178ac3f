from __future__ import annotations

from flask import Blueprint, current_app, jsonify, request

from blogfolio.extensions import limiter
from blogfolio.repositories import get_category_store
from blogfolio.services import categories as category_service
from blogfolio.services.categories import ApiRequest, Handler

bp = Blueprint("categories_api", __name__, url_prefix="/api/categories")


def _rate_limit() -> str:
    return current_app.config.get("CATEGORY_API_RATE_LIMIT", "120 per minute")


def _dispatch(handler: Handler, **path_params: str):
    """Translate the Flask request into an ApiRequest and render the handler's envelope."""
    body = request.get_data() if request.method in ("POST", "PUT") else None
    api_request = ApiRequest(method=request.method, path_params=path_params, body=body)
    api_response = handler(get_category_store(), api_request)
    return jsonify(api_response.envelope.to_json()), api_response.status


@bp.get("")
@limiter.limit(_rate_limit)
def list_categories():
    """List all categories ordered by name"""
    return _dispatch(category_service.list_categories)


@bp.post("")
@limiter.limit(_rate_limit)
def create_category():
    return _dispatch(category_service.create_category)


@bp.get("/<string:category_id>")
@limiter.limit(_rate_limit)
def get_category(category_id: str):
    return _dispatch(category_service.get_category, id=category_id)


@bp.put("/<string:category_id>")
@limiter.limit(_rate_limit)
def update_category(category_id: str):
    return _dispatch(category_service.update_category, id=category_id)


@bp.delete("/<string:category_id>")
@limiter.limit(_rate_limit)
def delete_category(category_id: str):
    return _dispatch(category_service.delete_category, id=category_id)
