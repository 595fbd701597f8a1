from __future__ import annotations

from flask import Blueprint, abort, jsonify, request
from flask_login import login_required

from storefront.api.schemas import CategoryIn, CategoryUpdate
from storefront.models import Category
from storefront.services import catalog

api_categories = Blueprint("api_categories", __name__, url_prefix="/api/categories")


def _category_dict(c: Category | None) -> dict | None:
    if c is None:
        return None
    return {
        "id": c.id,
        "name": c.name,
        "nameRu": c.name_ru,
        "nameHe": c.name_he,
        "slug": c.slug,
        "description": c.description,
        "createdAt": c.created_at.isoformat() if c.created_at else None,
    }


def _get_payload() -> dict:
    return request.get_json(silent=True) or {}


@api_categories.get("")
def list_categories():
    return jsonify([_category_dict(c) for c in catalog.list_categories()]), 200


@api_categories.get("/<string:category_id>")
def get_category(category_id: str):
    c = catalog.get_category(category_id)
    if not c:
        abort(404, description="Category not found")
    return jsonify(_category_dict(c)), 200


@api_categories.post("")
@login_required
def create_category():
    data = CategoryIn.model_validate(_get_payload())
    c = catalog.create_category(data.model_dump())
    return jsonify(_category_dict(c)), 201


@api_categories.put("/<string:category_id>")
@login_required
def update_category(category_id: str):
    data = CategoryUpdate.model_validate(_get_payload())
    c = catalog.update_category(category_id, data.model_dump(exclude_unset=True))
    if not c:
        abort(404, description="Category not found")
    return jsonify(_category_dict(c)), 200
