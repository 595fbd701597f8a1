from flask import Blueprint, abort, jsonify, request
from flask_login import login_required

from storefront.api.routes.category_routes import _category_dict, _get_payload
from storefront.api.schemas import ProductIn, ProductUpdate
from storefront.api.utils.money import money_str
from storefront.models import Product
from storefront.services import catalog

api_products = Blueprint("api_products", __name__, url_prefix="/api/products")


def _product_dict(product: Product):
    return {
        "id": product.id,
        "name": product.name,
        "nameRu": product.name_ru,
        "nameHe": product.name_he,
        "description": product.description,
        "descriptionRu": product.description_ru,
        "descriptionHe": product.description_he,
        "price": money_str(product.price),
        "categoryId": product.category_id,
        "category": _category_dict(product.category),
        "brand": product.brand,
        "imageUrl": product.image_url,
        "images": list(product.images or []),
        "stock": product.stock,
        "inStock": product.is_in_stock,
        "isActive": bool(product.is_active),
        "createdAt": product.created_at.isoformat() if product.created_at else None,
        "updatedAt": product.updated_at.isoformat() if product.updated_at else None,
    }


@api_products.get("")
def get_products():
    items = catalog.list_products(
        category_id=request.args.get("categoryId") or None,
        search=request.args.get("search"),
        limit=request.args.get("limit"),
        offset=request.args.get("offset"),
    )
    return jsonify([_product_dict(p) for p in items]), 200


@api_products.get("/featured")
def get_featured():
    items = catalog.list_featured(request.args.get("limit"))
    return jsonify([_product_dict(p) for p in items]), 200


@api_products.get("/<string:product_id>")
def get_product(product_id: str):
    p = catalog.get_product(product_id)
    if not p:
        abort(404, description="Product not found")
    return jsonify(_product_dict(p)), 200


@api_products.post("")
@login_required
def add_product():
    data = ProductIn.model_validate(_get_payload())
    p = catalog.create_product(data.model_dump())
    return jsonify(_product_dict(p)), 201


@api_products.put("/<string:product_id>")
@login_required
def update_product(product_id: str):
    data = ProductUpdate.model_validate(_get_payload())
    p = catalog.update_product(product_id, data.model_dump(exclude_unset=True))
    if not p:
        abort(404, description="Product not found")
    return jsonify(_product_dict(p)), 200


@api_products.delete("/<string:product_id>")
@login_required
def delete_product(product_id: str):
    # soft delete, historical orders keep pointing at the row
    if not catalog.deactivate_product(product_id):
        abort(404, description="Product not found")
    return jsonify({"success": True}), 200
