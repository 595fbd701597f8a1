from flask import Blueprint, abort, current_app, jsonify, request
from flask_login import login_required
from pydantic import ValidationError

from storefront.api.routes.category_routes import _get_payload
from storefront.api.routes.product_routes import _product_dict
from storefront.api.schemas import CreateOrderIn, StatusIn
from storefront.api.utils.money import money_str
from storefront.errors import validation_response
from storefront.extensions import db
from storefront.models import Order, OrderItem
from storefront.services import orders
from storefront.services.order_notify import notify_order_created

order_bp = Blueprint("order_bp", __name__, url_prefix="/api/orders")


def _item_dict(it: OrderItem) -> dict:
    return {
        "id": it.id,
        "orderId": it.order_id,
        "productId": it.product_id,
        "quantity": it.quantity,
        "price": money_str(it.price),
        "subtotal": money_str(it.subtotal),
        "product": _product_dict(it.product) if it.product else None,
    }


def _order_dict(o: Order) -> dict:
    return {
        "id": o.id,
        "customerName": o.customer_name,
        "customerPhone": o.customer_phone,
        "customerCity": o.customer_city,
        "customerAddress": o.customer_address,
        "notes": o.notes,
        "status": o.status,
        "totalAmount": money_str(o.total_amount),
        "telegramSent": bool(o.telegram_sent),
        "createdAt": o.created_at.isoformat() if o.created_at else None,
        "items": [_item_dict(it) for it in o.items],
    }


@order_bp.get("")
@login_required
def list_orders():
    items = orders.get_orders(request.args.get("limit"), request.args.get("offset"))
    return jsonify([_order_dict(o) for o in items]), 200


@order_bp.get("/<string:order_id>")
@login_required
def get_order(order_id: str):
    o = orders.get_order(order_id)
    if not o:
        abort(404, description="Order not found")
    return jsonify(_order_dict(o)), 200


@order_bp.post("")
def create_order():
    try:
        payload = CreateOrderIn.model_validate(_get_payload())
    except ValidationError as exc:
        current_app.logger.info("Invalid order payload: %s", exc.errors())
        return validation_response(exc, "Invalid order data")

    order = orders.create_order(
        payload.order.model_dump(),
        [it.model_dump() for it in payload.items],
    )

    order_id = order.id

    # the order is committed at this point; a failed notification must not undo it
    try:
        notify_order_created(order)
    except Exception:
        db.session.rollback()
        current_app.logger.exception("Telegram notification failed for order %s", order_id)

    return jsonify(_order_dict(orders.get_order(order_id))), 201


@order_bp.patch("/<string:order_id>/status")
@login_required
def update_order_status(order_id: str):
    data = StatusIn.model_validate(_get_payload())
    o = orders.update_status(order_id, data.status)
    if not o:
        abort(404, description="Order not found")
    return jsonify(_order_dict(o)), 200
