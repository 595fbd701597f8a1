# storefront/services/orders.py
from __future__ import annotations

from decimal import Decimal, InvalidOperation

from flask import current_app
from sqlalchemy import func, update
from sqlalchemy.orm import joinedload, selectinload

from storefront.api.utils.money import CENT, money_str, to_decimal
from storefront.errors import ShopValidationError
from storefront.extensions import db
from storefront.models import Order, OrderItem, OrderStatus, Product
from storefront.services.catalog import DEFAULT_LIMIT, clamp_page

DEFAULT_DELIVERY_FEE = Decimal("25.00")
# largest value a Numeric(10, 2) column holds
MAX_AMOUNT = Decimal("99999999.99")
MAX_QUANTITY = 10_000


def delivery_fee() -> Decimal:
    raw = current_app.config.get("DELIVERY_FEE", DEFAULT_DELIVERY_FEE)
    try:
        return to_decimal(raw, "delivery_fee").quantize(CENT)
    except InvalidOperation:
        current_app.logger.warning("DELIVERY_FEE=%r is not a number -> using %s", raw, DEFAULT_DELIVERY_FEE)
        return DEFAULT_DELIVERY_FEE


def _with_items():
    return Order.query.options(
        selectinload(Order.items)
        .joinedload(OrderItem.product)
        .joinedload(Product.category)
    )


def _orderable_product(product_id: str, quantity: int) -> Product:
    product = db.session.get(Product, product_id)
    if not product or not product.is_active:
        raise ShopValidationError(f"Product {product_id} is not available", ["items"])
    if not product.is_in_stock:
        raise ShopValidationError(f"{product.name} is out of stock", ["items"])
    if product.stock is not None and product.stock < quantity:
        raise ShopValidationError(f"Only {product.stock} left of {product.name}", ["items"])
    return product


def _take_stock(product: Product, quantity: int) -> None:
    """Conditional decrement; a concurrent buyer may have taken the last pieces."""
    if product.stock is None:
        return
    result = db.session.execute(
        update(Product)
        .where(Product.id == product.id, Product.stock >= quantity)
        .values(stock=Product.stock - quantity)
    )
    if result.rowcount == 0:
        raise ShopValidationError(f"Not enough stock left for {product.name}", ["items"])


def create_order(order_fields: dict, items: list[dict]) -> Order:
    """
    Persist an order and its line items in one transaction.

    Unit prices are copied from the products as they are right now; the
    order total is the sum of the lines plus the delivery fee. When the
    client sends the total it showed to the customer, it has to match.
    Any failure rolls back the whole unit, so readers never see an order
    without its items.
    """
    fields = dict(order_fields)
    expected_total = fields.pop("total_amount", None)

    if not items:
        raise ShopValidationError("Order has no items", ["items"])

    try:
        lines = []
        subtotal = Decimal("0.00")
        for it in items:
            qty = int(it["quantity"])
            if qty <= 0 or qty > MAX_QUANTITY:
                raise ShopValidationError(f"Quantity must be between 1 and {MAX_QUANTITY}", ["items"])
            product = _orderable_product(it["product_id"], qty)
            unit_price = to_decimal(product.price, "price").quantize(CENT)
            subtotal += unit_price * qty
            lines.append((product, qty, unit_price))

        total = (subtotal + delivery_fee()).quantize(CENT)
        if total > MAX_AMOUNT:
            raise ShopValidationError("Order total is too large", ["items"])
        if expected_total is not None and to_decimal(expected_total).quantize(CENT) != total:
            raise ShopValidationError(
                f"Order total {money_str(expected_total)} does not match {money_str(total)}",
                ["order.totalAmount"],
            )

        order = Order(
            status=OrderStatus.PENDING.value,
            total_amount=total,
            telegram_sent=False,
            **fields,
        )
        db.session.add(order)
        db.session.flush()

        for product, qty, unit_price in lines:
            _take_stock(product, qty)
            db.session.add(OrderItem(
                order_id=order.id,
                product_id=product.id,
                quantity=qty,
                price=unit_price,
            ))

        db.session.commit()
    except Exception:
        db.session.rollback()
        raise

    current_app.logger.info(
        "Order %s created: %d item(s), total %s", order.id, len(lines), money_str(total)
    )
    return get_order(order.id)


def get_orders(limit=DEFAULT_LIMIT, offset=0) -> list[Order]:
    limit, offset = clamp_page(limit, offset)
    return (
        _with_items()
        .order_by(Order.created_at.desc(), Order.id.desc())
        .limit(limit)
        .offset(offset)
        .all()
    )


def get_order(order_id: str) -> Order | None:
    return _with_items().filter(Order.id == order_id).first()


def update_status(order_id: str, status) -> Order | None:
    """Any status may move to any other; concurrent writers: last one wins."""
    try:
        new_status = OrderStatus(status).value
    except ValueError:
        raise ShopValidationError(f"Unknown status {status!r}", ["status"])

    order = db.session.get(Order, order_id)
    if not order:
        return None

    old_status = order.status
    order.status = new_status
    db.session.commit()
    current_app.logger.info("Order %s status %s -> %s", order.id, old_status, new_status)
    return get_order(order.id)


def mark_notified(order_id: str) -> None:
    db.session.execute(
        update(Order).where(Order.id == order_id).values(telegram_sent=True)
    )
    db.session.commit()


def get_stats() -> dict:
    total = db.session.query(func.count(Order.id)).scalar() or 0
    pending = (
        db.session.query(func.count(Order.id))
        .filter(Order.status == OrderStatus.PENDING.value)
        .scalar()
        or 0
    )
    revenue = (
        db.session.query(func.sum(Order.total_amount))
        .filter(Order.status == OrderStatus.DELIVERED.value)
        .scalar()
    )
    return {
        "total": int(total),
        "pending": int(pending),
        "revenue": money_str(revenue if revenue is not None else 0),
    }
