# storefront/services/order_notify.py
from __future__ import annotations

import html as _html

from flask import current_app

from storefront.api.utils.money import money_str
from storefront.api.utils.telegram import send_telegram_message
from storefront.models import Order
from storefront.services import orders


def _esc(val) -> str:
    return _html.escape(str(val or ""), quote=False)


def format_order_message(order: Order, currency: str = "₪") -> str:
    items = "\n".join(
        f"• {_esc(it.product.name if it.product else it.product_id)} "
        f"x{it.quantity} - {currency}{money_str(it.price)}"
        for it in order.items
    )
    created = order.created_at.strftime("%Y-%m-%d %H:%M UTC") if order.created_at else "-"

    lines = [
        f"🛍️ <b>New Order #{order.id[:8]}</b>",
        "",
        f"👤 <b>Customer:</b> {_esc(order.customer_name)}",
        f"📱 <b>Phone:</b> {_esc(order.customer_phone)}",
        f"🏙️ <b>City:</b> {_esc(order.customer_city)}",
        f"🏠 <b>Address:</b> {_esc(order.customer_address)}",
        "",
        "📦 <b>Items:</b>",
        items,
        "",
        f"💰 <b>Total:</b> {currency}{money_str(order.total_amount)}",
        f"📋 <b>Status:</b> {_esc(order.status)}",
    ]
    if order.notes:
        lines += ["", f"📝 <b>Notes:</b> {_esc(order.notes)}"]
    lines += ["", f"⏰ <b>Order Time:</b> {created}"]
    return "\n".join(lines)


def notify_order_created(order: Order) -> bool:
    """
    Runs after the order is committed. Raises NotificationError when the
    post fails; the flag is only set once Telegram accepted the message.
    """
    text = format_order_message(order, current_app.config.get("CURRENCY_SYMBOL", "₪"))
    sent = send_telegram_message(text)
    if sent:
        orders.mark_notified(order.id)
        current_app.logger.info("Telegram notification sent for order %s", order.id)
    return sent
