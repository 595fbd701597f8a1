# storefront/models/order.py
import enum
from datetime import datetime
from storefront.extensions import db
from storefront.models._ids import new_id


class OrderStatus(str, enum.Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class Order(db.Model):
    __tablename__ = "order"

    id = db.Column(db.String(36), primary_key=True, default=new_id)

    # customer
    customer_name = db.Column(db.String(120), nullable=False)
    customer_phone = db.Column(db.String(40), nullable=False)
    customer_city = db.Column(db.String(120), nullable=False)
    customer_address = db.Column(db.Text, nullable=False)
    notes = db.Column(db.Text, nullable=True)

    status = db.Column(db.String(32), nullable=False, default=OrderStatus.PENDING.value, index=True)
    # fixed at creation, never recomputed
    total_amount = db.Column(db.Numeric(10, 2), nullable=False)
    telegram_sent = db.Column(db.Boolean, nullable=False, default=False)

    created_at = db.Column(db.DateTime, default=datetime.utcnow, index=True)

    items = db.relationship(
        "OrderItem",
        back_populates="order",
        lazy=True,
        cascade="all, delete-orphan",
        order_by="OrderItem.id",
    )

    def __repr__(self):
        return f"<Order #{self.id[:8]} – {self.customer_name} – {self.status}>"
