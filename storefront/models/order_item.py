# storefront/models/order_item.py
from storefront.extensions import db


class OrderItem(db.Model):
    __tablename__ = "order_item"

    id = db.Column(db.Integer, primary_key=True)
    quantity = db.Column(db.Integer, nullable=False)
    # unit price captured when the order was placed
    price = db.Column(db.Numeric(10, 2), nullable=False)

    order_id = db.Column(db.String(36), db.ForeignKey("order.id"), nullable=False)
    product_id = db.Column(db.String(36), db.ForeignKey("product.id"), nullable=False)

    order = db.relationship("Order", back_populates="items")
    product = db.relationship("Product", lazy="joined")

    __table_args__ = (
        db.CheckConstraint("quantity > 0", name="ck_order_item_quantity_positive"),
    )

    @property
    def subtotal(self):
        return self.price * self.quantity
