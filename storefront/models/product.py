from datetime import datetime
from storefront.extensions import db
from storefront.models._ids import new_id


class Product(db.Model):
    __tablename__ = "product"

    id = db.Column(db.String(36), primary_key=True, default=new_id)

    # default + two localized variants
    name = db.Column(db.String(200), nullable=False)
    name_ru = db.Column(db.String(200), nullable=True)
    name_he = db.Column(db.String(200), nullable=True)
    description = db.Column(db.Text, nullable=False)
    description_ru = db.Column(db.Text, nullable=True)
    description_he = db.Column(db.Text, nullable=True)

    price = db.Column(db.Numeric(10, 2), nullable=False)
    brand = db.Column(db.String(100), nullable=True)
    image_url = db.Column(db.String(500), nullable=True)
    images = db.Column(db.JSON, nullable=False, default=list)

    # NULL = stock is not tracked for this product
    stock = db.Column(db.Integer, nullable=True)

    # tombstone: products are deactivated, never deleted
    is_active = db.Column(db.Boolean, nullable=False, default=True)

    category_id = db.Column(db.String(36), db.ForeignKey("category.id"), nullable=True)
    category = db.relationship("Category", back_populates="products")

    created_at = db.Column(db.DateTime, default=datetime.utcnow, index=True)
    updated_at = db.Column(
        db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    @property
    def is_in_stock(self) -> bool:
        """Untracked stock counts as available."""
        return self.stock is None or self.stock > 0

    def __repr__(self) -> str:
        return f"<Product {self.name}>"
