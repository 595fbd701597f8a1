from datetime import datetime
from storefront.extensions import db
from storefront.models._ids import new_id


class Category(db.Model):
    __tablename__ = "category"

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    name = db.Column(db.String(100), nullable=False)
    name_ru = db.Column(db.String(100), nullable=True)
    name_he = db.Column(db.String(100), nullable=True)
    slug = db.Column(db.String(150), unique=True, nullable=False)
    description = db.Column(db.Text, nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    products = db.relationship("Product", back_populates="category", lazy=True)

    def __repr__(self): return f"<Category {self.name}>"
