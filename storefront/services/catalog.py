# storefront/services/catalog.py
from __future__ import annotations

import re
import unicodedata

from flask import current_app
from sqlalchemy import or_
from sqlalchemy.orm import selectinload

from storefront.errors import ShopValidationError
from storefront.extensions import db
from storefront.models import Category, Product

DEFAULT_LIMIT = 50
MAX_LIMIT = 1000
FEATURED_LIMIT = 4


# ---- pagination ------------------------------------------------------------

def clamp_page(limit=None, offset=None, default_limit: int = DEFAULT_LIMIT) -> tuple[int, int]:
    """
    Normalize limit/offset coming from a query string.
    limit=0 is honoured and yields an empty page. Anything unparsable, negative
    or above MAX_LIMIT falls back to the default instead of failing the request.
    """
    try:
        limit_val = int(limit)
    except (TypeError, ValueError):
        limit_val = default_limit
    if limit_val < 0 or limit_val > MAX_LIMIT:
        limit_val = default_limit

    try:
        offset_val = int(offset)
    except (TypeError, ValueError):
        offset_val = 0
    if offset_val < 0:
        offset_val = 0

    return limit_val, offset_val


# ---- categories ------------------------------------------------------------

def _slugify(val: str) -> str:
    raw = (val or "").strip().lower()
    if not raw:
        return "category"
    normalized = unicodedata.normalize("NFKD", raw)
    normalized = "".join(ch for ch in normalized if not unicodedata.combining(ch))
    normalized = re.sub(r"[^a-z0-9]+", "-", normalized).strip("-")
    return normalized or "category"


def _unique_slug(base: str, exclude_id: str | None = None) -> str:
    slug = base or "category"
    candidate = slug
    suffix = 1
    while True:
        q = Category.query.filter(Category.slug == candidate)
        if exclude_id:
            q = q.filter(Category.id != exclude_id)
        if not q.first():
            return candidate
        suffix += 1
        candidate = f"{slug}-{suffix}"


def list_categories() -> list[Category]:
    return Category.query.order_by(Category.name.asc()).all()


def get_category(category_id: str) -> Category | None:
    return db.session.get(Category, category_id)


def create_category(fields: dict) -> Category:
    slug = _unique_slug(_slugify(fields.get("slug") or fields["name"]))
    c = Category(
        name=fields["name"],
        name_ru=fields.get("name_ru"),
        name_he=fields.get("name_he"),
        description=fields.get("description"),
        slug=slug,
    )
    db.session.add(c)
    db.session.commit()
    current_app.logger.info("Category created: %s (%s)", c.name, c.slug)
    return c


def update_category(category_id: str, fields: dict) -> Category | None:
    c = get_category(category_id)
    if not c:
        return None

    for key in ("name", "name_ru", "name_he", "description"):
        if key in fields:
            setattr(c, key, fields[key])

    if "slug" in fields:
        c.slug = _unique_slug(_slugify(fields["slug"] or c.name), exclude_id=c.id)

    db.session.commit()
    return c


# ---- products --------------------------------------------------------------

def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _with_category():
    return Product.query.options(selectinload(Product.category))


def list_products(
    category_id: str | None = None,
    search: str | None = None,
    limit=DEFAULT_LIMIT,
    offset=0,
) -> list[Product]:
    """Active products only, newest first."""
    limit, offset = clamp_page(limit, offset)

    q = _with_category().filter(Product.is_active.is_(True))
    if category_id:
        q = q.filter(Product.category_id == category_id)

    term = (search or "").strip()
    if term:
        pattern = f"%{_escape_like(term)}%"
        q = q.filter(or_(
            Product.name.ilike(pattern, escape="\\"),
            Product.description.ilike(pattern, escape="\\"),
        ))

    return (
        q.order_by(Product.created_at.desc(), Product.id.desc())
        .limit(limit)
        .offset(offset)
        .all()
    )


def list_featured(limit=FEATURED_LIMIT) -> list[Product]:
    limit, _ = clamp_page(limit, 0, default_limit=FEATURED_LIMIT)
    return (
        _with_category()
        .filter(Product.is_active.is_(True))
        .order_by(Product.created_at.desc(), Product.id.desc())
        .limit(limit)
        .all()
    )


def count_active_products() -> int:
    return Product.query.filter(Product.is_active.is_(True)).count()


def get_product(product_id: str) -> Product | None:
    """Returns inactive products too, so old orders can still link to them."""
    return _with_category().filter(Product.id == product_id).first()


def _check_category(category_id: str | None) -> None:
    if category_id and not get_category(category_id):
        raise ShopValidationError("Unknown category", ["categoryId"])


def create_product(fields: dict) -> Product:
    _check_category(fields.get("category_id"))

    p = Product(**fields)
    db.session.add(p)
    db.session.commit()
    current_app.logger.info("Product created: %s (%s)", p.name, p.id)
    return p


def update_product(product_id: str, fields: dict) -> Product | None:
    p = get_product(product_id)
    if not p:
        return None

    if "category_id" in fields:
        _check_category(fields["category_id"])

    for key, value in fields.items():
        setattr(p, key, value)

    db.session.commit()
    return p


def deactivate_product(product_id: str) -> bool:
    p = db.session.get(Product, product_id)
    if not p:
        return False

    p.is_active = False
    db.session.commit()
    current_app.logger.info("Product deactivated: %s (%s)", p.name, p.id)
    return True
