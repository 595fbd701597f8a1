"""
Request body schemas.

Field names follow the storefront client (camelCase on the wire); the models
expose snake_case attributes that map one-to-one onto the ORM columns.
"""
from __future__ import annotations

from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from storefront.models import OrderStatus
from storefront.services.orders import MAX_QUANTITY


class _Schema(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


class CategoryIn(_Schema):
    name: str = Field(..., min_length=1, max_length=100)
    name_ru: Optional[str] = Field(None, max_length=100)
    name_he: Optional[str] = Field(None, max_length=100)
    slug: Optional[str] = Field(None, max_length=150)
    description: Optional[str] = None


class CategoryUpdate(_Schema):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    name_ru: Optional[str] = Field(None, max_length=100)
    name_he: Optional[str] = Field(None, max_length=100)
    slug: Optional[str] = Field(None, max_length=150)
    description: Optional[str] = None

    @model_validator(mode="after")
    def _name_not_null(self):
        if "name" in self.model_fields_set and self.name is None:
            raise ValueError("name cannot be null")
        return self


class ProductIn(_Schema):
    name: str = Field(..., min_length=1, max_length=200)
    name_ru: Optional[str] = Field(None, max_length=200)
    name_he: Optional[str] = Field(None, max_length=200)
    description: str = Field(..., min_length=1)
    description_ru: Optional[str] = None
    description_he: Optional[str] = None
    price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    category_id: str = Field(..., min_length=1)
    brand: Optional[str] = Field(None, max_length=100)
    image_url: Optional[str] = Field(None, max_length=500)
    images: List[str] = Field(default_factory=list)
    stock: Optional[int] = Field(None, ge=0)
    is_active: bool = True


class ProductUpdate(_Schema):
    """Every field optional; only the ones present in the body are written."""

    name: Optional[str] = Field(None, min_length=1, max_length=200)
    name_ru: Optional[str] = Field(None, max_length=200)
    name_he: Optional[str] = Field(None, max_length=200)
    description: Optional[str] = Field(None, min_length=1)
    description_ru: Optional[str] = None
    description_he: Optional[str] = None
    price: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    category_id: Optional[str] = Field(None, min_length=1)
    brand: Optional[str] = Field(None, max_length=100)
    image_url: Optional[str] = Field(None, max_length=500)
    images: Optional[List[str]] = None
    stock: Optional[int] = Field(None, ge=0)
    is_active: Optional[bool] = None

    @model_validator(mode="after")
    def _required_not_null(self):
        for key in ("name", "description", "price", "category_id", "images", "is_active"):
            if key in self.model_fields_set and getattr(self, key) is None:
                raise ValueError(f"{key} cannot be null")
        return self


class OrderFields(_Schema):
    customer_name: str = Field(..., min_length=1, max_length=120)
    customer_phone: str = Field(..., min_length=1, max_length=40)
    customer_city: str = Field(..., min_length=1, max_length=120)
    customer_address: str = Field(..., min_length=1)
    notes: Optional[str] = None
    # what the client displayed; checked against the server-side total
    total_amount: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)


class OrderItemIn(_Schema):
    product_id: str = Field(..., min_length=1)
    quantity: int = Field(..., gt=0, le=MAX_QUANTITY)
    price: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)


class CreateOrderIn(_Schema):
    order: OrderFields
    items: List[OrderItemIn] = Field(..., min_length=1)


class StatusIn(_Schema):
    status: OrderStatus


class LoginIn(BaseModel):
    """Credentials are compared exactly as sent, whitespace included."""

    username: str = ""
    password: str = ""
