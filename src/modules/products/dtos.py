"""Product DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
These are the contracts between the controller layer and the Service
layer.  DTOs are immutable (``frozen=True``).

- ``CreateProductDTO``: input for product creation.
- ``UpdateProductDTO``: input for partial product updates.
- ``DtoProduct`` / ``DtoProductWithoutCategory``: read projections with the
  derived ``total_quantity``.
"""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, field_validator

if TYPE_CHECKING:
    from modules.products.models import (
        Product,
        ProductCategory,
        ProductDetail,
        ProductPrice,
    )


# ---------------------------------------------------------------------------
# Input DTOs
# ---------------------------------------------------------------------------


def _dimension_must_be_non_negative(v: Optional[float]) -> Optional[float]:
    if v is not None and v < 0:
        raise ValueError("Dimensions and weight cannot be negative.")
    return v


class CreateProductDTO(BaseModel):
    """Immutable DTO for product creation requests.

    Validates:
    - ``product_name`` is a non-empty string.
    - weight and dimensions are non-negative when given.
    """

    model_config = ConfigDict(frozen=True)

    product_category_id: UUID
    product_name: str
    brand: str = ""
    color: str = ""
    unit: str = ""
    weight: Optional[float] = None
    length: Optional[float] = None
    width: Optional[float] = None
    height: Optional[float] = None
    description: str = ""

    @field_validator("product_name")
    @classmethod
    def name_must_not_be_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Product name must not be empty.")
        return v.strip()

    check_dimensions = field_validator("weight", "length", "width", "height")(
        _dimension_must_be_non_negative
    )


class UpdateProductDTO(BaseModel):
    """Immutable DTO for product update requests.

    ``product_category_id`` is always required and always revalidated.
    Every other field is optional: only fields the caller actually sent
    (``model_fields_set``) are merged into the product.  An explicit
    ``null`` clears weight or a dimension; text fields reject it.
    """

    model_config = ConfigDict(frozen=True)

    product_category_id: UUID
    product_name: Optional[str] = None
    brand: Optional[str] = None
    color: Optional[str] = None
    unit: Optional[str] = None
    weight: Optional[float] = None
    length: Optional[float] = None
    width: Optional[float] = None
    height: Optional[float] = None
    description: Optional[str] = None

    @field_validator("product_name", "brand", "color", "unit", "description")
    @classmethod
    def text_must_not_be_null(cls, v: Optional[str]) -> str:
        if v is None:
            raise ValueError("Text fields cannot be null; omit them instead.")
        return v

    @field_validator("product_name")
    @classmethod
    def name_must_not_be_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Product name must not be empty.")
        return v.strip()

    check_dimensions = field_validator("weight", "length", "width", "height")(
        _dimension_must_be_non_negative
    )


# ---------------------------------------------------------------------------
# Output DTOs
# ---------------------------------------------------------------------------


class DtoProductPrice(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: UUID
    quantity: float
    price: Decimal
    monetary_unit: str
    measure_unit: str

    @classmethod
    def from_entity(cls, price: ProductPrice) -> DtoProductPrice:
        return cls(
            id=price.id,
            quantity=price.quantity,
            price=price.price,
            monetary_unit=price.monetary_unit,
            measure_unit=price.measure_unit,
        )


class DtoProductDetail(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: UUID
    display_price: Optional[Decimal] = None
    product_prices: List[DtoProductPrice] = []

    @classmethod
    def from_entity(cls, detail: ProductDetail) -> DtoProductDetail:
        """Relies on ``product_prices`` having been prefetched."""
        return cls(
            id=detail.id,
            display_price=detail.display_price,
            product_prices=[
                DtoProductPrice.from_entity(p) for p in detail.product_prices.all()
            ],
        )


class DtoProductCategory(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: UUID
    name: str
    description: str

    @classmethod
    def from_entity(cls, category: ProductCategory) -> DtoProductCategory:
        return cls(
            id=category.id,
            name=category.name,
            description=category.description,
        )


class DtoProductWithoutCategory(BaseModel):
    """Product read projection that omits the nested category.

    ``total_quantity`` is derived data: it is ``0`` straight out of the
    projection and filled in by the service after the fetch.
    """

    model_config = ConfigDict(frozen=True)

    id: UUID
    product_category_id: UUID
    product_name: str
    brand: str
    color: str
    unit: str
    weight: Optional[float] = None
    length: Optional[float] = None
    width: Optional[float] = None
    height: Optional[float] = None
    description: str
    product_details: List[DtoProductDetail] = []
    total_quantity: int = 0

    @classmethod
    def _fields_from_entity(cls, product: Product) -> dict:
        return {
            "id": product.id,
            "product_category_id": product.product_category_id,
            "product_name": product.product_name,
            "brand": product.brand,
            "color": product.color,
            "unit": product.unit,
            "weight": product.weight,
            "length": product.length,
            "width": product.width,
            "height": product.height,
            "description": product.description,
            "product_details": [
                DtoProductDetail.from_entity(d) for d in product.product_details.all()
            ],
        }

    @classmethod
    def from_entity(cls, product: Product) -> DtoProductWithoutCategory:
        """Build the DTO from a product with details and prices prefetched."""
        return cls(**cls._fields_from_entity(product))


class DtoProduct(DtoProductWithoutCategory):
    """Product read projection including its category."""

    product_category: DtoProductCategory

    @classmethod
    def from_entity(cls, product: Product) -> DtoProduct:
        """Build the DTO; the category must have been ``select_related``."""
        return cls(
            **cls._fields_from_entity(product),
            product_category=DtoProductCategory.from_entity(product.product_category),
        )
