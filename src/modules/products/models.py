"""Catalog models: categories, products, details and prices.

Business rules implemented:
- Products and categories are soft deleted via ``is_deleted`` (inherited
  from SoftDeleteModel); the service never removes a product row.
- A ProductPrice always belongs to a ProductDetail.  Deleting a detail that
  still has prices is blocked (``PROTECT``): the client must clear the
  prices first.
- ProductPrice identifiers are supplied by the caller, never generated.
- ``monetary_unit`` is capped at 256 characters.

The aggregate ``total_quantity`` exposed by the read DTOs is deliberately
not a column; it is recomputed from ``ProductPrice.quantity`` on every read.
"""

from __future__ import annotations

from django.db import models

from modules.core.models import BaseModel, SoftDeleteModel


class ProductCategory(SoftDeleteModel):
    """Category a product is filed under."""

    name = models.CharField(max_length=256)
    description = models.TextField(blank=True, default="")

    class Meta:
        db_table = "product_categories"
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name


class Product(SoftDeleteModel):
    """Product aggregate root.

    Display fields are denormalized on purpose; details and prices hang off
    ``product_details``.
    """

    product_category = models.ForeignKey(
        ProductCategory,
        on_delete=models.PROTECT,
        related_name="products",
    )
    product_name = models.CharField(max_length=256)
    brand = models.CharField(max_length=256, blank=True, default="")
    color = models.CharField(max_length=256, blank=True, default="")
    unit = models.CharField(max_length=256, blank=True, default="")
    weight = models.FloatField(null=True, blank=True)
    length = models.FloatField(null=True, blank=True)
    width = models.FloatField(null=True, blank=True)
    height = models.FloatField(null=True, blank=True)
    description = models.TextField(blank=True, default="")

    class Meta:
        db_table = "products"
        ordering = ["product_name", "id"]
        indexes = [
            models.Index(
                fields=["product_category", "is_deleted"],
                name="products_category_alive_idx",
            ),
        ]

    def __str__(self) -> str:
        return self.product_name


class ProductDetail(BaseModel):
    """A sellable variant of a product; owns its price rows."""

    product = models.ForeignKey(
        Product,
        on_delete=models.CASCADE,
        related_name="product_details",
    )
    display_price = models.DecimalField(
        max_digits=18,
        decimal_places=2,
        null=True,
        blank=True,
    )

    class Meta:
        db_table = "product_details"
        ordering = ["created_at", "id"]

    def __str__(self) -> str:
        return f"ProductDetail {self.id} of {self.product_id}"


class ProductPrice(models.Model):
    """Quantity/price pair of a product detail.

    ``id`` has no default: the caller always supplies it.
    """

    id = models.UUIDField(primary_key=True)
    product_detail = models.ForeignKey(
        ProductDetail,
        on_delete=models.PROTECT,
        related_name="product_prices",
    )
    quantity = models.FloatField(default=0)
    price = models.DecimalField(max_digits=18, decimal_places=2)
    monetary_unit = models.CharField(max_length=256)
    measure_unit = models.CharField(max_length=256, blank=True, default="")

    class Meta:
        db_table = "product_prices"
        ordering = ["id"]

    def __str__(self) -> str:
        return f"{self.quantity} x {self.price} {self.monetary_unit}"
