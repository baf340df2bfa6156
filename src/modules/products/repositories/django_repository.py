"""Django ORM implementations of the product repositories."""

from __future__ import annotations

from modules.core.repositories.django_repository import DjangoRepository
from modules.products.models import Product, ProductCategory
from modules.products.repositories.interfaces import (
    IProductCategoryRepository,
    IProductRepository,
)


class ProductDjangoRepository(DjangoRepository[Product], IProductRepository):
    """Concrete Product repository backed by Django ORM."""

    model = Product


class ProductCategoryDjangoRepository(
    DjangoRepository[ProductCategory], IProductCategoryRepository
):
    """Concrete ProductCategory repository backed by Django ORM."""

    model = ProductCategory
