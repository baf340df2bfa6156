"""Product repository interfaces.

Both specialise ``IRepository`` without adding named queries: the
service expresses its look-ups as ``Q`` predicates.
"""

from __future__ import annotations

from modules.core.repositories.interfaces import IRepository
from modules.products.models import Product, ProductCategory


class IProductRepository(IRepository[Product]):
    """Repository contract for the Product aggregate."""


class IProductCategoryRepository(IRepository[ProductCategory]):
    """Repository contract for product categories."""
