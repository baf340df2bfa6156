"""Product repositories package."""

from modules.products.repositories.django_repository import (
    ProductCategoryDjangoRepository,
    ProductDjangoRepository,
)
from modules.products.repositories.interfaces import (
    IProductCategoryRepository,
    IProductRepository,
)

__all__ = [
    "IProductCategoryRepository",
    "IProductRepository",
    "ProductCategoryDjangoRepository",
    "ProductDjangoRepository",
]
