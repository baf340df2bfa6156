"""Product service layer (Use Cases).

Orchestrates business logic for the Product aggregate, delegating
persistence to the injected repositories and the transaction boundary
to the injected unit of work.

Business rules enforced here:
- A product's category must exist and not be soft-deleted (create/update).
- Products are soft deleted; every read filters ``is_deleted=False``.
- ``total_quantity`` is recomputed after every read, never stored.
- Validation always runs before any write is staged, and every command
  commits exactly once.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List
from uuid import UUID

import structlog
from django.core.exceptions import ValidationError
from django.db.models import Q

from modules.core.pagination import build_paginated_result
from modules.core.results import ServiceActionResult
from modules.products.dtos import DtoProduct, DtoProductWithoutCategory
from modules.products.exceptions import ProductCategoryNotFound, ProductNotFound
from modules.products.mappings import (
    ProjectedQuery,
    map_create_request_to_product,
    merge_update_request_into_product,
    project_products,
    with_total_quantity,
)

if TYPE_CHECKING:
    from modules.core.pagination import BasePaginatedRequest
    from modules.core.unit_of_work import IUnitOfWork
    from modules.products.dtos import CreateProductDTO, UpdateProductDTO
    from modules.products.models import Product
    from modules.products.repositories.interfaces import (
        IProductCategoryRepository,
        IProductRepository,
    )

logger = structlog.get_logger(__name__)


def _alive(**lookups) -> Q:
    return Q(is_deleted=False, **lookups)


class ProductService:
    """Application service for Product use-cases.

    Receives its repositories and unit of work via constructor
    injection (DIP).
    """

    def __init__(
        self,
        product_repository: IProductRepository,
        product_category_repository: IProductCategoryRepository,
        unit_of_work: IUnitOfWork,
    ) -> None:
        self._product_repo = product_repository
        self._category_repo = product_category_repository
        self._uow = unit_of_work

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    async def create_product(self, request: CreateProductDTO) -> ServiceActionResult:
        """Create a new product under an existing category.

        Raises:
            ProductCategoryNotFound: if the category is missing or deleted.
        """
        await self._ensure_category_exists(request.product_category_id)

        product = map_create_request_to_product(request)
        await self._product_repo.add(product)
        await self._uow.commit()

        logger.info(
            "product.created",
            product_id=str(product.id),
            product_category_id=str(request.product_category_id),
        )
        return ServiceActionResult(success=True)

    async def update_product(
        self, request: UpdateProductDTO, id: UUID
    ) -> ServiceActionResult:
        """Merge the request into an existing product.

        Raises:
            ProductNotFound: if the product is missing or deleted.
            ProductCategoryNotFound: if the new category is missing or deleted.
        """
        product = await self._get_alive_product(id)
        await self._ensure_category_exists(request.product_category_id)

        merge_update_request_into_product(product, request)
        await self._product_repo.update(product)
        await self._uow.commit()

        logger.info("product.updated", product_id=str(id))
        return ServiceActionResult(success=True)

    async def delete_product(self, id: UUID) -> ServiceActionResult:
        """Soft-delete a product.

        A product that is already deleted is reported as not found.

        Raises:
            ProductNotFound: if the product is missing or deleted.
        """
        product = await self._get_alive_product(id)

        product.soft_delete()
        await self._product_repo.update(product)
        await self._uow.commit()

        logger.info("product.soft_deleted", product_id=str(id))
        return ServiceActionResult(success=True)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    async def get_product(self, id: UUID) -> ServiceActionResult:
        """Retrieve a single product (without its category).

        Raises:
            ProductNotFound: if the product is missing or deleted.
        """
        try:
            product = await project_products(
                self._product_repo.get_all().filter(_alive(id=id)),
                DtoProductWithoutCategory,
            ).afirst()
        except (ValueError, ValidationError):
            product = None
        if product is None:
            logger.warning("product.not_found", product_id=str(id))
            raise ProductNotFound(f"Product {id} not found.")

        return ServiceActionResult(success=True, data=with_total_quantity(product))

    async def get_all_products(self) -> ServiceActionResult:
        """Return every non-deleted product. The result is not bounded."""
        products = await self._alive_products().to_list()
        return ServiceActionResult(
            success=True, data=[with_total_quantity(p) for p in products]
        )

    async def get_paginated_products(
        self, request: BasePaginatedRequest
    ) -> ServiceActionResult:
        """Return one page of non-deleted products plus paging metadata."""
        paginated = await build_paginated_result(
            self._alive_products(), request.page_size, request.page_index
        )
        products: List[DtoProduct] = await paginated.items.to_list()
        paginated.items = [with_total_quantity(p) for p in products]

        logger.info(
            "product.page_retrieved",
            page_index=request.page_index,
            page_size=request.page_size,
            total_count=paginated.total_count,
        )
        return ServiceActionResult(success=True, data=paginated)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _alive_products(self) -> ProjectedQuery[DtoProduct]:
        return project_products(
            self._product_repo.get_all().filter(_alive()), DtoProduct
        )

    async def _get_alive_product(self, id: UUID) -> Product:
        product = await self._product_repo.get(_alive(id=id))
        if product is None:
            logger.warning("product.not_found", product_id=str(id))
            raise ProductNotFound(f"Product {id} not found.")
        return product

    async def _ensure_category_exists(self, category_id: UUID) -> None:
        if not await self._category_repo.exists(_alive(id=category_id)):
            logger.warning(
                "product.category_not_found", product_category_id=str(category_id)
            )
            raise ProductCategoryNotFound(
                f"Product category {category_id} not found."
            )
