"""Explicit mappings between product requests, entities and DTOs.

- Request -> entity: ``map_create_request_to_product``.
- Request merged into entity: ``merge_update_request_into_product``.
- Entity query -> DTO query: ``project_products`` returns a lazy
  ``ProjectedQuery`` that eager-loads the nested graph and only touches the
  database when it is counted, sliced-and-iterated or asked for a row.
- Derived fields: ``compute_total_quantity`` / ``with_total_quantity`` run
  after the fetch, on materialized DTOs.
"""

from __future__ import annotations

from typing import (
    TYPE_CHECKING,
    AsyncIterator,
    Generic,
    List,
    Optional,
    Type,
    TypeVar,
)

import uuid6

from modules.products.dtos import DtoProductWithoutCategory
from modules.products.models import Product

if TYPE_CHECKING:
    from django.db import models

    from modules.products.dtos import CreateProductDTO, UpdateProductDTO

DtoT = TypeVar("DtoT", bound=DtoProductWithoutCategory)


# ---------------------------------------------------------------------------
# Write-side mappings
# ---------------------------------------------------------------------------


def map_create_request_to_product(request: CreateProductDTO) -> Product:
    """Build a new, unsaved Product with a freshly generated id."""
    return Product(id=uuid6.uuid7(), **request.model_dump())


def merge_update_request_into_product(
    product: Product, request: UpdateProductDTO
) -> None:
    """Overwrite ``product`` with the fields the request actually carries.

    Fields left unset keep their current value; an explicit ``null`` is
    written through.  Id, details and the tombstone are never part of the
    request.
    """
    changes = request.model_dump(exclude_unset=True)
    for field, value in changes.items():
        setattr(product, field, value)


# ---------------------------------------------------------------------------
# Read-side projection
# ---------------------------------------------------------------------------


class ProjectedQuery(Generic[DtoT]):
    """Lazy queryable of DTOs on top of a Product queryset."""

    def __init__(
        self, queryset: "models.QuerySet[Product]", dto_cls: Type[DtoT]
    ) -> None:
        self._queryset = queryset
        self._dto_cls = dto_cls

    def __getitem__(self, key: slice) -> ProjectedQuery[DtoT]:
        return ProjectedQuery(self._queryset[key], self._dto_cls)

    async def __aiter__(self) -> AsyncIterator[DtoT]:
        async for product in self._queryset:
            yield self._dto_cls.from_entity(product)

    async def acount(self) -> int:
        return await self._queryset.acount()

    async def afirst(self) -> Optional[DtoT]:
        rows = await self[:1].to_list()
        return rows[0] if rows else None

    async def to_list(self) -> List[DtoT]:
        return [dto async for dto in self]


def project_products(
    queryset: "models.QuerySet[Product]", dto_cls: Type[DtoT]
) -> ProjectedQuery[DtoT]:
    """Project a Product queryset onto ``dto_cls`` without evaluating it."""
    queryset = queryset.select_related("product_category").prefetch_related(
        "product_details__product_prices"
    )
    return ProjectedQuery(queryset, dto_cls)


# ---------------------------------------------------------------------------
# Derived fields
# ---------------------------------------------------------------------------


def compute_total_quantity(dto: DtoProductWithoutCategory) -> int:
    """Sum every price quantity under every detail, truncated toward zero."""
    return int(
        sum(
            price.quantity
            for detail in dto.product_details
            for price in detail.product_prices
        )
    )


def with_total_quantity(dto: DtoT) -> DtoT:
    return dto.model_copy(update={"total_quantity": compute_total_quantity(dto)})
