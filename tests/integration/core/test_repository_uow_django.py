"""Integration tests for the Django repository + unit of work pair.

Covers:
- Predicate look-ups (exists/get) and malformed ids.
- Staged writes are invisible until commit.
- Commit is all-or-nothing, and a failed commit does not leak into the next.
- Catalog model constraints: caller-supplied price ids, PROTECT on
  details that still own prices, monetary unit length.
"""

from __future__ import annotations

from decimal import Decimal
from uuid import uuid4

import pytest
from django.db import IntegrityError
from django.db.models import ProtectedError, Q

from modules.core.unit_of_work import DjangoUnitOfWork
from modules.products.models import (
    Product,
    ProductCategory,
    ProductDetail,
    ProductPrice,
)
from modules.products.repositories import (
    ProductCategoryDjangoRepository,
    ProductDjangoRepository,
)

pytestmark = pytest.mark.integration


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def uow():
    return DjangoUnitOfWork()


@pytest.fixture()
def repo(uow):
    return ProductDjangoRepository(uow)


@pytest.fixture()
def category():
    return ProductCategory.objects.create(name="Flooring")


@pytest.fixture()
def product(category):
    return Product.objects.create(product_category=category, product_name="Tile")


# ===========================================================================
# Look-ups
# ===========================================================================


class TestLookups:
    @pytest.mark.asyncio
    async def test_exists_matches_predicate(self, uow, category):
        repo = ProductCategoryDjangoRepository(uow)

        assert await repo.exists(Q(id=category.id)) is True
        assert await repo.exists(Q(id=uuid4())) is False
        assert await repo.exists(Q(id=category.id, is_deleted=True)) is False

    @pytest.mark.asyncio
    async def test_get_returns_entity_or_none(self, repo, product):
        found = await repo.get(Q(id=product.id))

        assert found is not None
        assert found.product_name == "Tile"
        assert await repo.get(Q(id=uuid4())) is None

    @pytest.mark.asyncio
    async def test_malformed_id_is_treated_as_missing(self, repo):
        assert await repo.get(Q(id="not-a-uuid")) is None
        assert await repo.exists(Q(id="not-a-uuid")) is False

    @pytest.mark.asyncio
    async def test_get_all_is_unfiltered(self, repo, category, product):
        await Product.objects.acreate(
            product_category=category, product_name="Gone", is_deleted=True
        )
        assert await repo.get_all().acount() == 2


# ===========================================================================
# Staging and commit
# ===========================================================================


class TestUnitOfWork:
    @pytest.mark.asyncio
    async def test_add_is_not_durable_before_commit(self, repo, uow, category):
        await repo.add(
            Product(id=uuid4(), product_category=category, product_name="Lamp")
        )

        assert await Product.objects.acount() == 0
        assert uow.pending == 1

        await uow.commit()

        assert await Product.objects.filter(product_name="Lamp").aexists()
        assert uow.pending == 0

    @pytest.mark.asyncio
    async def test_update_is_not_durable_before_commit(self, repo, uow, product):
        product.product_name = "Renamed"
        await repo.update(product)

        assert (await Product.objects.aget(id=product.id)).product_name == "Tile"

        await uow.commit()

        assert (await Product.objects.aget(id=product.id)).product_name == "Renamed"

    @pytest.mark.asyncio
    async def test_commit_is_all_or_nothing(self, repo, uow, category, product):
        await repo.add(
            Product(id=uuid4(), product_category=category, product_name="First")
        )
        await repo.add(
            Product(id=product.id, product_category=category, product_name="Clash")
        )

        with pytest.raises(IntegrityError):
            await uow.commit()

        assert not await Product.objects.filter(product_name="First").aexists()
        assert (await Product.objects.aget(id=product.id)).product_name == "Tile"

    @pytest.mark.asyncio
    async def test_commit_after_failed_commit_applies_only_its_own_work(
        self, repo, uow, category, product
    ):
        await repo.add(
            Product(id=uuid4(), product_category=category, product_name="First")
        )
        await repo.add(
            Product(id=product.id, product_category=category, product_name="Clash")
        )
        with pytest.raises(IntegrityError):
            await uow.commit()

        product.soft_delete()
        await repo.update(product)
        await uow.commit()

        stored = await Product.objects.aget(id=product.id)
        assert stored.is_deleted is True
        assert stored.product_name == "Tile"
        assert not await Product.objects.filter(product_name="First").aexists()
        assert uow.pending == 0


# ===========================================================================
# Model constraints
# ===========================================================================


class TestCatalogModelConstraints:
    def test_price_id_is_never_generated(self):
        assert not ProductPrice._meta.pk.has_default()

    def test_monetary_unit_is_capped(self):
        assert ProductPrice._meta.get_field("monetary_unit").max_length == 256

    def test_detail_with_prices_cannot_be_deleted(self, product):
        detail = ProductDetail.objects.create(product=product)
        ProductPrice.objects.create(
            id=uuid4(),
            product_detail=detail,
            quantity=1,
            price=Decimal("3.00"),
            monetary_unit="EUR",
        )

        with pytest.raises(ProtectedError):
            detail.delete()

    def test_detail_can_be_deleted_once_prices_are_cleared(self, product):
        detail = ProductDetail.objects.create(product=product)
        ProductPrice.objects.create(
            id=uuid4(),
            product_detail=detail,
            quantity=1,
            price=Decimal("3.00"),
            monetary_unit="EUR",
        )

        detail.product_prices.all().delete()
        detail.delete()

        assert not ProductDetail.objects.filter(id=detail.id).exists()
