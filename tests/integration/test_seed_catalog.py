"""Integration tests for the ``seed_catalog`` management command."""

from __future__ import annotations

from io import StringIO

import pytest
from django.core.management import call_command

from modules.products.models import Product, ProductCategory, ProductPrice

pytestmark = pytest.mark.integration


class TestSeedCatalog:
    def test_creates_catalog(self):
        out = StringIO()
        call_command("seed_catalog", stdout=out)

        assert ProductCategory.objects.count() == 3
        assert Product.objects.count() == 7
        assert ProductPrice.objects.exists()
        assert "Seed completed" in out.getvalue()

    def test_is_idempotent(self):
        call_command("seed_catalog", stdout=StringIO())
        prices = ProductPrice.objects.count()

        call_command("seed_catalog", stdout=StringIO())

        assert ProductCategory.objects.count() == 3
        assert Product.objects.count() == 7
        assert ProductPrice.objects.count() == prices
