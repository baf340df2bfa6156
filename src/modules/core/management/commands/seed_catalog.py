from __future__ import annotations

import random
import uuid
from decimal import Decimal

from django.core.management.base import BaseCommand

from modules.products.models import (
    Product,
    ProductCategory,
    ProductDetail,
    ProductPrice,
)

# Stable namespace so re-running the command reuses the same price ids
PRICE_NAMESPACE = uuid.UUID("6f1d2c8e-3b7a-4f52-9e0d-8c4b1a2f5e77")


class Command(BaseCommand):
    help = "Seed database with a development product catalog."

    def handle(self, *args, **options):
        random.seed(42)
        self.stdout.write("Seeding catalog data...")

        categories = self._seed_categories()
        products = self._seed_products(categories)
        prices_created = self._seed_prices(products)

        self.stdout.write(
            self.style.SUCCESS(
                "Seed completed: "
                f"categories={len(categories)}, "
                f"products={len(products)}, "
                f"prices={prices_created}"
            )
        )

    def _seed_categories(self) -> dict[str, ProductCategory]:
        self.stdout.write("Creating categories...")
        categories: dict[str, ProductCategory] = {}
        for name, description in [
            ("Furniture", "Tables, chairs and storage"),
            ("Lighting", "Lamps and fixtures"),
            ("Flooring", "Tiles, wood and laminate"),
        ]:
            category, _ = ProductCategory.objects.get_or_create(
                name=name, defaults={"description": description}
            )
            categories[name] = category
        self.stdout.write(self.style.SUCCESS("Creating categories... Done!"))
        return categories

    def _seed_products(
        self, categories: dict[str, ProductCategory]
    ) -> list[Product]:
        self.stdout.write("Creating products...")
        products: list[Product] = []
        catalog = [
            ("Oak Dining Table", "Furniture", "Nordwood", "Natural", "piece"),
            ("Walnut Side Chair", "Furniture", "Nordwood", "Walnut", "piece"),
            ("Linen Sofa", "Furniture", "Casa", "Sand", "piece"),
            ("Pendant Lamp", "Lighting", "Lumo", "Black", "piece"),
            ("Floor Lamp", "Lighting", "Lumo", "Brass", "piece"),
            ("Porcelain Tile 60x60", "Flooring", "Terra", "Grey", "m2"),
            ("Engineered Oak Plank", "Flooring", "Terra", "Honey", "m2"),
        ]
        for name, category, brand, color, unit in catalog:
            product, _ = Product.objects.get_or_create(
                product_name=name,
                defaults={
                    "product_category": categories[category],
                    "brand": brand,
                    "color": color,
                    "unit": unit,
                },
            )
            products.append(product)
        self.stdout.write(self.style.SUCCESS("Creating products... Done!"))
        return products

    def _seed_prices(self, products: list[Product]) -> int:
        self.stdout.write("Creating details and prices...")
        created = 0
        for product in products:
            detail, _ = ProductDetail.objects.get_or_create(
                product=product,
                defaults={"display_price": Decimal(random.randint(50, 900))},
            )
            for tier in range(random.randint(1, 3)):
                _, was_created = ProductPrice.objects.get_or_create(
                    id=uuid.uuid5(PRICE_NAMESPACE, f"{detail.id}:{tier}"),
                    defaults={
                        "product_detail": detail,
                        "quantity": float(random.randint(1, 40)),
                        "price": detail.display_price - tier * 5,
                        "monetary_unit": "USD",
                        "measure_unit": product.unit,
                    },
                )
                created += int(was_created)
        self.stdout.write(self.style.SUCCESS("Creating details and prices... Done!"))
        return created
