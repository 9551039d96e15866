from __future__ import annotations

from decimal import Decimal

from django.core.management.base import BaseCommand

from modules.products.constants import is_low_stock
from modules.products.models import Product

CATALOG = [
    ("Smartphone", Decimal("499.99"), 4),
    ("Laptop 14 inch", Decimal("1199.00"), 12),
    ("Mechanical Keyboard", Decimal("89.90"), 25),
    ("Wireless Mouse", Decimal("24.90"), 3),
    ("USB-C Hub", Decimal("39.90"), 40),
    ("Monitor 27 inch", Decimal("299.00"), 7),
    ("Noise Cancelling Headset", Decimal("149.90"), 0),
    ("Webcam HD", Decimal("59.90"), 18),
]


class Command(BaseCommand):
    help = "Seed the inventory with development products."

    def handle(self, *args, **options):
        self.stdout.write("Creating products...")
        created = 0
        for name, price, stock_quantity in CATALOG:
            _, was_created = Product.objects.get_or_create(
                name=name,
                defaults={"price": price, "stock_quantity": stock_quantity},
            )
            created += int(was_created)

        low_stock = sum(1 for _, _, qty in CATALOG if is_low_stock(qty))
        self.stdout.write(
            self.style.SUCCESS(
                "Seed completed: "
                f"products={created}, "
                f"catalog={len(CATALOG)}, "
                f"low_stock={low_stock}"
            )
        )
