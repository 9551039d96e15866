"""Product model with name uniqueness and stock control.

Business rules backed by the database:
- Product name is unique (UNIQUE index, the race-safe backstop for the
  service-level pre-check).
- Price is never negative.
- Stock quantity is never negative.
"""

from __future__ import annotations

from decimal import Decimal

from django.core.validators import MinLengthValidator, MinValueValidator
from django.db import models

from modules.core.models import TimestampedModel
from modules.products.constants import (
    NAME_MAX_LENGTH,
    NAME_MIN_LENGTH,
    PRICE_DECIMAL_PLACES,
    PRICE_MAX_DIGITS,
)


class Product(TimestampedModel):
    """Product record owned by the store.

    ``id`` is the default auto-increment key assigned on first save and
    never changed afterwards.
    """

    name = models.CharField(
        max_length=NAME_MAX_LENGTH,
        unique=True,
        validators=[MinLengthValidator(NAME_MIN_LENGTH)],
    )
    price = models.DecimalField(
        max_digits=PRICE_MAX_DIGITS,
        decimal_places=PRICE_DECIMAL_PLACES,
        validators=[MinValueValidator(Decimal("0"))],
    )
    stock_quantity = models.PositiveIntegerField(default=0)

    class Meta:
        db_table = "products"
        ordering = ["id"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(price__gte=0),
                name="products_price_non_negative",
            ),
            models.CheckConstraint(
                condition=models.Q(stock_quantity__gte=0),
                name="products_stock_non_negative",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.name} ({self.stock_quantity})"
