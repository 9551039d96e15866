"""Django ORM implementation of the Product repository.

Satisfies ``IProductRepository`` using Django's QuerySet API.
Error handling follows the Null Object pattern: look-ups return ``None``
instead of raising, and the Service Layer decides how to translate a
missing entity.  A uniqueness ``IntegrityError`` on save is translated
into ``UniqueConstraintViolation``, and an update of a row deleted in the
meantime into ``StaleEntity``, so no ORM exception leaks upward.
"""

from __future__ import annotations

from typing import List, Optional

import structlog

from django.db import DatabaseError, IntegrityError, transaction

from modules.core.repositories.interfaces import (
    StaleEntity,
    UniqueConstraintViolation,
)
from modules.products.models import Product
from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)

# SQLite/PostgreSQL say "unique", MySQL says "Duplicate entry".
_UNIQUE_MARKERS = ("unique", "duplicate")


def _is_unique_violation(exc: IntegrityError) -> bool:
    message = str(exc).lower()
    return any(marker in message for marker in _UNIQUE_MARKERS)


class ProductDjangoRepository(IProductRepository):
    """Concrete Product repository backed by Django ORM."""

    def get_by_id(self, id: int) -> Optional[Product]:
        """Retrieve a product by primary key.

        Returns ``None`` for non-existent or malformed IDs.
        """
        try:
            return Product.objects.filter(id=id).first()
        except (ValueError, TypeError):
            return None

    def get_by_name(self, name: str) -> Optional[Product]:
        return Product.objects.filter(name=name).first()

    def list(self) -> List[Product]:
        return list(Product.objects.order_by("id"))

    def list_below_threshold(self, threshold: int) -> List[Product]:
        return list(
            Product.objects.filter(stock_quantity__lt=threshold).order_by("id")
        )

    def save(self, entity: Product) -> Product:
        """Persist (create or update) a product.

        The write runs in its own savepoint so a rejected insert leaves
        the caller's transaction usable.  A product loaded from the store
        is only ever updated: if its row is gone the write fails instead
        of inserting it again.

        Raises:
            UniqueConstraintViolation: if the name is already taken.
            StaleEntity: if the product was deleted after it was loaded.
        """
        stored = not entity._state.adding
        try:
            with transaction.atomic():
                entity.save(force_update=stored)
        except IntegrityError as exc:
            if not _is_unique_violation(exc):
                raise
            logger.warning("product.unique_violation", name=entity.name)
            raise UniqueConstraintViolation("name", entity.name) from exc
        except DatabaseError as exc:
            if not stored or Product.objects.filter(id=entity.id).exists():
                raise
            logger.warning("product.stale_update", product_id=entity.id)
            raise StaleEntity(entity.id) from exc
        logger.info("product.saved", product_id=entity.id, name=entity.name)
        return entity

    @transaction.atomic
    def delete(self, entity: Product) -> None:
        product_id = entity.id
        entity.delete()
        logger.info("product.deleted", product_id=product_id)
