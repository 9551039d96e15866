"""Product service layer (Use Cases).

Orchestrates business logic for the Product record, delegating
persistence to the injected ``IProductRepository`` and logging to the
injected structlog logger.

Business rules enforced here:
- Product names are unique.  The name pre-check gives an early error for
  the common case; the store's unique constraint settles races and is
  translated into ``DuplicateResource``.
- Low stock (``stock_quantity < LOW_STOCK_THRESHOLD``) is recomputed on
  every create, update and listing, never cached.
- Listing an empty catalogue raises ``EmptyCollection``; listing low-stock
  products returns an empty list instead.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional

from django.db import transaction

from modules.core.repositories.interfaces import (
    StaleEntity,
    UniqueConstraintViolation,
)
from modules.products.constants import (
    LOW_STOCK_THRESHOLD,
    is_low_stock,
    low_stock_alert,
)
from modules.products.dtos import ProductAlertDTO, ProductListDTO, ProductOutputDTO
from modules.products.exceptions import DuplicateResource, EmptyCollection, NotFound

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger

    from modules.products.dtos import ProductInputDTO
    from modules.products.models import Product
    from modules.products.repositories.interfaces import IProductRepository


class ProductService:
    """Application service for Product use-cases.

    Receives an ``IProductRepository`` and a logger via constructor
    injection (DIP).  Holds no state between calls.
    """

    def __init__(
        self, repository: IProductRepository, logger: FilteringBoundLogger
    ) -> None:
        self._repo = repository
        self._log = logger

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def create_product(self, dto: ProductInputDTO) -> ProductAlertDTO:
        """Create a new product after enforcing name uniqueness.

        Raises:
            DuplicateResource: if the name is already taken.
        """
        log = self._log.bind(name=dto.name)

        if self._repo.get_by_name(dto.name):
            log.warning("product.duplicate_name")
            raise DuplicateResource(dto.name)

        product = self._save(dto.to_entity(), log)
        log.info("product.created", product_id=product.id)
        return ProductAlertDTO(
            product=ProductOutputDTO.from_entity(product),
            alert=self._alert_for(product, log),
        )

    @transaction.atomic
    def update_product(self, id: int, dto: ProductInputDTO) -> ProductAlertDTO:
        """Replace name, price and stock quantity of an existing product.

        Raises:
            NotFound: if the product does not exist, including when it is
                deleted between the look-up and the write.
            DuplicateResource: if the new name belongs to another product.
        """
        product = self._get_or_raise(id)
        log = self._log.bind(product_id=product.id, name=dto.name)

        holder = self._repo.get_by_name(dto.name)
        if holder is not None and holder.id != product.id:
            log.warning("product.duplicate_name")
            raise DuplicateResource(dto.name)

        product = self._save(dto.apply_to(product), log)
        log.info("product.updated")
        return ProductAlertDTO(
            product=ProductOutputDTO.from_entity(product),
            alert=self._alert_for(product, log),
        )

    @transaction.atomic
    def delete_product(self, id: int) -> ProductOutputDTO:
        """Delete a product and return its state just before removal.

        Raises:
            NotFound: if the product does not exist.
        """
        product = self._get_or_raise(id)
        snapshot = ProductOutputDTO.from_entity(product)
        self._repo.delete(product)
        self._log.info("product.deleted", product_id=snapshot.id)
        return snapshot

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_products(self) -> ProductListDTO:
        """Return every product plus one alert per low-stock product.

        Raises:
            EmptyCollection: if the store holds no products.
        """
        products = self._repo.list()
        if not products:
            raise EmptyCollection("No products have been created yet.")

        alerts = [
            low_stock_alert(p.name) for p in products if is_low_stock(p.stock_quantity)
        ]
        return ProductListDTO(
            content=[ProductOutputDTO.from_entity(p) for p in products],
            alerts=alerts,
        )

    def get_product(self, id: int) -> ProductOutputDTO:
        """Retrieve a single product by ID.

        Raises:
            NotFound: if the product does not exist.
        """
        return ProductOutputDTO.from_entity(self._get_or_raise(id))

    def list_low_stock(self) -> List[ProductOutputDTO]:
        products = self._repo.list_below_threshold(LOW_STOCK_THRESHOLD)
        return [ProductOutputDTO.from_entity(p) for p in products]

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _get_or_raise(self, id: int) -> Product:
        product = self._repo.get_by_id(id)
        if product is None:
            raise NotFound("Product", "productId", id)
        return product

    def _save(self, product: Product, log: FilteringBoundLogger) -> Product:
        try:
            return self._repo.save(product)
        except UniqueConstraintViolation as exc:
            log.warning("product.duplicate_name", source="store")
            raise DuplicateResource(str(exc.value)) from exc
        except StaleEntity as exc:
            log.warning("product.deleted_during_update")
            raise NotFound("Product", "productId", exc.id) from exc

    @staticmethod
    def _alert_for(product: Product, log: FilteringBoundLogger) -> Optional[str]:
        if not is_low_stock(product.stock_quantity):
            return None
        log.warning(
            "product.low_stock",
            stock_quantity=product.stock_quantity,
            threshold=LOW_STOCK_THRESHOLD,
        )
        return low_stock_alert(product.name)
