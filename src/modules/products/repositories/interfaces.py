"""Product repository interface.

Extends ``IRepository[Product]`` with the look-ups required by the
name-uniqueness rule and the low-stock listing.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, List, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.products.models import Product


class IProductRepository(IRepository["Product"]):
    """Repository contract for the Product record."""

    @abstractmethod
    def get_by_name(self, name: str) -> Optional[Product]:
        """Retrieve a product by exact (case-sensitive) name."""

    @abstractmethod
    def list_below_threshold(self, threshold: int) -> List[Product]:
        """List products whose stock quantity is strictly below ``threshold``."""
