"""Product DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
These are the contracts between the API layer (DRF Views) and the
Service layer.  DTOs are immutable (``frozen=True``).

- ``ProductInputDTO``: input for product creation and full replacement.
- ``ProductOutputDTO``: output with all product fields.
- ``ProductAlertDTO``: a single product plus its low-stock alert.
- ``ProductListDTO``: every product plus the alerts raised by the listing.

Conversion between DTOs and the ``Product`` storage record is written
out field by field: ``to_entity`` / ``apply_to`` on the way in,
``from_entity`` on the way out.
"""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, Annotated, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from modules.products.constants import (
    NAME_MAX_LENGTH,
    NAME_MIN_LENGTH,
    PRICE_DECIMAL_PLACES,
    PRICE_MAX_DIGITS,
    STOCK_QUANTITY_MAX,
)

if TYPE_CHECKING:
    from modules.products.models import Product


# ---------------------------------------------------------------------------
# Input DTO
# ---------------------------------------------------------------------------


class ProductInputDTO(BaseModel):
    """Immutable DTO for create and update requests.

    Validates:
    - ``name`` is not blank and is 3-30 characters once stripped.
    - ``price`` is a Decimal greater than or equal to zero that fits the
      stored precision (10 digits, 2 of them after the point).
    - ``stock_quantity`` is non-negative and fits a 32-bit column.

    Unknown keys (including a client-supplied ``id``) are ignored.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str
    price: Annotated[
        Decimal,
        Field(max_digits=PRICE_MAX_DIGITS, decimal_places=PRICE_DECIMAL_PLACES),
    ]
    stock_quantity: Annotated[int, Field(le=STOCK_QUANTITY_MAX)]

    @field_validator("name")
    @classmethod
    def name_must_fit_length(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Product name cannot be blank.")
        if not NAME_MIN_LENGTH <= len(v) <= NAME_MAX_LENGTH:
            raise ValueError(
                f"Product name must be {NAME_MIN_LENGTH}-{NAME_MAX_LENGTH} characters."
            )
        return v

    @field_validator("price")
    @classmethod
    def price_must_not_be_negative(cls, v: Decimal) -> Decimal:
        if v < 0:
            raise ValueError("Price cannot be negative.")
        return v

    @field_validator("stock_quantity")
    @classmethod
    def stock_must_be_non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("Stock quantity cannot be negative.")
        return v

    def to_entity(self) -> Product:
        """Build a new, unsaved Product from this DTO."""
        from modules.products.models import Product

        return Product(
            name=self.name,
            price=self.price,
            stock_quantity=self.stock_quantity,
        )

    def apply_to(self, product: Product) -> Product:
        """Replace every mutable field of ``product``; ``id`` is untouched."""
        product.name = self.name
        product.price = self.price
        product.stock_quantity = self.stock_quantity
        return product


# ---------------------------------------------------------------------------
# Output DTOs
# ---------------------------------------------------------------------------


class ProductOutputDTO(BaseModel):
    """Immutable DTO for product API responses."""

    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    price: Decimal
    stock_quantity: int

    @classmethod
    def from_entity(cls, product: Product) -> ProductOutputDTO:
        """Build an output DTO from a Product model instance."""
        return cls(
            id=product.id,
            name=product.name,
            price=product.price,
            stock_quantity=product.stock_quantity,
        )


class ProductAlertDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    product: ProductOutputDTO
    alert: Optional[str] = None


class ProductListDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    content: List[ProductOutputDTO]
    alerts: List[str]


def validation_errors(exc: ValidationError) -> Dict[str, str]:
    """Flatten a pydantic error into ``{field: message}``.

    Custom validator messages arrive prefixed with ``"Value error, "``;
    the prefix is dropped.
    """
    errors: Dict[str, str] = {}
    for error in exc.errors():
        field = ".".join(str(part) for part in error["loc"]) or "__root__"
        message = error["msg"].removeprefix("Value error, ")
        errors.setdefault(field, message)
    return errors
