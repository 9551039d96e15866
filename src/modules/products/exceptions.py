"""Product domain exceptions.

Raised by the Service Layer when business rules are violated.
The API layer (Views) catches these and translates them into
appropriate HTTP responses.
"""

from __future__ import annotations

from typing import Any, Dict


class ProductDomainError(Exception):
    """Base class for every product business-rule failure."""


class DuplicateResource(ProductDomainError):
    """A write would give two products the same name."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"A product with the name '{name}' already exists.")


class NotFound(ProductDomainError):
    """A lookup by id found no matching record."""

    def __init__(self, entity: str, field: str, value: Any) -> None:
        self.entity = entity
        self.field = field
        self.value = value
        super().__init__(f"{entity} not found with {field}: {value}")


class EmptyCollection(ProductDomainError):
    """A full listing found zero products."""


class ValidationFailure(ProductDomainError):
    """Input failed shape checks before reaching the service.

    Raised by the API layer only; ``errors`` maps field name to message.
    """

    message = "Validation failed. Please correct the errors."

    def __init__(self, errors: Dict[str, str]) -> None:
        self.errors = errors
        super().__init__(self.message)
