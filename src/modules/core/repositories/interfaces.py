"""Generic repository interface (Dependency Inversion Principle).

Provides ``IRepository[T]``, the base abstract class that all
domain-specific repository interfaces extend.  Service-layer code
depends on this abstraction, never on Django ORM directly.

Also defines the storage-neutral signals a repository raises when the
backing store rejects a write: ``UniqueConstraintViolation`` for a
uniqueness constraint and ``StaleEntity`` for an update whose row has
been deleted since it was loaded.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Generic, List, Optional, TypeVar

T = TypeVar("T")


class UniqueConstraintViolation(Exception):
    """The store refused a write that would duplicate a unique value."""

    def __init__(self, field: str, value: Any) -> None:
        self.field = field
        self.value = value
        super().__init__(f"Unique constraint violated on {field}={value!r}.")


class StaleEntity(Exception):
    """An update targeted a row that no longer exists in the store."""

    def __init__(self, id: Any) -> None:
        self.id = id
        super().__init__(f"Row {id!r} no longer exists.")


class IRepository(ABC, Generic[T]):
    """Base generic repository contract.

    Type parameter ``T`` represents the domain entity managed by the
    repository (e.g. ``Product``).
    """

    @abstractmethod
    def get_by_id(self, id: int) -> Optional[T]:
        """Retrieve an entity by its primary key."""

    @abstractmethod
    def list(self) -> List[T]:
        """List all entities in store-defined order."""

    @abstractmethod
    def save(self, entity: T) -> T:
        """Persist (create or update) an entity.

        Raises:
            UniqueConstraintViolation: if a unique column would collide.
            StaleEntity: if an already-stored entity was deleted meanwhile.
        """

    @abstractmethod
    def delete(self, entity: T) -> None:
        """Remove an entity from the store."""
