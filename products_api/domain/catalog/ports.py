"""
Port interfaces (ABCs) for the catalog bounded context.

Ports define the contracts that the domain requires from the outside world.
Infrastructure adapters implement these interfaces.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

from products_api.domain.catalog.entities import (
    CatalogStats,
    Product,
    ProductDraft,
    ProductFilter,
)


class PersistenceError(Exception):
    """Raised by a persistence adapter when the durable backend fails."""


class ProductRepository(ABC):
    """Port for the authoritative product collection."""

    @abstractmethod
    def list_products(self, product_filter: Optional[ProductFilter] = None) -> list[Product]:
        """Return a snapshot of products matching the filter, in insertion order."""
        raise NotImplementedError

    @abstractmethod
    def find_by_id(self, product_id: str) -> Optional[Product]:
        """Return a product by its ID, or None if not found."""
        raise NotImplementedError

    @abstractmethod
    def create(self, draft: ProductDraft) -> Product:
        """Store a validated draft under a fresh ID and return the product."""
        raise NotImplementedError

    @abstractmethod
    def update(self, product_id: str, changes: dict[str, Any]) -> Optional[Product]:
        """Merge the supplied fields onto a product, or return None if absent."""
        raise NotImplementedError

    @abstractmethod
    def delete(self, product_id: str) -> bool:
        """Remove a product. Returns False if nothing matched."""
        raise NotImplementedError

    @abstractmethod
    def stats(self) -> CatalogStats:
        """Return aggregate counts over the whole collection."""
        raise NotImplementedError


class ProductPersistence(ABC):
    """Port for an optional durable mirror of the product collection.

    Adapters raise PersistenceError on backend failures.
    """

    @abstractmethod
    def ping(self) -> None:
        """Check that the backend is reachable and its schema exists."""
        raise NotImplementedError

    @abstractmethod
    def load_all(self) -> list[Product]:
        """Return every persisted product in insertion order."""
        raise NotImplementedError

    @abstractmethod
    def save(self, product: Product) -> None:
        """Insert or replace a product."""
        raise NotImplementedError

    @abstractmethod
    def remove(self, product_id: str) -> None:
        """Delete a product if present."""
        raise NotImplementedError
