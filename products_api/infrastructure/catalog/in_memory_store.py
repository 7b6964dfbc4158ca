"""
Adapter: In-memory product store.

Implements the ProductRepository port.
Owns the authoritative, insertion-ordered product sequence. Every
operation holds the store lock, so no caller observes a half-applied
mutation. An optional ProductPersistence mirrors mutations on a
best-effort basis.
"""

import logging
import threading
import uuid
from dataclasses import replace
from typing import Any, Optional

from products_api.domain.catalog.entities import (
    CatalogStats,
    Product,
    ProductDraft,
    ProductFilter,
)
from products_api.domain.catalog.ports import (
    PersistenceError,
    ProductPersistence,
    ProductRepository,
)
from products_api.domain.catalog.query import aggregate, apply_filter

logger = logging.getLogger(__name__)

_MUTABLE_FIELDS = ("name", "description", "price", "category", "in_stock")


class InMemoryProductStore(ProductRepository):
    """Process-local product store with an optional durable mirror."""

    def __init__(self, persistence: Optional[ProductPersistence] = None) -> None:
        self._products: list[Product] = []
        self._issued_ids: set[str] = set()
        self._lock = threading.RLock()
        self._persistence = persistence

    @property
    def persistence(self) -> Optional[ProductPersistence]:
        return self._persistence

    def detach_persistence(self) -> None:
        """Stop mirroring mutations. Used when the backend is unreachable."""
        with self._lock:
            self._persistence = None

    def hydrate(self, products: list[Product]) -> int:
        """Append previously persisted products, skipping known IDs.

        Returns:
            Number of products loaded.
        """
        loaded = 0
        with self._lock:
            for product in products:
                if product.id in self._issued_ids:
                    continue
                self._issued_ids.add(product.id)
                self._products.append(product)
                loaded += 1
        logger.info("Hydrated %d products from persistence.", loaded)
        return loaded

    def list_products(self, product_filter: Optional[ProductFilter] = None) -> list[Product]:
        with self._lock:
            return apply_filter(self._products, product_filter)

    def find_by_id(self, product_id: str) -> Optional[Product]:
        with self._lock:
            index = self._index_of(product_id)
            return None if index is None else self._products[index]

    def create(self, draft: ProductDraft) -> Product:
        with self._lock:
            product = Product.from_draft(self._new_id(), draft)
            self._products.append(product)
            self._mirror_save(product)
        logger.info("Product created: id=%s", product.id)
        return product

    def update(self, product_id: str, changes: dict[str, Any]) -> Optional[Product]:
        fields = {k: v for k, v in changes.items() if k in _MUTABLE_FIELDS}
        with self._lock:
            index = self._index_of(product_id)
            if index is None:
                return None
            product = replace(self._products[index], **fields)
            self._products[index] = product
            self._mirror_save(product)
        logger.info("Product updated: id=%s fields=%s", product_id, sorted(fields))
        return product

    def delete(self, product_id: str) -> bool:
        with self._lock:
            index = self._index_of(product_id)
            if index is None:
                return False
            del self._products[index]
            self._mirror_remove(product_id)
        logger.info("Product deleted: id=%s", product_id)
        return True

    def stats(self) -> CatalogStats:
        with self._lock:
            return aggregate(self._products)

    def _new_id(self) -> str:
        # IDs are never reused, even after deletion.
        product_id = str(uuid.uuid4())
        while product_id in self._issued_ids:
            product_id = str(uuid.uuid4())
        self._issued_ids.add(product_id)
        return product_id

    def _index_of(self, product_id: str) -> Optional[int]:
        for index, product in enumerate(self._products):
            if product.id == product_id:
                return index
        return None

    def _mirror_save(self, product: Product) -> None:
        if self._persistence is None:
            return
        try:
            self._persistence.save(product)
        except PersistenceError:
            logger.warning("Could not persist product id=%s", product.id, exc_info=True)

    def _mirror_remove(self, product_id: str) -> None:
        if self._persistence is None:
            return
        try:
            self._persistence.remove(product_id)
        except PersistenceError:
            logger.warning("Could not remove persisted product id=%s", product_id, exc_info=True)
