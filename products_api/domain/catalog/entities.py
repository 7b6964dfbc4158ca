"""
Domain entities for the catalog bounded context.

Entities are frozen dataclasses so stored records can be handed out
without exposing the store's internal state.
They contain no framework imports and no IO operations.
"""

from dataclasses import dataclass, field
from typing import Optional

UNCATEGORIZED = "Uncategorized"


@dataclass(frozen=True)
class ProductDraft:
    """A validated, sanitized product that has not been stored yet."""

    name: str
    description: str
    price: float
    category: str
    in_stock: bool


@dataclass(frozen=True)
class Product:
    """A sellable item held by the product store."""

    id: str
    name: str
    description: str
    price: float
    category: str
    in_stock: bool

    @classmethod
    def from_draft(cls, product_id: str, draft: ProductDraft) -> "Product":
        return cls(
            id=product_id,
            name=draft.name,
            description=draft.description,
            price=draft.price,
            category=draft.category,
            in_stock=draft.in_stock,
        )


@dataclass(frozen=True)
class ProductFilter:
    """Criteria for listing products.

    Attributes:
        category: Exact, case-insensitive category match.
        search: Case-insensitive substring matched against name or description.
    """

    category: Optional[str] = None
    search: Optional[str] = None


@dataclass(frozen=True)
class Page:
    """One page of a product listing."""

    data: list[Product]
    total: int
    page: int
    limit: int
    total_pages: int


@dataclass(frozen=True)
class CatalogStats:
    """Aggregate counts over the whole catalog."""

    total: int
    in_stock: int
    by_category: dict[str, int] = field(default_factory=dict)
