"""
Data Transfer Objects for the catalog application layer.

DTOs carry data between the interface and application layers.
They are plain dataclasses with no behavior.
"""

from dataclasses import dataclass, field
from typing import Any, Optional

from products_api.domain.catalog.entities import Product
from products_api.domain.catalog.query import DEFAULT_LIMIT, DEFAULT_PAGE


@dataclass(frozen=True)
class ListProductsQuery:
    """Input DTO for listing products.

    Attributes:
        category: Optional case-insensitive category filter.
        search: Optional case-insensitive name/description substring.
        page: 1-based page number (already coerced to >= 1).
        limit: Page size (already coerced to >= 1).
    """

    category: Optional[str] = None
    search: Optional[str] = None
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT


@dataclass(frozen=True)
class SearchProductsQuery:
    """Input DTO for the dedicated search operation."""

    q: Optional[str] = None


@dataclass(frozen=True)
class SearchProductsResult:
    """Output DTO for a search.

    Attributes:
        query: The normalized (trimmed, lower-cased) term.
        products: Matching products in insertion order.
    """

    query: str
    products: list[Product]

    @property
    def count(self) -> int:
        return len(self.products)


@dataclass(frozen=True)
class CreateProductCommand:
    """Input DTO carrying an unvalidated creation payload."""

    payload: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class UpdateProductCommand:
    """Input DTO carrying an unvalidated partial update payload."""

    product_id: str
    payload: dict[str, Any] = field(default_factory=dict)
