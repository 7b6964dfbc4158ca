"""
Domain service: product query engine.

Filtering, searching, pagination and aggregation over a sequence of
products. Every function is pure and preserves the input order.
"""

import math
import re
import sys
from collections.abc import Iterable, Sequence
from typing import Optional

from products_api.domain.catalog.entities import (
    UNCATEGORIZED,
    CatalogStats,
    Page,
    Product,
    ProductFilter,
)

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10

_LEADING_INT = re.compile(r"^\s*([+-]?)0*(\d+)")

# Longer digit runs saturate instead of being converted.
MAX_PARAM_DIGITS = 18


def parse_int_param(raw: Optional[str], default: int) -> int:
    """Read a pagination query parameter.

    Uses the leading integer of the value ("2abc" -> 2, "1.5" -> 1).
    Missing, non-numeric and zero values fall back to ``default``;
    the result is never below 1. Values too long to be meaningful
    saturate at ``sys.maxsize``.
    """
    match = _LEADING_INT.match(raw) if raw is not None else None
    if not match:
        return max(1, default)
    sign, digits = match.groups()
    if len(digits) > MAX_PARAM_DIGITS:
        value = -1 if sign == "-" else sys.maxsize
    else:
        value = int(sign + digits)
    return max(1, value or default)


def normalize_term(raw: Optional[str]) -> str:
    """Trim and lower-case a search term. None becomes an empty string."""
    return (raw or "").strip().lower()


def matches_search(product: Product, term: str) -> bool:
    """Return True if ``term`` (already lower-cased) occurs in name or description."""
    return term in (product.name or "").lower() or term in (
        product.description or ""
    ).lower()


def matches_filter(product: Product, product_filter: ProductFilter) -> bool:
    """Return True if the product satisfies every criterion set on the filter."""
    if product_filter.category:
        if (product.category or "").lower() != product_filter.category.lower():
            return False
    term = normalize_term(product_filter.search)
    if term and not matches_search(product, term):
        return False
    return True


def apply_filter(
    products: Iterable[Product], product_filter: Optional[ProductFilter]
) -> list[Product]:
    """Return the products matching the filter, in their original order."""
    if product_filter is None:
        return list(products)
    return [p for p in products if matches_filter(p, product_filter)]


def paginate(
    items: Sequence[Product],
    page: int = DEFAULT_PAGE,
    limit: int = DEFAULT_LIMIT,
) -> Page:
    """Slice one page out of ``items``.

    Page and limit are floored to 1. A page past the end yields empty data.

    Args:
        items: The already filtered sequence.
        page: 1-based page number.
        limit: Page size.

    Returns:
        The page with total count and page count (at least 1).
    """
    page = max(1, page)
    limit = max(1, limit)
    total = len(items)
    start = (page - 1) * limit
    return Page(
        data=list(items[start:start + limit]),
        total=total,
        page=page,
        limit=limit,
        total_pages=max(1, math.ceil(total / limit)),
    )


def aggregate(products: Iterable[Product]) -> CatalogStats:
    """Count products overall, in stock, and per literal category name."""
    total = 0
    in_stock = 0
    by_category: dict[str, int] = {}
    for product in products:
        total += 1
        if product.in_stock:
            in_stock += 1
        category = product.category or UNCATEGORIZED
        by_category[category] = by_category.get(category, 0) + 1
    return CatalogStats(total=total, in_stock=in_stock, by_category=by_category)
