"""
Use case: List products with filtering, search and pagination.

Input: ListProductsQuery (category, search, page, limit)
Output: Page
Side effects: None (read-only query).
Failure cases: None. Out-of-range pages yield empty data.
"""

import logging

from products_api.application.catalog.dtos import ListProductsQuery
from products_api.domain.catalog.entities import Page, ProductFilter
from products_api.domain.catalog.ports import ProductRepository
from products_api.domain.catalog.query import paginate

logger = logging.getLogger(__name__)


class ListProductsUseCase:
    """Filters the catalog, then slices the requested page."""

    def __init__(self, repository: ProductRepository) -> None:
        self._repository = repository

    def execute(self, query: ListProductsQuery) -> Page:
        logger.debug(
            "Listing products: category=%s, search=%s, page=%d, limit=%d",
            query.category,
            query.search,
            query.page,
            query.limit,
        )
        items = self._repository.list_products(
            ProductFilter(category=query.category, search=query.search)
        )
        return paginate(items, query.page, query.limit)
