"""
Use case: Search products by name or description.

Input: SearchProductsQuery (q)
Output: SearchProductsResult
Side effects: None (read-only query).
Failure cases: ValidationError when the term is missing or blank.
"""

from products_api.application.catalog.dtos import (
    SearchProductsQuery,
    SearchProductsResult,
)
from products_api.domain.catalog.entities import ProductFilter
from products_api.domain.catalog.ports import ProductRepository
from products_api.domain.catalog.query import normalize_term
from products_api.domain.errors import ValidationError

MISSING_TERM_MESSAGE = 'Query param "q" is required for search'


class SearchProductsUseCase:
    """Runs a case-insensitive substring search over the catalog."""

    def __init__(self, repository: ProductRepository) -> None:
        self._repository = repository

    def execute(self, query: SearchProductsQuery) -> SearchProductsResult:
        """Run the search.

        Raises:
            ValidationError: If ``q`` is missing or only whitespace.
        """
        term = normalize_term(query.q)
        if not term:
            raise ValidationError([MISSING_TERM_MESSAGE], message=MISSING_TERM_MESSAGE)
        products = self._repository.list_products(ProductFilter(search=term))
        return SearchProductsResult(query=term, products=products)
