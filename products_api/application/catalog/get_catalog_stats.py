"""
Use case: Aggregate catalog statistics.

Input: None
Output: CatalogStats (total, in stock, per-category counts)
Side effects: None (read-only query).
"""

from products_api.domain.catalog.entities import CatalogStats
from products_api.domain.catalog.ports import ProductRepository


class GetCatalogStatsUseCase:
    def __init__(self, repository: ProductRepository) -> None:
        self._repository = repository

    def execute(self) -> CatalogStats:
        return self._repository.stats()
