"""
Dependency injection for the catalog bounded context.

Provides FastAPI dependency functions that wire the application's
product store into use cases via constructor injection.
"""

from fastapi import Depends

from products_api.application.catalog.create_product import CreateProductUseCase
from products_api.application.catalog.delete_product import DeleteProductUseCase
from products_api.application.catalog.get_catalog_stats import GetCatalogStatsUseCase
from products_api.application.catalog.get_product import GetProductUseCase
from products_api.application.catalog.list_products import ListProductsUseCase
from products_api.application.catalog.search_products import SearchProductsUseCase
from products_api.application.catalog.update_product import UpdateProductUseCase
from products_api.domain.catalog.ports import ProductRepository
from products_api.interfaces.pipeline import get_product_repository


def get_list_products_use_case(
    repository: ProductRepository = Depends(get_product_repository),
) -> ListProductsUseCase:
    return ListProductsUseCase(repository)


def get_search_products_use_case(
    repository: ProductRepository = Depends(get_product_repository),
) -> SearchProductsUseCase:
    return SearchProductsUseCase(repository)


def get_catalog_stats_use_case(
    repository: ProductRepository = Depends(get_product_repository),
) -> GetCatalogStatsUseCase:
    return GetCatalogStatsUseCase(repository)


def get_product_use_case(
    repository: ProductRepository = Depends(get_product_repository),
) -> GetProductUseCase:
    return GetProductUseCase(repository)


def get_create_product_use_case(
    repository: ProductRepository = Depends(get_product_repository),
) -> CreateProductUseCase:
    return CreateProductUseCase(repository)


def get_update_product_use_case(
    repository: ProductRepository = Depends(get_product_repository),
) -> UpdateProductUseCase:
    return UpdateProductUseCase(repository)


def get_delete_product_use_case(
    repository: ProductRepository = Depends(get_product_repository),
) -> DeleteProductUseCase:
    return DeleteProductUseCase(repository)
