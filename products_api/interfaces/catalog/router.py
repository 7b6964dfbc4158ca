"""
FastAPI router for the catalog bounded context.

Every route runs behind the API pipeline (body decode, then
authentication). Deleting additionally requires a production key.
All routes delegate to use cases; the error translator maps failures.
"""

from typing import Any, Optional

from fastapi import APIRouter, Depends

from products_api.application.catalog.create_product import CreateProductUseCase
from products_api.application.catalog.delete_product import DeleteProductUseCase
from products_api.application.catalog.dtos import (
    CreateProductCommand,
    ListProductsQuery,
    SearchProductsQuery,
    UpdateProductCommand,
)
from products_api.application.catalog.get_catalog_stats import GetCatalogStatsUseCase
from products_api.application.catalog.get_product import GetProductUseCase
from products_api.application.catalog.list_products import ListProductsUseCase
from products_api.application.catalog.search_products import SearchProductsUseCase
from products_api.application.catalog.update_product import UpdateProductUseCase
from products_api.domain.catalog.query import (
    DEFAULT_LIMIT,
    DEFAULT_PAGE,
    parse_int_param,
)
from products_api.interfaces.catalog.dependencies import (
    get_catalog_stats_use_case,
    get_create_product_use_case,
    get_delete_product_use_case,
    get_list_products_use_case,
    get_product_use_case,
    get_search_products_use_case,
    get_update_product_use_case,
)
from products_api.interfaces.catalog.schemas import (
    CatalogStatsResponse,
    ErrorResponse,
    MessageResponse,
    ProductListResponse,
    ProductResponse,
    ProductSchema,
    ProductSearchResponse,
)
from products_api.interfaces.pipeline import (
    API_PIPELINE,
    decode_json_body,
    require_production_key,
)

AUTH_ERRORS: dict[int | str, dict[str, Any]] = {
    400: {"model": ErrorResponse},
    401: {"model": ErrorResponse},
}

router = APIRouter(
    prefix="/api/products",
    tags=["products"],
    dependencies=API_PIPELINE,
    responses=AUTH_ERRORS,
)


@router.get(
    "",
    response_model=ProductListResponse,
    summary="List products",
    description="Filter by category, search name/description, and paginate.",
)
def list_products(
    category: Optional[str] = None,
    search: Optional[str] = None,
    q: Optional[str] = None,
    page: Optional[str] = None,
    limit: Optional[str] = None,
    use_case: ListProductsUseCase = Depends(get_list_products_use_case),
) -> ProductListResponse:
    """List products (``q`` is accepted as an alias of ``search``)."""
    query = ListProductsQuery(
        category=category or None,
        search=search or q,
        page=parse_int_param(page, DEFAULT_PAGE),
        limit=parse_int_param(limit, DEFAULT_LIMIT),
    )
    return ProductListResponse.from_page(use_case.execute(query))


@router.get(
    "/search",
    response_model=ProductSearchResponse,
    summary="Search products",
)
def search_products(
    q: Optional[str] = None,
    use_case: SearchProductsUseCase = Depends(get_search_products_use_case),
) -> ProductSearchResponse:
    """Case-insensitive substring search over name and description."""
    result = use_case.execute(SearchProductsQuery(q=q))
    return ProductSearchResponse(
        query=result.query,
        count=result.count,
        data=[ProductSchema.from_entity(p) for p in result.products],
    )


@router.get(
    "/stats",
    response_model=CatalogStatsResponse,
    summary="Catalog statistics",
)
def catalog_stats(
    use_case: GetCatalogStatsUseCase = Depends(get_catalog_stats_use_case),
) -> CatalogStatsResponse:
    return CatalogStatsResponse.from_stats(use_case.execute())


@router.get(
    "/{product_id}",
    response_model=ProductResponse,
    response_model_exclude_none=True,
    responses={404: {"model": ErrorResponse}},
    summary="Get a product",
)
def get_product(
    product_id: str,
    use_case: GetProductUseCase = Depends(get_product_use_case),
) -> ProductResponse:
    return ProductResponse(data=ProductSchema.from_entity(use_case.execute(product_id)))


@router.post(
    "",
    status_code=201,
    response_model=ProductResponse,
    summary="Create a product",
)
def create_product(
    payload: dict[str, Any] = Depends(decode_json_body),
    use_case: CreateProductUseCase = Depends(get_create_product_use_case),
) -> ProductResponse:
    product = use_case.execute(CreateProductCommand(payload=payload))
    return ProductResponse(
        message="Product created successfully",
        data=ProductSchema.from_entity(product),
    )


@router.put(
    "/{product_id}",
    response_model=ProductResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Update a product",
)
def update_product(
    product_id: str,
    payload: dict[str, Any] = Depends(decode_json_body),
    use_case: UpdateProductUseCase = Depends(get_update_product_use_case),
) -> ProductResponse:
    """Apply a partial update. Only supplied fields change."""
    product = use_case.execute(UpdateProductCommand(product_id=product_id, payload=payload))
    return ProductResponse(
        message="Product updated successfully",
        data=ProductSchema.from_entity(product),
    )


@router.delete(
    "/{product_id}",
    response_model=MessageResponse,
    responses={403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    dependencies=[Depends(require_production_key)],
    summary="Delete a product",
    description="Requires a production API key.",
)
def delete_product(
    product_id: str,
    use_case: DeleteProductUseCase = Depends(get_delete_product_use_case),
) -> MessageResponse:
    use_case.execute(product_id)
    return MessageResponse(message="Product deleted successfully")
