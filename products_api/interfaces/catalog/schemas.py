"""
Pydantic schemas for catalog API responses.

Request bodies are decoded by the pipeline and checked by the domain
validator, so only response shapes are declared here. Wire names are
camelCase aliases of the snake_case attributes.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from products_api.domain.catalog.entities import CatalogStats, Page, Product


class ProductSchema(BaseModel):
    """A product as returned to clients."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    description: str
    price: float
    category: str
    in_stock: bool = Field(alias="inStock")

    @classmethod
    def from_entity(cls, product: Product) -> "ProductSchema":
        return cls(
            id=product.id,
            name=product.name,
            description=product.description,
            price=product.price,
            category=product.category,
            in_stock=product.in_stock,
        )


class PageMeta(BaseModel):
    """Pagination metadata."""

    model_config = ConfigDict(populate_by_name=True)

    total: int
    page: int
    limit: int
    total_pages: int = Field(alias="totalPages")


class ProductListResponse(BaseModel):
    """Response schema for the product listing endpoint."""

    success: bool = True
    meta: PageMeta
    data: list[ProductSchema]

    @classmethod
    def from_page(cls, page: Page) -> "ProductListResponse":
        return cls(
            meta=PageMeta(
                total=page.total,
                page=page.page,
                limit=page.limit,
                total_pages=page.total_pages,
            ),
            data=[ProductSchema.from_entity(p) for p in page.data],
        )


class ProductSearchResponse(BaseModel):
    """Response schema for the search endpoint."""

    success: bool = True
    query: str
    count: int
    data: list[ProductSchema]


class CatalogStatsResponse(BaseModel):
    """Response schema for the stats endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    total: int
    in_stock: int = Field(alias="inStock")
    by_category: dict[str, int] = Field(alias="byCategory")

    @classmethod
    def from_stats(cls, stats: CatalogStats) -> "CatalogStatsResponse":
        return cls(
            total=stats.total,
            in_stock=stats.in_stock,
            by_category=dict(stats.by_category),
        )


class ProductResponse(BaseModel):
    """Response schema wrapping a single product."""

    success: bool = True
    message: Optional[str] = None
    data: ProductSchema


class MessageResponse(BaseModel):
    """Response schema for operations that return no data."""

    success: bool = True
    message: str


class ErrorResponse(BaseModel):
    """Error contract produced by the error translator."""

    success: bool = False
    message: str
    errors: Optional[list[str]] = None
