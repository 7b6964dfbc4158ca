"""
Use case: Fetch a single product.

Input: product ID
Output: Product
Side effects: None.
Failure cases: NotFoundError.
"""

from products_api.domain.catalog.entities import Product
from products_api.domain.catalog.ports import ProductRepository
from products_api.domain.errors import NotFoundError


def product_not_found(product_id: str) -> NotFoundError:
    return NotFoundError(f"Product with ID {product_id} not found")


class GetProductUseCase:
    """Looks a product up by ID."""

    def __init__(self, repository: ProductRepository) -> None:
        self._repository = repository

    def execute(self, product_id: str) -> Product:
        product = self._repository.find_by_id(product_id)
        if product is None:
            raise product_not_found(product_id)
        return product
