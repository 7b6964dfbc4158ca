"""
Use case: Delete a product.

Input: product ID
Output: None
Side effects: Hard-removes the record from the store.
Failure cases: NotFoundError (including a repeated delete).
"""

from products_api.application.catalog.get_product import product_not_found
from products_api.domain.catalog.ports import ProductRepository


class DeleteProductUseCase:
    def __init__(self, repository: ProductRepository) -> None:
        self._repository = repository

    def execute(self, product_id: str) -> None:
        if not self._repository.delete(product_id):
            raise product_not_found(product_id)
