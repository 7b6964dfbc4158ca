"""
Use case: Partially update a product.

Input: UpdateProductCommand (product ID, raw payload)
Output: The updated Product
Side effects: Replaces the stored record in place.
Failure cases: ValidationError (checked first), NotFoundError.
"""

from products_api.application.catalog.dtos import UpdateProductCommand
from products_api.application.catalog.get_product import product_not_found
from products_api.domain.catalog.entities import Product
from products_api.domain.catalog.ports import ProductRepository
from products_api.domain.catalog.validation import validate_update


class UpdateProductUseCase:
    """Validates the supplied fields and merges them onto the product."""

    def __init__(self, repository: ProductRepository) -> None:
        self._repository = repository

    def execute(self, command: UpdateProductCommand) -> Product:
        changes = validate_update(command.payload)
        product = self._repository.update(command.product_id, changes)
        if product is None:
            raise product_not_found(command.product_id)
        return product
