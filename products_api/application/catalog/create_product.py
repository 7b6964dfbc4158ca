"""
Use case: Create a product.

Input: CreateProductCommand (raw payload)
Output: Product with a server-assigned ID
Side effects: Appends to the product store.
Failure cases: ValidationError (nothing is stored).
"""

import logging

from products_api.application.catalog.dtos import CreateProductCommand
from products_api.domain.catalog.entities import Product
from products_api.domain.catalog.ports import ProductRepository
from products_api.domain.catalog.validation import validate_create

logger = logging.getLogger(__name__)


class CreateProductUseCase:
    """Validates a creation payload and stores the sanitized product."""

    def __init__(self, repository: ProductRepository) -> None:
        self._repository = repository

    def execute(self, command: CreateProductCommand) -> Product:
        """Run the create use case.

        Raises:
            ValidationError: With every violated rule, before any mutation.
        """
        draft = validate_create(command.payload)
        product = self._repository.create(draft)
        logger.info("New product created: %s (ID: %s)", product.name, product.id)
        return product
