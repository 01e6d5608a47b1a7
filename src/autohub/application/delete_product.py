"""Application service: Delete Product use case.

A product referenced by any cart line or appointment cannot be deleted;
otherwise those records would point at nothing and stock taken by them
could never be restored.
"""

from __future__ import annotations

import structlog

from autohub.application.errors import store_guard
from autohub.domain.exceptions import EntityNotFoundError, ProductInUseError
from autohub.domain.repository.cart_repository import CartRepository
from autohub.domain.repository.product_repository import ProductRepository

logger = structlog.get_logger(__name__)


class DeleteProductHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        cart_repo: CartRepository,
    ) -> None:
        self._product_repo = product_repo
        self._cart_repo = cart_repo

    def handle(self, product_id: str) -> None:
        with store_guard("delete product"):
            product = self._product_repo.get_by_id(product_id)
            if product is None:
                raise EntityNotFoundError(f"Product with ID '{product_id}' not found")

            references = self._cart_repo.count_references(product_id)
            if references:
                raise ProductInUseError(
                    f"Cannot delete {product.name}: referenced by "
                    f"{references} cart record(s)"
                )

            if not self._product_repo.delete(product_id):
                raise EntityNotFoundError(f"Product with ID '{product_id}' not found")

        logger.info("product_deleted", product_id=product_id)
