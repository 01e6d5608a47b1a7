"""Application service: Show Inventory use case (query)."""

from __future__ import annotations

from autohub.application.dto import ProductSummaryDTO, product_summary
from autohub.application.errors import store_guard
from autohub.domain.repository.product_repository import ProductRepository


class ShowInventoryHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self) -> list[ProductSummaryDTO]:
        with store_guard("list products"):
            products = self._product_repo.list_all()
        return [product_summary(p) for p in products]  # type: ignore[misc]
