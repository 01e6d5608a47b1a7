"""Application service: Add Product use case."""

from __future__ import annotations

import structlog

from autohub.application.dto import ProductSummaryDTO, product_summary
from autohub.application.errors import store_guard
from autohub.domain.exceptions import ValidationError
from autohub.domain.model.product import Product, ProductCondition
from autohub.domain.model.value_objects import Money
from autohub.domain.repository.product_repository import ProductRepository

logger = structlog.get_logger(__name__)


class AddProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        name: str,
        price: str,
        condition: str = "NEW",
        stock: int = 0,
        details: dict[str, str] | None = None,
        rating: float = 0,
    ) -> ProductSummaryDTO:
        """Add a new product to the catalog."""
        try:
            parsed_condition = ProductCondition(condition.strip().upper())
        except ValueError:
            raise ValidationError(
                f"Unknown product condition '{condition}' (expected USED or NEW)"
            ) from None

        with store_guard("add product"):
            if name and self._product_repo.get_by_name(name.strip()) is not None:
                raise ValidationError(f"Product '{name.strip()}' already exists")

            product = Product.create(
                product_id=self._product_repo.next_id(),
                name=name,
                price=Money.of(price),
                condition=parsed_condition,
                stock=stock,
                details=details,
                rating=rating,
            )
            self._product_repo.save(product)

        logger.info("product_added", product_id=product.id, stock=product.stock)
        return product_summary(product)  # type: ignore[return-value]
