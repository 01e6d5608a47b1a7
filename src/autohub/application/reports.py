"""Application service: dashboard roll-ups (read-only).

Mechanical grouping and summing over the product and cart stores.
"""

from __future__ import annotations

from collections import Counter

from autohub.application.dto import TopSellingProductDTO, product_summary
from autohub.application.errors import store_guard
from autohub.domain.exceptions import EntityNotFoundError
from autohub.domain.model.cart import ORDER_STATUS_SEQUENCE
from autohub.domain.repository.cart_repository import CartRepository
from autohub.domain.repository.product_repository import ProductRepository


class CountTotalQuantityHandler:

    def __init__(self, cart_repo: CartRepository) -> None:
        self._cart_repo = cart_repo

    def handle(self) -> int:
        """Total units held across every cart line (0 when there are none)."""
        with store_guard("count cart quantity"):
            return sum(line.quantity.value for line in self._cart_repo.list_lines())


class TotalStockHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self) -> int:
        with store_guard("sum stock"):
            return sum(p.stock for p in self._product_repo.list_all())


class TopSellingProductHandler:

    def __init__(
        self,
        cart_repo: CartRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._cart_repo = cart_repo
        self._product_repo = product_repo

    def handle(self) -> TopSellingProductDTO:
        """The product referenced by the most cart lines.

        Counts lines, not units. Ties go to the product whose first line is
        oldest; products that have since been deleted are skipped.
        """
        with store_guard("find top selling product"):
            lines = self._cart_repo.list_lines()
            products = {p.id: p for p in self._product_repo.list_all()}

        # Counter preserves first-seen order, and most_common() is stable
        counts = Counter(line.product_id for line in lines)
        for product_id, count in counts.most_common():
            product = products.get(product_id)
            if product is not None:
                return TopSellingProductDTO(
                    product_id=product_id,
                    count=count,
                    product=product_summary(product),
                )

        raise EntityNotFoundError("No top selling product found")


class OrderStatusSummaryHandler:

    def __init__(self, cart_repo: CartRepository) -> None:
        self._cart_repo = cart_repo

    def handle(self) -> dict[str, int]:
        """Number of cart lines in each fulfillment stage."""
        with store_guard("summarize order statuses"):
            lines = self._cart_repo.list_lines()

        counts = Counter(line.order_status for line in lines if line.order_status)
        return {status.value: counts.get(status, 0) for status in ORDER_STATUS_SEQUENCE}
