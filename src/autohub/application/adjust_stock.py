"""Application service: Adjust Stock use case (administrative correction)."""

from __future__ import annotations

from autohub.application.errors import store_guard
from autohub.domain.exceptions import ValidationError
from autohub.domain.repository.cart_repository import CartRepository
from autohub.domain.repository.product_repository import ProductRepository
from autohub.domain.service.stock_reservation_service import (
    StockReservationService,
)


class AdjustStockHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        cart_repo: CartRepository,
    ) -> None:
        self._product_repo = product_repo
        self._cart_repo = cart_repo

    def handle(self, product_id: str, delta: int) -> int:
        """Add ``delta`` (possibly negative) to a product's stock.

        Returns the stock after the adjustment.
        """
        if not isinstance(delta, int) or isinstance(delta, bool):
            raise ValidationError(
                f"Stock delta must be an integer, got {type(delta).__name__}"
            )

        svc = StockReservationService(self._product_repo, self._cart_repo)
        with store_guard("adjust stock"):
            return svc.adjust(product_id, delta)
