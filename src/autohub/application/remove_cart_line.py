"""Application service: Remove Cart Line use case.

Deletes the line and restores its quantity to the product's stock.
"""

from __future__ import annotations

from autohub.application.dto import RemovalDTO
from autohub.application.errors import store_guard
from autohub.domain.repository.cart_repository import CartRepository
from autohub.domain.repository.product_repository import ProductRepository
from autohub.domain.service.stock_reservation_service import (
    StockReservationService,
)


class RemoveCartLineHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        cart_repo: CartRepository,
    ) -> None:
        self._product_repo = product_repo
        self._cart_repo = cart_repo

    def handle(self, cart_line_id: str) -> RemovalDTO:
        svc = StockReservationService(self._product_repo, self._cart_repo)
        with store_guard("remove cart line"):
            line, stock = svc.release(cart_line_id)

        return RemovalDTO(
            cart_line_id=line.id,
            product_id=line.product_id,
            quantity_restored=line.quantity.value,
            updated_stock=stock,
        )
