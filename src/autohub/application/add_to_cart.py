"""Application service: Add To Cart use case.

Validates the request, then lets the domain service reserve the stock
and create the cart line as one compensated unit.
"""

from __future__ import annotations

from autohub.application.dto import ReservationDTO
from autohub.application.errors import store_guard
from autohub.domain.model.value_objects import Identity, Quantity
from autohub.domain.repository.cart_repository import CartRepository
from autohub.domain.repository.product_repository import ProductRepository
from autohub.domain.service.stock_reservation_service import (
    StockReservationService,
)


class AddToCartHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        cart_repo: CartRepository,
    ) -> None:
        self._product_repo = product_repo
        self._cart_repo = cart_repo

    def handle(self, identity: Identity, product_id: str, quantity: int) -> ReservationDTO:
        qty = Quantity(quantity)

        svc = StockReservationService(self._product_repo, self._cart_repo)
        with store_guard("add to cart"):
            line, stock = svc.reserve(identity, product_id, qty)

        return ReservationDTO(
            cart_line_id=line.id,
            product_id=product_id,
            quantity=qty.value,
            updated_stock=stock,
        )
