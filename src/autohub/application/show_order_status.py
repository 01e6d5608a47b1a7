"""Application service: order status queries (read-only)."""

from __future__ import annotations

from autohub.application.dto import CartLineDTO, OrderStatusDTO, cart_line_dto
from autohub.application.errors import store_guard
from autohub.domain.exceptions import EntityNotFoundError
from autohub.domain.model.cart import OrderStatus
from autohub.domain.repository.cart_repository import CartRepository
from autohub.domain.repository.product_repository import ProductRepository


class ShowOrderStatusHandler:

    def __init__(
        self,
        cart_repo: CartRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._cart_repo = cart_repo
        self._product_repo = product_repo

    def handle(self, cart_line_id: str) -> OrderStatusDTO:
        with store_guard("load order status"):
            line = self._cart_repo.get_line(cart_line_id)
            if line is None:
                raise EntityNotFoundError(f"Cart line '{cart_line_id}' not found")
            product = self._product_repo.get_by_id(line.product_id)

        dto = cart_line_dto(line, product)
        return OrderStatusDTO(order_status=dto.order_status, line=dto)


class ListLinesByStatusHandler:

    def __init__(
        self,
        cart_repo: CartRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._cart_repo = cart_repo
        self._product_repo = product_repo

    def handle(self, status: str) -> list[CartLineDTO]:
        """Lines currently in ``status``.

        An empty result is reported as EntityNotFoundError, matching how
        the dashboard treats "nothing in this stage".
        """
        order_status = OrderStatus.parse(status)

        with store_guard("list lines by status"):
            lines = self._cart_repo.list_lines_by_order_status(order_status)
            if not lines:
                raise EntityNotFoundError(
                    f"No cart lines found for order status: {order_status.value}"
                )
            products = {p.id: p for p in self._product_repo.list_all()}

        return [cart_line_dto(line, products.get(line.product_id)) for line in lines]
