"""Application service: Advance Order Status use case.

The Cart line validates the transition; the repository applies it only
if nobody else changed the status since it was read.
"""

from __future__ import annotations

import structlog

from autohub.application.dto import CartLineDTO, cart_line_dto
from autohub.application.errors import store_guard
from autohub.domain.exceptions import EntityNotFoundError, InvalidTransitionError
from autohub.domain.model.cart import OrderStatus
from autohub.domain.repository.cart_repository import CartRepository
from autohub.domain.repository.product_repository import ProductRepository

logger = structlog.get_logger(__name__)


class AdvanceOrderStatusHandler:

    def __init__(
        self,
        cart_repo: CartRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._cart_repo = cart_repo
        self._product_repo = product_repo

    def handle(self, cart_line_id: str, new_status: str, force: bool = False) -> CartLineDTO:
        """Move a cart line to ``new_status``.

        Args:
            cart_line_id: The line to update.
            new_status: PROCESSING, SHIPPED or DELIVERED (case-insensitive).
            force: Skip the forward-only check (operator correction).
        """
        status = OrderStatus.parse(new_status)

        with store_guard("update order status"):
            line = self._cart_repo.get_line(cart_line_id)
            if line is None:
                raise EntityNotFoundError(f"Cart line '{cart_line_id}' not found")

            previous = line.order_status
            if line.advance_order_status(status, force=force):
                updated = self._cart_repo.update_order_status(
                    cart_line_id, previous, status
                )
                if updated is None:
                    if self._cart_repo.get_line(cart_line_id) is None:
                        raise EntityNotFoundError(f"Cart line '{cart_line_id}' not found")
                    raise InvalidTransitionError(
                        f"Order status of cart line {cart_line_id} was changed "
                        f"concurrently; reload and try again"
                    )
                line = updated
                logger.info(
                    "order_status_advanced",
                    cart_line_id=cart_line_id,
                    previous=previous.value if previous else None,
                    status=status.value,
                    forced=force,
                )

            product = self._product_repo.get_by_id(line.product_id)

        return cart_line_dto(line, product)
