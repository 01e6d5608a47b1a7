"""Application service: cart queries (read-only)."""

from __future__ import annotations

from autohub.application.dto import CartLineDTO, cart_line_dto
from autohub.application.errors import store_guard
from autohub.domain.model.cart import PaymentStatus
from autohub.domain.model.value_objects import Identity
from autohub.domain.repository.cart_repository import CartRepository
from autohub.domain.repository.product_repository import ProductRepository

_ACTIVE_PAYMENT_STATUSES = (PaymentStatus.PENDING, PaymentStatus.PAID)


class ShowUserCartHandler:

    def __init__(
        self,
        cart_repo: CartRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._cart_repo = cart_repo
        self._product_repo = product_repo

    def handle(self, identity: Identity) -> list[CartLineDTO]:
        """The caller's pending and paid lines, joined with their products."""
        with store_guard("load cart"):
            lines = self._cart_repo.list_lines_for_user(identity.user_id)
            products = {p.id: p for p in self._product_repo.list_all()}

        return [
            cart_line_dto(line, products.get(line.product_id))
            for line in lines
            if line.payment_status in _ACTIVE_PAYMENT_STATUSES
        ]


class ListCartLinesHandler:
    """Admin view: every cart line of every user."""

    def __init__(
        self,
        cart_repo: CartRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._cart_repo = cart_repo
        self._product_repo = product_repo

    def handle(self) -> list[CartLineDTO]:
        with store_guard("list cart lines"):
            lines = self._cart_repo.list_lines()
            products = {p.id: p for p in self._product_repo.list_all()}

        return [cart_line_dto(line, products.get(line.product_id)) for line in lines]
