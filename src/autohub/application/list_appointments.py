"""Application service: List Appointments use case (query)."""

from __future__ import annotations

from autohub.application.dto import AppointmentDTO, appointment_dto
from autohub.application.errors import store_guard
from autohub.domain.repository.cart_repository import CartRepository
from autohub.domain.repository.product_repository import ProductRepository


class ListAppointmentsHandler:

    def __init__(
        self,
        cart_repo: CartRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._cart_repo = cart_repo
        self._product_repo = product_repo

    def handle(self) -> list[AppointmentDTO]:
        with store_guard("list appointments"):
            appointments = self._cart_repo.list_appointments()
            products = {p.id: p for p in self._product_repo.list_all()}

        return [appointment_dto(a, products.get(a.product_id)) for a in appointments]
