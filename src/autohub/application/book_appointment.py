"""Application service: Book Appointment use case.

Appointments live in the cart store but never reserve stock.
"""

from __future__ import annotations

from autohub.application.dto import AppointmentDTO, appointment_dto
from autohub.application.errors import store_guard
from autohub.domain.exceptions import EntityNotFoundError
from autohub.domain.model.cart import Appointment
from autohub.domain.model.value_objects import Identity
from autohub.domain.repository.cart_repository import CartRepository
from autohub.domain.repository.product_repository import ProductRepository


class BookAppointmentHandler:

    def __init__(
        self,
        cart_repo: CartRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._cart_repo = cart_repo
        self._product_repo = product_repo

    def handle(
        self,
        identity: Identity,
        product_id: str,
        date: str,
        location: str,
        phone_number: str,
    ) -> AppointmentDTO:
        with store_guard("book appointment"):
            product = self._product_repo.get_by_id(product_id)
            if product is None:
                raise EntityNotFoundError(f"Product with ID '{product_id}' not found")

            appointment = Appointment.create(
                appointment_id=self._cart_repo.next_id(),
                identity=identity,
                product_id=product_id,
                date=date,
                location=location,
                phone_number=phone_number,
            )
            self._cart_repo.add_appointment(appointment)

        return appointment_dto(appointment, product)
