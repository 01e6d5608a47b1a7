"""Integration tests for appointment booking."""

import pytest

from autohub.application.book_appointment import BookAppointmentHandler
from autohub.application.list_appointments import ListAppointmentsHandler
from autohub.application.reports import CountTotalQuantityHandler
from autohub.application.show_cart import ListCartLinesHandler
from autohub.domain.exceptions import EntityNotFoundError, ValidationError
from autohub.domain.model.product import Product
from autohub.domain.model.value_objects import Identity, Money
from tests.fakes import FakeCartRepository, FakeProductRepository

ALICE = Identity(user_id="u1", email="alice@example.com")


def _setup():
    products = FakeProductRepository(
        [Product(id="1", name="Corolla", price=Money.of("18000"), stock=4)]
    )
    return products, FakeCartRepository()


class TestBookAppointment:

    def test_books_without_touching_stock(self):
        products, carts = _setup()

        dto = BookAppointmentHandler(carts, products).handle(
            ALICE, "1", "2026-11-02", "Kigali showroom", "0788000000"
        )

        assert dto.product.name == "Corolla"
        assert dto.user_email == "alice@example.com"
        assert products.stock_of("1") == 4

    def test_appointments_are_not_cart_lines(self):
        products, carts = _setup()
        BookAppointmentHandler(carts, products).handle(
            ALICE, "1", "2026-11-02", "Kigali", "0788000000"
        )

        assert ListCartLinesHandler(carts, products).handle() == []
        assert CountTotalQuantityHandler(carts).handle() == 0
        assert len(ListAppointmentsHandler(carts, products).handle()) == 1

    def test_unknown_product_rejected(self):
        products, carts = _setup()
        with pytest.raises(EntityNotFoundError):
            BookAppointmentHandler(carts, products).handle(
                ALICE, "9", "2026-11-02", "Kigali", "0788000000"
            )

    def test_missing_phone_rejected(self):
        products, carts = _setup()
        with pytest.raises(ValidationError, match="Phone number is required"):
            BookAppointmentHandler(carts, products).handle(
                ALICE, "1", "2026-11-02", "Kigali", ""
            )
        assert ListAppointmentsHandler(carts, products).handle() == []
