"""Integration tests for the dashboard reports."""

import pytest

from autohub.application.reports import (
    CountTotalQuantityHandler,
    OrderStatusSummaryHandler,
    TopSellingProductHandler,
    TotalStockHandler,
)
from autohub.domain.exceptions import EntityNotFoundError
from autohub.domain.model.cart import CartLine, OrderStatus
from autohub.domain.model.product import Product
from autohub.domain.model.value_objects import Identity, Money, Quantity
from tests.fakes import FakeCartRepository, FakeProductRepository

ALICE = Identity(user_id="u1")


def _products(*stocks: int) -> FakeProductRepository:
    return FakeProductRepository(
        [
            Product(id=f"p{i}", name=f"Car {i}", price=Money.of("1000"), stock=stock)
            for i, stock in enumerate(stocks, start=1)
        ]
    )


def _carts(*specs: tuple[str, int]) -> FakeCartRepository:
    """Lines from (product_id, quantity) tuples, written straight to the store."""
    carts = FakeCartRepository()
    for product_id, qty in specs:
        carts.add_line(CartLine.create(carts.next_id(), ALICE, product_id, Quantity(qty)))
    return carts


class TestCountTotalQuantity:

    def test_sums_quantities(self):
        assert CountTotalQuantityHandler(_carts(("p1", 2), ("p2", 5))).handle() == 7

    def test_empty_is_zero(self):
        assert CountTotalQuantityHandler(_carts()).handle() == 0


class TestTotalStock:

    def test_sums_stock(self):
        assert TotalStockHandler(_products(3, 4, 0)).handle() == 7

    def test_empty_is_zero(self):
        assert TotalStockHandler(_products()).handle() == 0


class TestTopSellingProduct:

    def test_counts_lines_not_units(self):
        carts = _carts(("p1", 1), ("p1", 1), ("p2", 9))

        dto = TopSellingProductHandler(carts, _products(5, 5)).handle()

        assert dto.product_id == "p1"
        assert dto.count == 2
        assert dto.product.name == "Car 1"

    def test_tie_goes_to_oldest_first_line(self):
        carts = _carts(("p2", 1), ("p1", 1), ("p1", 1), ("p2", 1))
        dto = TopSellingProductHandler(carts, _products(5, 5)).handle()
        assert dto.product_id == "p2"

    def test_deleted_products_are_skipped(self):
        carts = _carts(("gone", 1), ("gone", 1), ("p1", 1))
        dto = TopSellingProductHandler(carts, _products(5)).handle()
        assert dto.product_id == "p1"
        assert dto.count == 1

    def test_no_lines_is_not_found(self):
        with pytest.raises(EntityNotFoundError, match="No top selling product"):
            TopSellingProductHandler(_carts(), _products(5)).handle()


class TestOrderStatusSummary:

    def test_counts_each_stage(self):
        carts = _carts(("p1", 1), ("p1", 1), ("p2", 1), ("p2", 1))
        ids = [line.id for line in carts.list_lines()]
        carts.update_order_status(ids[0], None, OrderStatus.PROCESSING)
        carts.update_order_status(ids[1], None, OrderStatus.PROCESSING)
        carts.update_order_status(ids[2], None, OrderStatus.SHIPPED)

        summary = OrderStatusSummaryHandler(carts).handle()

        assert summary == {"PROCESSING": 2, "SHIPPED": 1, "DELIVERED": 0}
