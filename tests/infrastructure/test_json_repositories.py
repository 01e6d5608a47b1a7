"""Tests for the JSON-file-backed repositories."""

import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from autohub.application.add_to_cart import AddToCartHandler
from autohub.application.remove_cart_line import RemoveCartLineHandler
from autohub.domain.exceptions import InsufficientStockError, StoreError
from autohub.domain.model.cart import (
    Appointment,
    CartLine,
    OrderStatus,
    PaymentStatus,
)
from autohub.domain.model.product import Product, ProductCondition
from autohub.domain.model.value_objects import Identity, Money, Quantity
from autohub.infrastructure.persistence.json_cart_repository import JsonCartRepository
from autohub.infrastructure.persistence.json_document_file import JsonDocumentFile
from autohub.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)

ALICE = Identity(user_id="u1", email="alice@example.com")


@pytest.fixture
def products(tmp_path):
    repo = JsonProductRepository(tmp_path / "products.json")
    repo.save(
        Product(
            id="p1",
            name="Corolla",
            price=Money.of("18000.50"),
            condition=ProductCondition.USED,
            rating=4.5,
            stock=5,
            details={"gearbox": "manual"},
        )
    )
    return repo


@pytest.fixture
def carts(tmp_path):
    return JsonCartRepository(tmp_path / "cart.json")


class TestJsonProductRepository:

    def test_creates_empty_file(self, tmp_path):
        JsonProductRepository(tmp_path / "nested" / "products.json")
        assert (tmp_path / "nested" / "products.json").read_text().strip() == "[]"

    def test_round_trips_a_product(self, products, tmp_path):
        reloaded = JsonProductRepository(tmp_path / "products.json").get_by_id("p1")
        assert reloaded.price == Money.of("18000.50")
        assert reloaded.condition == ProductCondition.USED
        assert reloaded.rating == 4.5
        assert reloaded.details == {"gearbox": "manual"}

    def test_get_by_name_is_case_insensitive(self, products):
        assert products.get_by_name("COROLLA").id == "p1"
        assert products.get_by_name("Hilux") is None

    def test_adjust_stock_is_conditional(self, products):
        assert products.adjust_stock("p1", -5).stock == 0
        assert products.adjust_stock("p1", -1) is None
        assert products.get_by_id("p1").stock == 0

    def test_adjust_stock_on_missing_product(self, products):
        assert products.adjust_stock("nope", 1) is None

    def test_delete(self, products):
        assert products.delete("p1") is True
        assert products.delete("p1") is False
        assert products.list_all() == []

    def test_corrupt_file_raises_store_error(self, tmp_path):
        path = tmp_path / "products.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(StoreError, match="Cannot read products.json"):
            JsonProductRepository(path).list_all()


class TestJsonCartRepository:

    def _line(self, carts, product_id="p1", qty=2, who=ALICE):
        line = CartLine.create(carts.next_id(), who, product_id, Quantity(qty))
        carts.add_line(line)
        return line

    def test_round_trips_a_line(self, carts, tmp_path):
        line = self._line(carts)
        reloaded = JsonCartRepository(tmp_path / "cart.json").get_line(line.id)
        assert reloaded == line

    def test_delete_returns_removed_line(self, carts):
        line = self._line(carts)
        assert carts.delete_line(line.id).quantity == Quantity(2)
        assert carts.delete_line(line.id) is None

    def test_mark_paid_for_user(self, carts):
        self._line(carts)
        self._line(carts)
        self._line(carts, who=Identity(user_id="u2"))

        assert carts.mark_paid_for_user("u1") == 2
        assert carts.mark_paid_for_user("u1") == 0
        assert [l.payment_status for l in carts.list_lines_for_user("u2")] == [
            PaymentStatus.PENDING
        ]

    def test_mark_paid_keeps_the_rest_of_the_line(self, carts):
        line = self._line(carts)
        carts.update_order_status(line.id, None, OrderStatus.PROCESSING)
        carts.add_appointment(
            Appointment.create(carts.next_id(), ALICE, "p1", "2026-11-02", "Kigali", "0788")
        )

        assert carts.mark_paid_for_user("u1") == 1

        paid = carts.get_line(line.id)
        assert paid.payment_status == PaymentStatus.PAID
        assert paid.order_status == OrderStatus.PROCESSING
        assert paid.quantity == line.quantity
        assert len(carts.list_appointments()) == 1

    def test_update_order_status_compares_first(self, carts):
        line = self._line(carts)
        assert carts.update_order_status(line.id, None, OrderStatus.PROCESSING) is not None
        assert carts.update_order_status(line.id, None, OrderStatus.SHIPPED) is None
        assert carts.list_lines_by_order_status(OrderStatus.PROCESSING)[0].id == line.id

    def test_appointments_share_the_store(self, carts):
        self._line(carts)
        carts.add_appointment(
            Appointment.create(carts.next_id(), ALICE, "p1", "2026-11-02", "Kigali", "0788")
        )

        assert len(carts.list_lines()) == 1
        assert len(carts.list_appointments()) == 1
        assert carts.count_references("p1") == 2
        assert carts.count_references("p2") == 0


class TestJsonStoreConcurrency:

    def test_racing_reservations_against_files(self, products, carts):
        handler = AddToCartHandler(products, carts)
        barrier = threading.Barrier(2)

        def attempt(user):
            barrier.wait()
            try:
                handler.handle(Identity(user_id=user), "p1", 3)
                return "ok"
            except InsufficientStockError:
                return "short"

        with ThreadPoolExecutor(max_workers=2) as pool:
            outcomes = sorted(pool.map(attempt, ["u1", "u2"]))

        assert outcomes == ["ok", "short"]
        assert products.get_by_id("p1").stock == 2
        assert len(carts.list_lines()) == 1

    def test_add_remove_round_trip_on_disk(self, products, carts):
        added = AddToCartHandler(products, carts).handle(ALICE, "p1", 4)
        assert products.get_by_id("p1").stock == 1

        removed = RemoveCartLineHandler(products, carts).handle(added.cart_line_id)

        assert removed.updated_stock == 5
        assert carts.list_lines() == []


class TestJsonDocumentLocking:

    def test_lock_file_sits_beside_the_collection(self, carts, tmp_path):
        carts.list_lines()
        assert (tmp_path / ".cart.json.lock").exists()

    def test_nested_use_in_one_thread_does_not_block(self, tmp_path):
        doc = JsonDocumentFile(tmp_path / "docs.json")
        with doc.transaction() as records:
            records.append({"id": "a"})
            assert doc.read() == []
        assert doc.read() == [{"id": "a"}]

    def test_failed_block_writes_nothing_and_releases_the_lock(self, tmp_path):
        doc = JsonDocumentFile(tmp_path / "docs.json")
        with pytest.raises(RuntimeError):
            with doc.transaction() as records:
                records.append({"id": "a"})
                raise RuntimeError("boom")

        with doc.transaction() as records:
            records.append({"id": "b"})
        assert doc.read() == [{"id": "b"}]
