"""End-to-end tests for the click CLI against a temporary data directory."""

import json
import re

import pytest
from click.testing import CliRunner

from autohub.infrastructure.cli.main import cli


@pytest.fixture
def run(tmp_path):
    runner = CliRunner()

    def invoke(*args):
        return runner.invoke(cli, ["--data-dir", str(tmp_path), *args])

    return invoke


def _add_product(run, name="Corolla", stock=5):
    result = run("product", "add", "--name", name, "--price", "18000", "--stock", str(stock))
    assert result.exit_code == 0, result.output
    return re.search(r"Product (\w+) ", result.output).group(1)


def _add_to_cart(run, product_id, quantity, user="u1"):
    result = run(
        "cart", "add", "--user", user, "--email", f"{user}@example.com",
        "--product", product_id, "--quantity", str(quantity),
    )
    return result


def _line_id(result):
    return re.search(r"Cart line (\w+) created", result.output).group(1)


class TestCartCommands:

    def test_add_show_remove(self, run, tmp_path):
        product_id = _add_product(run, stock=10)

        added = _add_to_cart(run, product_id, 4)
        assert added.exit_code == 0, added.output
        assert "Updated stock: 6" in added.output

        shown = run("cart", "show", "--user", "u1")
        assert "Corolla" in shown.output
        assert "PENDING" in shown.output

        removed = run("cart", "remove", "--id", _line_id(added))
        assert removed.exit_code == 0
        assert "Updated stock: 10" in removed.output

        stored = json.loads((tmp_path / "products.json").read_text())
        assert stored[0]["stock"] == 10

    def test_insufficient_stock_fails_cleanly(self, run):
        product_id = _add_product(run, stock=2)

        result = _add_to_cart(run, product_id, 3)

        assert result.exit_code == 1
        assert "Insufficient stock for Corolla" in result.output

    def test_unknown_product_fails_cleanly(self, run):
        result = _add_to_cart(run, "missing", 1)
        assert result.exit_code == 1
        assert "not found" in result.output

    def test_finalize(self, run):
        product_id = _add_product(run)
        _add_to_cart(run, product_id, 1)

        first = run("cart", "finalize", "--user", "u1")
        second = run("cart", "finalize", "--user", "u1")

        assert "1 line(s) updated" in first.output
        assert "0 line(s) updated" in second.output


class TestOrderCommands:

    def test_advance_and_report(self, run):
        product_id = _add_product(run)
        line_id = _line_id(_add_to_cart(run, product_id, 1))

        assert run("order", "advance", "--id", line_id, "--status", "processing").exit_code == 0

        skipped = run("order", "advance", "--id", line_id, "--status", "DELIVERED")
        assert skipped.exit_code == 1
        assert "Cannot move" in skipped.output

        forced = run("order", "advance", "--id", line_id, "--status", "DELIVERED", "--force")
        assert forced.exit_code == 0

        by_status = run("order", "by-status", "--status", "DELIVERED")
        assert line_id in by_status.output

        summary = run("order", "summary")
        assert re.search(r"DELIVERED\s+1", summary.output)

    def test_by_status_with_nothing_found(self, run):
        result = run("order", "by-status", "--status", "SHIPPED")
        assert result.exit_code == 1
        assert "No cart lines found" in result.output


class TestReportCommands:

    def test_totals_and_top_seller(self, run):
        corolla = _add_product(run, "Corolla", stock=5)
        hilux = _add_product(run, "Hilux", stock=5)
        _add_to_cart(run, corolla, 1)
        _add_to_cart(run, corolla, 1)
        _add_to_cart(run, hilux, 3)

        assert "Total quantity in carts: 5" in run("report", "quantity").output
        assert "Total stock: 5" in run("stock", "total").output

        top = run("report", "top-seller")
        assert "Top seller: Corolla" in top.output
        assert "Cart lines: 2" in top.output

    def test_stock_adjust(self, run):
        product_id = _add_product(run, stock=1)
        assert "is now 4" in run("stock", "adjust", "--product", product_id, "--delta", "3").output

        result = run("stock", "adjust", "--product", product_id, "--delta", "-9")
        assert result.exit_code == 1


class TestProductAndAppointmentCommands:

    def test_delete_refused_while_booked(self, run):
        product_id = _add_product(run)
        booked = run(
            "appointment", "book", "--user", "u1", "--product", product_id,
            "--date", "2026-11-02", "--location", "Kigali", "--phone", "0788000000",
        )
        assert booked.exit_code == 0, booked.output
        assert "Kigali" in run("appointment", "list").output

        refused = run("product", "delete", "--id", product_id)
        assert refused.exit_code == 1
        assert "Cannot delete Corolla" in refused.output

    def test_list_products(self, run):
        _add_product(run, "Corolla", stock=3)
        listed = run("product", "list")
        assert "Corolla" in listed.output

    def test_add_with_rating(self, run, tmp_path):
        added = run(
            "product", "add", "--name", "Hilux", "--price", "32000", "--rating", "4.5"
        )
        assert added.exit_code == 0, added.output

        stored = json.loads((tmp_path / "products.json").read_text())
        assert stored[0]["rating"] == 4.5

    def test_negative_rating_rejected(self, run):
        refused = run(
            "product", "add", "--name", "Hilux", "--price", "32000", "--rating=-1"
        )
        assert refused.exit_code == 1
        assert "Rating cannot be negative" in refused.output
