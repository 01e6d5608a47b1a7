"""CLI commands for stock administration."""

from __future__ import annotations

import click

from autohub.application.adjust_stock import AdjustStockHandler
from autohub.application.reports import TotalStockHandler
from autohub.domain.exceptions import DomainException
from autohub.infrastructure.cli.context import carts, products


@click.command("adjust")
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.option(
    "--delta", required=True, type=int, help="Units to add (negative to remove)."
)
def stock_adjust(product_id: str, delta: int) -> None:
    """Correct a product's stock by a signed amount."""
    handler = AdjustStockHandler(product_repo=products(), cart_repo=carts())

    try:
        stock = handler.handle(product_id=product_id, delta=delta)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Stock for product {product_id} is now {stock}")


@click.command("total")
def stock_total() -> None:
    """Show the total stock across all products."""
    handler = TotalStockHandler(product_repo=products())

    try:
        total = handler.handle()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Total stock: {total}")
