"""CLI commands for dashboard reports."""

from __future__ import annotations

import click

from autohub.application.reports import CountTotalQuantityHandler, TopSellingProductHandler
from autohub.domain.exceptions import DomainException
from autohub.infrastructure.cli.context import carts, products


@click.command("quantity")
def report_quantity() -> None:
    """Total units held across all carts."""
    handler = CountTotalQuantityHandler(cart_repo=carts())

    try:
        total = handler.handle()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Total quantity in carts: {total}")


@click.command("top-seller")
def report_top_seller() -> None:
    """The product found on the most cart lines."""
    handler = TopSellingProductHandler(cart_repo=carts(), product_repo=products())

    try:
        dto = handler.handle()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Top seller: {dto.product.name} ({dto.product_id})")
    click.echo(f"Cart lines: {dto.count}")
    click.echo(f"Price: {dto.product.price}  Stock: {dto.product.stock}")
