"""CLI commands for order status tracking."""

from __future__ import annotations

import click

from autohub.application.advance_order_status import AdvanceOrderStatusHandler
from autohub.application.reports import OrderStatusSummaryHandler
from autohub.application.show_order_status import (
    ListLinesByStatusHandler,
    ShowOrderStatusHandler,
)
from autohub.domain.exceptions import DomainException
from autohub.domain.model.cart import OrderStatus
from autohub.infrastructure.cli.context import carts, products
from autohub.infrastructure.cli.display import display_lines

_STATUS_CHOICE = click.Choice([s.value for s in OrderStatus], case_sensitive=False)


@click.command("status")
@click.option("--id", "cart_line_id", required=True, help="Cart line ID.")
def order_status(cart_line_id: str) -> None:
    """Show the order status of a cart line."""
    handler = ShowOrderStatusHandler(cart_repo=carts(), product_repo=products())

    try:
        dto = handler.handle(cart_line_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order status: {dto.order_status or 'N/A'}")
    display_lines([dto.line], show_user=True)


@click.command("advance")
@click.option("--id", "cart_line_id", required=True, help="Cart line ID.")
@click.option("--status", "new_status", required=True, type=_STATUS_CHOICE)
@click.option(
    "--force",
    is_flag=True,
    default=False,
    help="Allow backward or skipping transitions (corrections).",
)
def order_advance(cart_line_id: str, new_status: str, force: bool) -> None:
    """Move a cart line to its next fulfillment stage."""
    handler = AdvanceOrderStatusHandler(cart_repo=carts(), product_repo=products())

    try:
        dto = handler.handle(cart_line_id, new_status, force=force)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Cart line {dto.id} is now {dto.order_status}.")


@click.command("by-status")
@click.option("--status", required=True, type=_STATUS_CHOICE)
def order_by_status(status: str) -> None:
    """List cart lines in a given order status."""
    handler = ListLinesByStatusHandler(cart_repo=carts(), product_repo=products())

    try:
        lines = handler.handle(status)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    display_lines(lines, show_user=True)


@click.command("summary")
def order_summary() -> None:
    """Count cart lines per order status."""
    handler = OrderStatusSummaryHandler(cart_repo=carts())

    try:
        summary = handler.handle()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    for status, count in summary.items():
        click.echo(f"{status:<12} {count:>6}")
