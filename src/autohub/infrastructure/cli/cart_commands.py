"""CLI commands for the cart."""

from __future__ import annotations

import click

from autohub.application.add_to_cart import AddToCartHandler
from autohub.application.finalize_cart import FinalizeCartHandler
from autohub.application.remove_cart_line import RemoveCartLineHandler
from autohub.application.show_cart import ListCartLinesHandler, ShowUserCartHandler
from autohub.domain.exceptions import DomainException
from autohub.infrastructure.cli.context import carts, identity, products, with_user
from autohub.infrastructure.cli.display import display_lines


@click.command("add")
@with_user
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.option("--quantity", required=True, type=int, help="Units to reserve.")
def cart_add(user_id: str, email: str, product_id: str, quantity: int) -> None:
    """Add a product to the cart (reserves stock)."""
    handler = AddToCartHandler(product_repo=products(), cart_repo=carts())

    try:
        dto = handler.handle(identity(user_id, email), product_id, quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Cart line {dto.cart_line_id} created (quantity={dto.quantity})")
    click.echo(f"Updated stock: {dto.updated_stock}")


@click.command("remove")
@click.option("--id", "cart_line_id", required=True, help="Cart line ID.")
def cart_remove(cart_line_id: str) -> None:
    """Remove a cart line (restores stock)."""
    handler = RemoveCartLineHandler(product_repo=products(), cart_repo=carts())

    try:
        dto = handler.handle(cart_line_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Cart line {dto.cart_line_id} removed.")
    if dto.updated_stock is None:
        click.echo(f"Product {dto.product_id} no longer exists; no stock restored.")
    else:
        click.echo(f"Updated stock: {dto.updated_stock}")


@click.command("show")
@with_user
def cart_show(user_id: str, email: str) -> None:
    """Show the user's cart."""
    handler = ShowUserCartHandler(cart_repo=carts(), product_repo=products())

    try:
        lines = handler.handle(identity(user_id, email))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not lines:
        click.echo("Cart is empty.")
        return
    display_lines(lines)


@click.command("finalize")
@with_user
def cart_finalize(user_id: str, email: str) -> None:
    """Mark every pending line of the user as paid."""
    handler = FinalizeCartHandler(cart_repo=carts())

    try:
        changed = handler.handle(identity(user_id, email))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Cart marked as paid ({changed} line(s) updated).")


@click.command("list")
def cart_list() -> None:
    """List every cart line of every user."""
    handler = ListCartLinesHandler(cart_repo=carts(), product_repo=products())

    try:
        lines = handler.handle()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not lines:
        click.echo("No cart lines found.")
        return
    display_lines(lines, show_user=True)
