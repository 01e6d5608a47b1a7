"""CLI commands for the Product aggregate."""

from __future__ import annotations

import click

from autohub.application.add_product import AddProductHandler
from autohub.application.delete_product import DeleteProductHandler
from autohub.application.show_inventory import ShowInventoryHandler
from autohub.domain.exceptions import DomainException
from autohub.domain.model.product import DETAIL_FIELDS
from autohub.infrastructure.cli.context import carts, products


def _parse_details(raw: tuple[str, ...]) -> dict[str, str]:
    """Parse repeated 'field=value' options into a dict."""
    details: dict[str, str] = {}
    for pair in raw:
        if "=" not in pair:
            raise click.BadParameter(
                f"Invalid detail '{pair}'. Expected 'field=value'.",
                param_hint="--detail",
            )
        key, value = pair.split("=", 1)
        details[key.strip()] = value.strip()
    return details


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Price (e.g. 15000.00).")
@click.option(
    "--condition",
    type=click.Choice(["NEW", "USED"], case_sensitive=False),
    default="NEW",
    show_default=True,
)
@click.option("--stock", type=int, default=0, show_default=True, help="Initial stock.")
@click.option("--rating", type=float, default=0, show_default=True, help="Rating.")
@click.option(
    "--detail",
    "details",
    multiple=True,
    help=f"Descriptive field as 'field=value' ({', '.join(DETAIL_FIELDS)}).",
)
def product_add(
    name: str,
    price: str,
    condition: str,
    stock: int,
    rating: float,
    details: tuple[str, ...],
) -> None:
    """Add a new product to the catalog."""
    handler = AddProductHandler(product_repo=products())

    try:
        dto = handler.handle(
            name=name,
            price=price,
            condition=condition,
            stock=stock,
            details=_parse_details(details),
            rating=rating,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {dto.id} '{dto.name}' added at {dto.price} (stock={dto.stock})")


@click.command("list")
def product_list() -> None:
    """List all products with their stock."""
    handler = ShowInventoryHandler(product_repo=products())

    try:
        rows = handler.handle()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not rows:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<34} {'Name':<20} {'Condition':<10} {'Price':>12} {'Stock':>6}")
    click.echo("-" * 86)
    for p in rows:
        click.echo(
            f"{p.id:<34} {p.name:<20} {p.condition:<10} {p.price:>12} {p.stock:>6}"
        )


@click.command("delete")
@click.option("--id", "product_id", required=True, help="Product ID.")
def product_delete(product_id: str) -> None:
    """Delete a product that no cart record references."""
    handler = DeleteProductHandler(product_repo=products(), cart_repo=carts())

    try:
        handler.handle(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {product_id} deleted.")
