from pathlib import Path

import click

from autohub.infrastructure.cli.appointment_commands import (
    appointment_book,
    appointment_list,
)
from autohub.infrastructure.cli.cart_commands import (
    cart_add,
    cart_finalize,
    cart_list,
    cart_remove,
    cart_show,
)
from autohub.infrastructure.cli.order_commands import (
    order_advance,
    order_by_status,
    order_status,
    order_summary,
)
from autohub.infrastructure.cli.product_commands import (
    product_add,
    product_delete,
    product_list,
)
from autohub.infrastructure.cli.report_commands import report_quantity, report_top_seller
from autohub.infrastructure.cli.stock_commands import stock_adjust, stock_total
from autohub.infrastructure.logging_config import DEFAULT_LOG_LEVEL, configure_logging


@click.group()
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False, path_type=Path),
    envvar="AUTOHUB_DATA_DIR",
    default=None,
    help="Directory holding products.json and cart.json.",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    envvar="AUTOHUB_LOG_LEVEL",
    default=DEFAULT_LOG_LEVEL,
    show_default=True,
)
@click.pass_context
def cli(ctx: click.Context, data_dir: Path | None, log_level: str) -> None:
    """AutoHub — inventory and order management"""
    configure_logging(log_level)
    ctx.obj = {"data_dir": data_dir}


@cli.group()
def product() -> None:
    """Manage products."""


@cli.group()
def stock() -> None:
    """Administer stock."""


@cli.group()
def cart() -> None:
    """Manage carts."""


@cli.group()
def order() -> None:
    """Track order status."""


@cli.group()
def appointment() -> None:
    """Manage appointments."""


@cli.group()
def report() -> None:
    """Dashboard reports."""


# Register subcommands
product.add_command(product_add)
product.add_command(product_delete)
product.add_command(product_list)
stock.add_command(stock_adjust)
stock.add_command(stock_total)
cart.add_command(cart_add)
cart.add_command(cart_finalize)
cart.add_command(cart_list)
cart.add_command(cart_remove)
cart.add_command(cart_show)
order.add_command(order_advance)
order.add_command(order_by_status)
order.add_command(order_status)
order.add_command(order_summary)
appointment.add_command(appointment_book)
appointment.add_command(appointment_list)
report.add_command(report_quantity)
report.add_command(report_top_seller)
