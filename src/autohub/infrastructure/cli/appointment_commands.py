"""CLI commands for appointment booking."""

from __future__ import annotations

import click

from autohub.application.book_appointment import BookAppointmentHandler
from autohub.application.list_appointments import ListAppointmentsHandler
from autohub.domain.exceptions import DomainException
from autohub.infrastructure.cli.context import carts, identity, products, with_user
from autohub.infrastructure.cli.display import display_appointments


@click.command("book")
@with_user
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.option("--date", required=True, help="Appointment date.")
@click.option("--location", required=True, help="Where to meet.")
@click.option("--phone", "phone_number", required=True, help="Contact phone number.")
def appointment_book(
    user_id: str,
    email: str,
    product_id: str,
    date: str,
    location: str,
    phone_number: str,
) -> None:
    """Book a viewing appointment for a product."""
    handler = BookAppointmentHandler(cart_repo=carts(), product_repo=products())

    try:
        dto = handler.handle(
            identity(user_id, email), product_id, date, location, phone_number
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Appointment {dto.id} booked for {dto.date} at {dto.location}.")


@click.command("list")
def appointment_list() -> None:
    """List every booked appointment."""
    handler = ListAppointmentsHandler(cart_repo=carts(), product_repo=products())

    try:
        appointments = handler.handle()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not appointments:
        click.echo("No appointments found.")
        return
    display_appointments(appointments)
