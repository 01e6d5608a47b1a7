"""Shared table formatting for cart records."""

from __future__ import annotations

import click

from autohub.application.dto import AppointmentDTO, CartLineDTO

_MISSING = "(deleted)"


def display_lines(lines: list[CartLineDTO], show_user: bool = False) -> None:
    user_header = f" {'User':<24}" if show_user else ""
    click.echo(
        f"{'Line':<34} {'Product':<20} {'Qty':>5} {'Payment':<8} {'Order':<11}{user_header}"
    )
    click.echo("-" * (82 + (25 if show_user else 0)))
    for line in lines:
        product = line.product.name if line.product else _MISSING
        user = f" {line.user_email or line.user_id:<24}" if show_user else ""
        click.echo(
            f"{line.id:<34} {product:<20} {line.quantity:>5} "
            f"{line.payment_status:<8} {line.order_status or 'N/A':<11}{user}"
        )


def display_appointments(appointments: list[AppointmentDTO]) -> None:
    click.echo(
        f"{'Appointment':<34} {'Product':<20} {'Date':<12} {'Location':<16} {'Phone':<14}"
    )
    click.echo("-" * 100)
    for a in appointments:
        product = a.product.name if a.product else _MISSING
        click.echo(
            f"{a.id:<34} {product:<20} {a.date:<12} {a.location:<16} {a.phone_number:<14}"
        )
