"""Per-invocation wiring for CLI commands."""

from __future__ import annotations

from pathlib import Path

import click

from autohub.domain.exceptions import DomainException
from autohub.domain.model.value_objects import Identity
from autohub.infrastructure.bootstrap import cart_repository, product_repository
from autohub.infrastructure.persistence.json_cart_repository import (
    JsonCartRepository,
)
from autohub.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)


def _data_dir() -> Path | None:
    obj = click.get_current_context().find_root().obj or {}
    return obj.get("data_dir")


def products() -> JsonProductRepository:
    return product_repository(_data_dir())


def carts() -> JsonCartRepository:
    return cart_repository(_data_dir())


def identity(user_id: str, email: str) -> Identity:
    try:
        return Identity(user_id=user_id, email=email)
    except DomainException as exc:
        raise click.BadParameter(str(exc), param_hint="--user")


user_options = [
    click.option("--user", "user_id", required=True, help="Authenticated user ID."),
    click.option("--email", default="", help="Authenticated user's email."),
]


def with_user(func):
    """Attach the --user/--email identity options to a command."""
    for option in reversed(user_options):
        func = option(func)
    return func
