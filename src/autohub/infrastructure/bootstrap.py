"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

import os
from pathlib import Path

from autohub.infrastructure.persistence.json_cart_repository import (
    JsonCartRepository,
)
from autohub.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)

# Resolve data directory relative to the project root.
# When installed in editable mode the project root is the repo root.
# Can be overridden via the AUTOHUB_DATA_DIR environment variable.
_DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"

PRODUCTS_FILE = "products.json"
CART_FILE = "cart.json"


def data_dir(override: Path | None = None) -> Path:
    if override is not None:
        return override
    return Path(os.environ.get("AUTOHUB_DATA_DIR", _DEFAULT_DATA_DIR))


def product_repository(base_dir: Path | None = None) -> JsonProductRepository:
    return JsonProductRepository(data_dir(base_dir) / PRODUCTS_FILE)


def cart_repository(base_dir: Path | None = None) -> JsonCartRepository:
    return JsonCartRepository(data_dir(base_dir) / CART_FILE)
