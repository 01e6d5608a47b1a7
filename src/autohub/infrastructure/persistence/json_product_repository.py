"""JSON-file-backed implementation of ProductRepository."""

from __future__ import annotations

import uuid
from decimal import Decimal, InvalidOperation
from pathlib import Path

from autohub.domain.exceptions import StoreError, ValidationError
from autohub.domain.model.product import Product, ProductCondition
from autohub.domain.model.value_objects import Money
from autohub.domain.repository.product_repository import ProductRepository
from autohub.infrastructure.persistence.json_document_file import JsonDocumentFile


class JsonProductRepository(ProductRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonDocumentFile(file_path)

    # --- ProductRepository interface ------------------------------------------

    def next_id(self) -> str:
        return uuid.uuid4().hex

    def get_by_id(self, product_id: str) -> Product | None:
        for raw in self._file.read():
            if raw["id"] == product_id:
                return self._to_domain(raw)
        return None

    def get_by_name(self, name: str) -> Product | None:
        for raw in self._file.read():
            if raw["name"].lower() == name.lower():
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[Product]:
        return [self._to_domain(raw) for raw in self._file.read()]

    def save(self, product: Product) -> None:
        with self._file.transaction() as records:
            for i, raw in enumerate(records):
                if raw["id"] == product.id:
                    records[i] = self._to_raw(product)
                    break
            else:
                records.append(self._to_raw(product))

    def delete(self, product_id: str) -> bool:
        with self._file.transaction() as records:
            for i, raw in enumerate(records):
                if raw["id"] == product_id:
                    del records[i]
                    return True
        return False

    def adjust_stock(self, product_id: str, delta: int) -> Product | None:
        with self._file.transaction() as records:
            for raw in records:
                if raw["id"] == product_id:
                    new_stock = raw.get("stock", 0) + delta
                    if new_stock < 0:
                        return None
                    raw["stock"] = new_stock
                    return self._to_domain(raw)
        return None

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(product: Product) -> dict:
        return {
            "id": product.id,
            "name": product.name,
            "price": str(product.price.amount),
            "currency": product.price.currency,
            "condition": product.condition.value,
            "rating": product.rating,
            "stock": product.stock,
            "details": dict(product.details),
        }

    @staticmethod
    def _to_domain(raw: dict) -> Product:
        try:
            return Product(
                id=raw["id"],
                name=raw["name"],
                price=Money(Decimal(raw["price"]), raw.get("currency", "USD")),
                condition=ProductCondition(raw.get("condition", "NEW")),
                rating=raw.get("rating", 0),
                stock=raw.get("stock", 0),
                details=dict(raw.get("details", {})),
            )
        except (KeyError, InvalidOperation, ValueError, ValidationError) as exc:
            raise StoreError(f"Malformed product record: {exc!r}") from exc
