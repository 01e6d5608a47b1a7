"""JSON-file-backed implementation of CartRepository.

Cart lines and appointments share one collection; each document carries
a ``kind`` tag saying which of the two it is.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from pathlib import Path

from autohub.domain.exceptions import StoreError, ValidationError
from autohub.domain.model.cart import (
    Appointment,
    CartLine,
    OrderStatus,
    PaymentStatus,
)
from autohub.domain.model.value_objects import Quantity
from autohub.domain.repository.cart_repository import CartRepository
from autohub.infrastructure.persistence.json_document_file import JsonDocumentFile

KIND_CART_LINE = "cart_line"
KIND_APPOINTMENT = "appointment"


class JsonCartRepository(CartRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonDocumentFile(file_path)

    def next_id(self) -> str:
        return uuid.uuid4().hex

    # --- Cart lines -----------------------------------------------------------

    def get_line(self, line_id: str) -> CartLine | None:
        for raw in self._lines(self._file.read()):
            if raw["id"] == line_id:
                return self._line_to_domain(raw)
        return None

    def add_line(self, line: CartLine) -> None:
        with self._file.transaction() as records:
            records.append(self._line_to_raw(line))

    def delete_line(self, line_id: str) -> CartLine | None:
        with self._file.transaction() as records:
            for i, raw in enumerate(records):
                if raw.get("kind") == KIND_CART_LINE and raw["id"] == line_id:
                    del records[i]
                    return self._line_to_domain(raw)
        return None

    def list_lines(self) -> list[CartLine]:
        return [self._line_to_domain(raw) for raw in self._lines(self._file.read())]

    def list_lines_for_user(self, user_id: str) -> list[CartLine]:
        return [line for line in self.list_lines() if line.user_id == user_id]

    def list_lines_by_order_status(self, status: OrderStatus) -> list[CartLine]:
        return [line for line in self.list_lines() if line.order_status == status]

    def mark_paid_for_user(self, user_id: str) -> int:
        changed = 0
        with self._file.transaction() as records:
            for i, raw in enumerate(records):
                if raw.get("kind") != KIND_CART_LINE or raw["user_id"] != user_id:
                    continue
                line = self._line_to_domain(raw)
                if line.mark_paid():
                    records[i] = self._line_to_raw(line)
                    changed += 1
        return changed

    def update_order_status(
        self,
        line_id: str,
        expected: OrderStatus | None,
        new_status: OrderStatus,
    ) -> CartLine | None:
        expected_raw = expected.value if expected else None
        with self._file.transaction() as records:
            for raw in self._lines(records):
                if raw["id"] != line_id:
                    continue
                if raw.get("order_status") != expected_raw:
                    return None
                raw["order_status"] = new_status.value
                return self._line_to_domain(raw)
        return None

    # --- Appointments ---------------------------------------------------------

    def add_appointment(self, appointment: Appointment) -> None:
        with self._file.transaction() as records:
            records.append(self._appointment_to_raw(appointment))

    def list_appointments(self) -> list[Appointment]:
        return [
            self._appointment_to_domain(raw)
            for raw in self._file.read()
            if raw.get("kind") == KIND_APPOINTMENT
        ]

    # --- Cross-record queries -------------------------------------------------

    def count_references(self, product_id: str) -> int:
        return sum(1 for raw in self._file.read() if raw.get("product_id") == product_id)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _lines(records: list[dict]) -> list[dict]:
        return [raw for raw in records if raw.get("kind") == KIND_CART_LINE]

    @staticmethod
    def _line_to_raw(line: CartLine) -> dict:
        return {
            "kind": KIND_CART_LINE,
            "id": line.id,
            "product_id": line.product_id,
            "quantity": line.quantity.value,
            "user_id": line.user_id,
            "user_email": line.user_email,
            "payment_status": line.payment_status.value,
            "order_status": line.order_status.value if line.order_status else None,
            "created_at": line.created_at.isoformat(),
        }

    @staticmethod
    def _line_to_domain(raw: dict) -> CartLine:
        try:
            order_status = raw.get("order_status")
            return CartLine(
                id=raw["id"],
                product_id=raw["product_id"],
                quantity=Quantity(raw["quantity"]),
                user_id=raw["user_id"],
                user_email=raw.get("user_email", ""),
                payment_status=PaymentStatus(raw["payment_status"]),
                order_status=OrderStatus(order_status) if order_status else None,
                created_at=datetime.fromisoformat(raw["created_at"]),
            )
        except (KeyError, ValueError, ValidationError) as exc:
            raise StoreError(f"Malformed cart line record: {exc!r}") from exc

    @staticmethod
    def _appointment_to_raw(appointment: Appointment) -> dict:
        return {
            "kind": KIND_APPOINTMENT,
            "id": appointment.id,
            "product_id": appointment.product_id,
            "user_id": appointment.user_id,
            "user_email": appointment.user_email,
            "date": appointment.date,
            "location": appointment.location,
            "phone_number": appointment.phone_number,
            "created_at": appointment.created_at.isoformat(),
        }

    @staticmethod
    def _appointment_to_domain(raw: dict) -> Appointment:
        try:
            return Appointment(
                id=raw["id"],
                product_id=raw["product_id"],
                user_id=raw["user_id"],
                user_email=raw.get("user_email", ""),
                date=raw["date"],
                location=raw["location"],
                phone_number=raw["phone_number"],
                created_at=datetime.fromisoformat(raw["created_at"]),
            )
        except (KeyError, ValueError) as exc:
            raise StoreError(f"Malformed appointment record: {exc!r}") from exc
