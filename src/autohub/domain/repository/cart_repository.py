"""Abstract repository for the cart store (cart lines and appointments)."""

from __future__ import annotations

from abc import ABC, abstractmethod

from autohub.domain.model.cart import Appointment, CartLine, OrderStatus


class CartRepository(ABC):

    @abstractmethod
    def next_id(self) -> str:
        """Generate a fresh opaque record ID."""

    # --- Cart lines -----------------------------------------------------------

    @abstractmethod
    def get_line(self, line_id: str) -> CartLine | None:
        """Return a cart line by its ID, or None if not found."""

    @abstractmethod
    def add_line(self, line: CartLine) -> None:
        """Insert a new cart line."""

    @abstractmethod
    def delete_line(self, line_id: str) -> CartLine | None:
        """Atomically remove a cart line and return what was removed.

        Returns None if no such line existed at the moment of deletion.
        """

    @abstractmethod
    def list_lines(self) -> list[CartLine]:
        """Return every cart line, oldest first."""

    @abstractmethod
    def list_lines_for_user(self, user_id: str) -> list[CartLine]:
        """Return every cart line owned by ``user_id``, oldest first."""

    @abstractmethod
    def list_lines_by_order_status(self, status: OrderStatus) -> list[CartLine]:
        """Return every cart line currently in ``status``, oldest first."""

    @abstractmethod
    def mark_paid_for_user(self, user_id: str) -> int:
        """Atomically flip all of the user's PENDING lines to PAID.

        Returns the number of lines changed.
        """

    @abstractmethod
    def update_order_status(
        self,
        line_id: str,
        expected: OrderStatus | None,
        new_status: OrderStatus,
    ) -> CartLine | None:
        """Set a line's order status if it still equals ``expected``.

        Returns the updated line, or None if the line is gone or its
        status changed in the meantime.
        """

    # --- Appointments ---------------------------------------------------------

    @abstractmethod
    def add_appointment(self, appointment: Appointment) -> None:
        """Insert a new appointment."""

    @abstractmethod
    def list_appointments(self) -> list[Appointment]:
        """Return every appointment, oldest first."""

    # --- Cross-record queries -------------------------------------------------

    @abstractmethod
    def count_references(self, product_id: str) -> int:
        """Number of cart lines and appointments referencing a product."""
