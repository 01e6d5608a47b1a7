"""Cart store records: cart lines and appointments.

Both kinds share one store but are separate types. A CartLine reserves
stock; an Appointment books a viewing of a product and never touches stock.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from autohub.domain.exceptions import InvalidTransitionError, ValidationError
from autohub.domain.model.value_objects import Identity, Quantity


class PaymentStatus(Enum):
    PENDING = "PENDING"
    PAID = "PAID"


class OrderStatus(Enum):
    PROCESSING = "PROCESSING"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"

    @staticmethod
    def parse(raw: str) -> OrderStatus:
        try:
            return OrderStatus(raw.strip().upper())
        except ValueError:
            allowed = ", ".join(s.value for s in OrderStatus)
            raise ValidationError(
                f"Unknown order status '{raw}' (expected one of {allowed})"
            ) from None


# Fulfillment stages in order; a line starts with no status at all.
ORDER_STATUS_SEQUENCE: tuple[OrderStatus, ...] = (
    OrderStatus.PROCESSING,
    OrderStatus.SHIPPED,
    OrderStatus.DELIVERED,
)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class CartLine:
    """A user's reservation of ``quantity`` units of one product.

    The quantity recorded here is exactly what was taken from the
    product's stock, and exactly what is given back on removal.
    """

    id: str
    product_id: str
    quantity: Quantity
    user_id: str
    user_email: str = ""
    payment_status: PaymentStatus = PaymentStatus.PENDING
    order_status: OrderStatus | None = None
    created_at: datetime = field(default_factory=_utc_now)

    @staticmethod
    def create(
        line_id: str, identity: Identity, product_id: str, quantity: Quantity
    ) -> CartLine:
        return CartLine(
            id=line_id,
            product_id=product_id,
            quantity=quantity,
            user_id=identity.user_id,
            user_email=identity.email,
        )

    def mark_paid(self) -> bool:
        """Flip PENDING -> PAID. Returns False if already paid."""
        if self.payment_status == PaymentStatus.PAID:
            return False
        self.payment_status = PaymentStatus.PAID
        return True

    def advance_order_status(self, new_status: OrderStatus, force: bool = False) -> bool:
        """Move the line to ``new_status``.

        Only a single forward step is accepted: unset -> PROCESSING ->
        SHIPPED -> DELIVERED. Re-applying the current status is a no-op.
        ``force`` skips the check so an operator can correct a mistake.

        Returns True if the status changed.
        """
        if new_status == self.order_status:
            return False

        if not force:
            current_index = (
                -1
                if self.order_status is None
                else ORDER_STATUS_SEQUENCE.index(self.order_status)
            )
            if ORDER_STATUS_SEQUENCE.index(new_status) != current_index + 1:
                current = self.order_status.value if self.order_status else "unset"
                raise InvalidTransitionError(
                    f"Cannot move cart line {self.id} from {current} "
                    f"to {new_status.value}"
                )

        self.order_status = new_status
        return True


@dataclass
class Appointment:
    """A booked viewing of a product. Has no effect on stock."""

    id: str
    product_id: str
    user_id: str
    date: str
    location: str
    phone_number: str
    user_email: str = ""
    created_at: datetime = field(default_factory=_utc_now)

    @staticmethod
    def create(
        appointment_id: str,
        identity: Identity,
        product_id: str,
        date: str,
        location: str,
        phone_number: str,
    ) -> Appointment:
        """Create a new appointment, enforcing all invariants."""
        if not date or not date.strip():
            raise ValidationError("Appointment date is required")
        if not location or not location.strip():
            raise ValidationError("Appointment location is required")
        if not phone_number or not phone_number.strip():
            raise ValidationError("Phone number is required")

        return Appointment(
            id=appointment_id,
            product_id=product_id,
            user_id=identity.user_id,
            user_email=identity.email,
            date=date.strip(),
            location=location.strip(),
            phone_number=phone_number.strip(),
        )
