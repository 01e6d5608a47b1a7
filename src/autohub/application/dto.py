"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from autohub.domain.model.cart import Appointment, CartLine
from autohub.domain.model.product import Product

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M UTC"


@dataclass(frozen=True)
class ProductSummaryDTO:
    """Output: a product as shown next to cart records and in reports."""

    id: str
    name: str
    price: str  # formatted, e.g. "$15000.00"
    condition: str
    rating: float
    stock: int
    details: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class CartLineDTO:
    """Output: a cart line joined with its product and owner.

    ``product`` is None when the referenced product no longer exists.
    """

    id: str
    product_id: str
    product: ProductSummaryDTO | None
    quantity: int
    user_id: str
    user_email: str
    payment_status: str
    order_status: str | None
    created_at: str


@dataclass(frozen=True)
class AppointmentDTO:
    id: str
    product_id: str
    product: ProductSummaryDTO | None
    user_id: str
    user_email: str
    date: str
    location: str
    phone_number: str
    created_at: str


@dataclass(frozen=True)
class ReservationDTO:
    """Output of adding a product to the cart."""

    cart_line_id: str
    product_id: str
    quantity: int
    updated_stock: int


@dataclass(frozen=True)
class RemovalDTO:
    """Output of removing a cart line.

    ``updated_stock`` is None when the product was gone and nothing
    could be restored.
    """

    cart_line_id: str
    product_id: str
    quantity_restored: int
    updated_stock: int | None


@dataclass(frozen=True)
class OrderStatusDTO:
    order_status: str | None
    line: CartLineDTO


@dataclass(frozen=True)
class TopSellingProductDTO:
    product_id: str
    count: int
    product: ProductSummaryDTO


# ---------------------------------------------------------------------------
# Mapping
# ---------------------------------------------------------------------------


def product_summary(product: Product | None) -> ProductSummaryDTO | None:
    if product is None:
        return None
    return ProductSummaryDTO(
        id=product.id,
        name=product.name,
        price=str(product.price),
        condition=product.condition.value,
        rating=product.rating,
        stock=product.stock,
        details=dict(product.details),
    )


def cart_line_dto(line: CartLine, product: Product | None) -> CartLineDTO:
    return CartLineDTO(
        id=line.id,
        product_id=line.product_id,
        product=product_summary(product),
        quantity=line.quantity.value,
        user_id=line.user_id,
        user_email=line.user_email,
        payment_status=line.payment_status.value,
        order_status=line.order_status.value if line.order_status else None,
        created_at=line.created_at.strftime(TIMESTAMP_FORMAT),
    )


def appointment_dto(appointment: Appointment, product: Product | None) -> AppointmentDTO:
    return AppointmentDTO(
        id=appointment.id,
        product_id=appointment.product_id,
        product=product_summary(product),
        user_id=appointment.user_id,
        user_email=appointment.user_email,
        date=appointment.date,
        location=appointment.location,
        phone_number=appointment.phone_number,
        created_at=appointment.created_at.strftime(TIMESTAMP_FORMAT),
    )
