"""Product aggregate.

Products live independently of carts. Their ``stock`` counter is the one
piece of state contended across requests, so it is never changed through
this object in the workflow: the repository's conditional update owns it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from autohub.domain.exceptions import ValidationError
from autohub.domain.model.value_objects import Money

# Descriptive attributes carried for display only.
DETAIL_FIELDS = (
    "gearbox",
    "tank",
    "basic_info",
    "region",
    "color",
    "more_details",
)


class ProductCondition(Enum):
    USED = "USED"
    NEW = "NEW"


@dataclass
class Product:
    """A vehicle in the catalog.

    ``details`` holds the free-form descriptive fields listed in
    ``DETAIL_FIELDS``; none of them take part in any business rule.
    """

    id: str
    name: str
    price: Money
    condition: ProductCondition = ProductCondition.NEW
    rating: float = 0
    stock: int = 0
    details: dict[str, str] = field(default_factory=dict)

    @staticmethod
    def create(
        product_id: str,
        name: str,
        price: Money,
        condition: ProductCondition = ProductCondition.NEW,
        stock: int = 0,
        details: dict[str, str] | None = None,
        rating: float = 0,
    ) -> Product:
        """Create a new catalog entry, enforcing all invariants."""
        if not name or not name.strip():
            raise ValidationError("Product name is required")
        if stock < 0:
            raise ValidationError("Initial stock cannot be negative")
        if isinstance(rating, bool) or not isinstance(rating, (int, float)):
            raise ValidationError("Rating must be a number")
        if rating < 0:
            raise ValidationError("Rating cannot be negative")

        unknown = set(details or {}) - set(DETAIL_FIELDS)
        if unknown:
            raise ValidationError(
                f"Unknown product detail(s): {', '.join(sorted(unknown))}"
            )

        return Product(
            id=product_id,
            name=name.strip(),
            price=price,
            condition=condition,
            rating=rating,
            stock=stock,
            details=dict(details or {}),
        )
