"""Domain service: Stock Reservation.

This service coordinates the cross-aggregate operation of moving stock
between a product and the cart lines that reserve it. It lives in the
domain layer because the conservation rule is a core business rule:

    product.stock + sum(quantity of its cart lines) never changes
    across reserve/release.

There is no transaction spanning the product and cart stores, so every
operation is ordered as:
  1. mutate stock with the store's atomic conditional update;
  2. create/delete the cart line only if step 1 succeeded;
  3. if step 2 fails, undo step 1 with the inverse stock update.
"""

from __future__ import annotations

import structlog

from autohub.domain.exceptions import (
    EntityNotFoundError,
    InsufficientStockError,
    StoreError,
    ValidationError,
)
from autohub.domain.model.cart import CartLine
from autohub.domain.model.value_objects import Identity, Quantity
from autohub.domain.repository.cart_repository import CartRepository
from autohub.domain.repository.product_repository import ProductRepository

logger = structlog.get_logger(__name__)


class StockReservationService:

    def __init__(
        self,
        product_repo: ProductRepository,
        cart_repo: CartRepository,
    ) -> None:
        self._product_repo = product_repo
        self._cart_repo = cart_repo

    def reserve(
        self, identity: Identity, product_id: str, quantity: Quantity
    ) -> tuple[CartLine, int]:
        """Take ``quantity`` units out of stock and record them on a new line.

        Returns the created line and the product's stock afterwards.
        """
        qty = quantity.value
        product = self._product_repo.adjust_stock(product_id, -qty)
        if product is None:
            raise self._explain_rejected_decrement(product_id, qty)

        line = CartLine.create(
            line_id=self._cart_repo.next_id(),
            identity=identity,
            product_id=product_id,
            quantity=quantity,
        )
        try:
            self._cart_repo.add_line(line)
        except StoreError:
            self._compensate(product_id, qty, reason="cart_line_insert_failed")
            raise

        logger.info(
            "stock_reserved",
            product_id=product_id,
            cart_line_id=line.id,
            user_id=identity.user_id,
            quantity=qty,
            stock=product.stock,
        )
        return line, product.stock

    def release(self, line_id: str) -> tuple[CartLine, int | None]:
        """Delete a cart line and give its quantity back to the product.

        The quantity restored is the one recorded on the line as read
        before deletion. If the product has since been removed the
        restoration is skipped and the deletion still goes ahead.

        Returns the deleted line and the product's stock afterwards
        (None when the product no longer exists).
        """
        line = self._cart_repo.get_line(line_id)
        if line is None:
            raise EntityNotFoundError(f"Cart line '{line_id}' not found")

        qty = line.quantity.value
        product = self._product_repo.adjust_stock(line.product_id, qty)
        if product is None:
            logger.warning(
                "stock_restore_skipped",
                product_id=line.product_id,
                cart_line_id=line_id,
                quantity=qty,
            )

        try:
            deleted = self._cart_repo.delete_line(line_id)
        except StoreError:
            if product is not None:
                self._compensate(line.product_id, -qty, reason="cart_line_delete_failed")
            raise

        if deleted is None:
            # Someone else removed the line first and restored its stock.
            if product is not None:
                self._compensate(line.product_id, -qty, reason="cart_line_already_removed")
            raise EntityNotFoundError(f"Cart line '{line_id}' not found")

        logger.info(
            "cart_line_removed",
            product_id=line.product_id,
            cart_line_id=line_id,
            quantity=qty,
            stock=product.stock if product else None,
        )
        return deleted, product.stock if product else None

    def adjust(self, product_id: str, delta: int) -> int:
        """Administrative stock correction. Returns the new stock."""
        product = self._product_repo.adjust_stock(product_id, delta)
        if product is None:
            current = self._product_repo.get_by_id(product_id)
            if current is None:
                raise EntityNotFoundError(f"Product with ID '{product_id}' not found")
            raise ValidationError(
                f"Adjusting stock of {current.name} by {delta} would leave "
                f"{current.stock + delta} in stock"
            )

        logger.info(
            "stock_adjusted", product_id=product_id, delta=delta, stock=product.stock
        )
        return product.stock

    # --- Internal helpers -----------------------------------------------------

    def _explain_rejected_decrement(self, product_id: str, qty: int) -> Exception:
        """Tell apart a missing product from a short one after a failed update."""
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            return EntityNotFoundError(f"Product with ID '{product_id}' not found")
        logger.info(
            "stock_reservation_rejected",
            product_id=product_id,
            requested=qty,
            available=product.stock,
        )
        return InsufficientStockError(product.name, qty, product.stock)

    def _compensate(self, product_id: str, delta: int, reason: str) -> None:
        """Undo a stock update whose paired cart mutation did not happen."""
        try:
            restored = self._product_repo.adjust_stock(product_id, delta)
        except StoreError:
            logger.exception(
                "stock_compensation_failed",
                product_id=product_id,
                delta=delta,
                reason=reason,
            )
            return

        if restored is None:
            logger.error(
                "stock_compensation_failed",
                product_id=product_id,
                delta=delta,
                reason=reason,
            )
        else:
            logger.warning(
                "stock_compensated",
                product_id=product_id,
                delta=delta,
                reason=reason,
                stock=restored.stock,
            )
