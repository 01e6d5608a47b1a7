"""Application service: Finalize Cart use case.

Marks every pending line of the caller as paid. Running it again once
everything is paid changes nothing.
"""

from __future__ import annotations

import structlog

from autohub.application.errors import store_guard
from autohub.domain.model.value_objects import Identity
from autohub.domain.repository.cart_repository import CartRepository

logger = structlog.get_logger(__name__)


class FinalizeCartHandler:

    def __init__(self, cart_repo: CartRepository) -> None:
        self._cart_repo = cart_repo

    def handle(self, identity: Identity) -> int:
        """Returns the number of lines that moved from PENDING to PAID."""
        with store_guard("finalize cart"):
            changed = self._cart_repo.mark_paid_for_user(identity.user_id)

        logger.info("cart_finalized", user_id=identity.user_id, lines_paid=changed)
        return changed
