"""Translation of store failures into caller-facing errors."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

import structlog

from autohub.domain.exceptions import InternalError, StoreError

logger = structlog.get_logger(__name__)


@contextmanager
def store_guard(operation: str) -> Iterator[None]:
    """Log a StoreError with its traceback and re-raise it as InternalError.

    Domain errors pass through untouched.
    """
    try:
        yield
    except StoreError:
        logger.exception("store_failure", operation=operation)
        raise InternalError(operation) from None
