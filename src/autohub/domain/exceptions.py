"""Domain-level exceptions.

Every error a caller is expected to act on is a subclass of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
Insufficient stock and missing entities are deliberately separate branches.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class InvalidTransitionError(ValidationError):
    """An order status change is not a single forward step."""


class ProductInUseError(ValidationError):
    """A product cannot be removed while cart records reference it."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class InsufficientStockError(DomainException):
    """The requested quantity exceeds the product's available stock."""

    def __init__(self, product_name: str, requested: int, available: int) -> None:
        self.product_name = product_name
        self.requested = requested
        self.available = available
        super().__init__(
            f"Insufficient stock for {product_name} "
            f"(need {requested}, have {available} available)"
        )


class InternalError(DomainException):
    """The operation failed for a reason the caller cannot act on."""

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(f"Internal error while trying to {operation}")


class StoreError(Exception):
    """Raised by repositories when the underlying store fails.

    Not a DomainException: handlers log it and surface an InternalError
    so store details never reach the caller.
    """
