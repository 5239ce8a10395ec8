"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class UnauthenticatedError(DomainException):
    """No user session is available for a user-scoped operation."""


class PersistenceError(DomainException):
    """A durable read or write did not complete."""


class InsufficientStockError(ValidationError):
    """A reservation would drive a product's stock below zero."""

    def __init__(
        self,
        product_id: str,
        product_name: str,
        requested: int,
        available: int,
    ) -> None:
        super().__init__(
            f"Insufficient stock for {product_name} "
            f"(need {requested}, have {available} available)"
        )
        self.product_id = product_id
        self.product_name = product_name
        self.requested = requested
        self.available = available


class EmptyCartError(ValidationError):
    """Checkout was attempted with an empty cart."""


class MissingAddressError(ValidationError):
    """Checkout was attempted without a shipping address."""


class InvalidStatusTransitionError(ValidationError):
    """An order status change is not allowed by the status state machine."""
