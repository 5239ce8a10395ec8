"""Order aggregate — the immutable record a checkout produces.

An Order is a snapshot: its line items, total, shipping details and
payment method are copied at creation time and never change afterwards.
Only ``status`` moves, and only along the transitions in ``_TRANSITIONS``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from storefront.domain.exceptions import InvalidStatusTransitionError, ValidationError
from storefront.domain.model.value_objects import Money, Quantity


class OrderStatus(Enum):
    PENDING = "Pending"
    UNPAID = "Unpaid"
    TO_SHIP = "ToShip"
    SHIPPED = "Shipped"
    DELIVERED = "Delivered"

    @staticmethod
    def parse(label: str) -> OrderStatus:
        """Resolve a status label, ignoring case, spaces and underscores.

        ``"To ship"``, ``"to_ship"`` and ``"ToShip"`` all resolve to TO_SHIP.
        """
        key = _normalize(label)
        for status in OrderStatus:
            if _normalize(status.value) == key or _normalize(status.name) == key:
                return status
        raise ValidationError(f"Unknown order status: {label!r}")


def _normalize(label: str) -> str:
    return "".join(ch for ch in label.lower() if ch not in " _-")


# Payment methods settled on delivery; every other method is prepaid.
POSTPAID_METHODS = frozenset({"cod"})

_TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.PENDING: frozenset({OrderStatus.TO_SHIP, OrderStatus.UNPAID}),
    OrderStatus.UNPAID: frozenset(),
    OrderStatus.TO_SHIP: frozenset({OrderStatus.SHIPPED}),
    OrderStatus.SHIPPED: frozenset({OrderStatus.DELIVERED}),
    OrderStatus.DELIVERED: frozenset(),
}


def requires_prepayment(payment_method: str) -> bool:
    return payment_method.strip().lower() not in POSTPAID_METHODS


@dataclass(frozen=True)
class OrderLineItem:
    """Captures product name and unit price at order-creation time."""

    product_name: str
    quantity: Quantity
    price: Money  # unit price, locked at order-creation time

    @property
    def line_total(self) -> Money:
        return self.price * self.quantity.value


@dataclass(frozen=True)
class ShippingDetails:
    name: str
    email: str
    address: str


@dataclass
class Order:
    """Aggregate root for placed orders.

    Use the ``Order.create()`` factory for new orders — it enforces all
    business rules.  The ``__init__`` is intentionally simple so the
    repository can reconstitute persisted orders without re-validating.
    """

    id: int | None
    user_id: str
    shipping: ShippingDetails
    payment_method: str
    items: tuple[OrderLineItem, ...]
    total: Money
    status: OrderStatus = OrderStatus.PENDING
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(
        user_id: str,
        shipping: ShippingDetails,
        payment_method: str,
        items: list[OrderLineItem],
    ) -> Order:
        """Create a new Pending order, enforcing all invariants."""
        if not user_id:
            raise ValidationError("Order must belong to a user")
        if not shipping.address or not shipping.address.strip():
            raise ValidationError("Shipping address is required")
        if not payment_method or not payment_method.strip():
            raise ValidationError("Payment method is required")
        if not items:
            raise ValidationError("Order must contain at least one item")

        total = Money.zero()
        for item in items:
            total = total + item.line_total

        return Order(
            id=None,
            user_id=user_id,
            shipping=shipping,
            payment_method=payment_method.strip().lower(),
            items=tuple(items),
            total=total.rounded(),
        )

    # --- State transitions ----------------------------------------------------

    def can_advance_to(self, new_status: OrderStatus) -> bool:
        if new_status not in _TRANSITIONS[self.status]:
            return False
        if new_status == OrderStatus.UNPAID:
            return requires_prepayment(self.payment_method)
        return True

    def advance_to(self, new_status: OrderStatus) -> None:
        """Move the order along the status state machine.

        Pending -> ToShip -> Shipped -> Delivered, plus Pending -> Unpaid
        for prepaid payment methods. Unpaid and Delivered are terminal.
        """
        if not self.can_advance_to(new_status):
            raise InvalidStatusTransitionError(
                f"Cannot move order #{self.id} from {self.status.value} "
                f"to {new_status.value} (payment method {self.payment_method!r})"
            )
        self.status = new_status

    # --- Computed properties --------------------------------------------------

    @property
    def items_total(self) -> Money:
        """Sum of line totals, recomputed from the snapshot."""
        result = Money.zero()
        for item in self.items:
            result = result + item.line_total
        return result.rounded()
