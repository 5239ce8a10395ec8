"""Application service: Place Order use case (checkout).

Turns the user's cart into an immutable Pending order:

1. Validate the session, the shipping address and the cart (no side
   effects on failure).
2. Freeze each cart line's product name and current price into an
   ``OrderLineItem`` and compute the total.
3. Reserve stock through the Inventory Ledger under the configured
   ``ReservationPolicy``.
4. Persist the order.  If that fails, the reservations are released and
   the cart is left untouched so the checkout can be retried.
5. Clear the cart.
"""

from __future__ import annotations

import structlog

from storefront.application.dto import PlaceOrderResult, order_to_dto
from storefront.application.session import ensure_user_id
from storefront.application.show_cart import cart_snapshot
from storefront.domain.exceptions import (
    EmptyCartError,
    EntityNotFoundError,
    MissingAddressError,
    PersistenceError,
)
from storefront.domain.model.cart import CartLine
from storefront.domain.model.order import Order, OrderLineItem, ShippingDetails
from storefront.domain.model.value_objects import Quantity
from storefront.domain.repository.cart_repository import CartRepository
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.repository.user_repository import UserProfileRepository
from storefront.domain.service.inventory_ledger import (
    InventoryLedger,
    ReservationPolicy,
    ReservationRequest,
)

logger = structlog.get_logger(__name__)


class PlaceOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        cart_repo: CartRepository,
        product_repo: ProductRepository,
        profile_repo: UserProfileRepository,
        ledger: InventoryLedger,
        policy: ReservationPolicy = ReservationPolicy.STRICT,
    ) -> None:
        self._order_repo = order_repo
        self._cart_repo = cart_repo
        self._product_repo = product_repo
        self._profile_repo = profile_repo
        self._ledger = ledger
        self._policy = policy

    def handle(
        self,
        user_id: str | None,
        payment_method: str = "cod",
        shipping_address: str | None = None,
    ) -> PlaceOrderResult:
        user_id = ensure_user_id(user_id)
        shipping = self._shipping_details(user_id, shipping_address)

        lines = cart_snapshot(self._cart_repo, self._product_repo, user_id)
        if not lines:
            raise EmptyCartError("Your cart is empty")

        items = [self._freeze(line) for line in lines]
        order = Order.create(
            user_id=user_id,
            shipping=shipping,
            payment_method=payment_method,
            items=items,
        )

        outcome = self._ledger.reserve_all(
            [ReservationRequest(line.product_id, line.quantity) for line in lines],
            policy=self._policy,
        )

        try:
            self._order_repo.save(order)
        except PersistenceError:
            logger.error(
                "Order could not be saved, releasing stock",
                user_id=user_id,
                reserved=len(outcome.reserved),
            )
            self._ledger.release_all(outcome.reserved)
            raise

        logger.info(
            "Order placed",
            order_id=order.id,
            user_id=user_id,
            total=str(order.total),
            skipped=outcome.skipped_product_names,
        )

        try:
            self._cart_repo.delete_for_user(user_id)
        except PersistenceError as exc:
            # The order is durable; a retry would place it twice.
            logger.error(
                "Cart could not be cleared after checkout",
                order_id=order.id,
                user_id=user_id,
                error=str(exc),
            )

        return PlaceOrderResult(
            order=order_to_dto(order),
            skipped_products=outcome.skipped_product_names,
        )

    # --- Internal helpers -----------------------------------------------------

    def _shipping_details(self, user_id: str, address: str | None) -> ShippingDetails:
        profile = self._profile_repo.get_by_id(user_id)
        if not address or not address.strip():
            address = profile.address if profile is not None else ""
        if not address or not address.strip():
            raise MissingAddressError("Please save your shipping address first")

        return ShippingDetails(
            name=profile.name if profile is not None else "",
            email=profile.email if profile is not None else "",
            address=address.strip(),
        )

    @staticmethod
    def _freeze(line: CartLine) -> OrderLineItem:
        if line.is_orphan:
            raise EntityNotFoundError(
                f"Product with ID '{line.product_id}' in cart item #{line.item_id} "
                f"no longer exists; remove it before checking out"
            )
        assert line.product_name is not None and line.unit_price is not None
        return OrderLineItem(
            product_name=line.product_name,
            quantity=Quantity(line.quantity),
            price=line.unit_price,
        )
