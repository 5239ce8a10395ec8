"""Application service: Update Cart Item quantity.

Quantities stay >= 1.  A request that would store 0 or less is rejected
and nothing is written; removing an item is a separate use case.
"""

from __future__ import annotations

import structlog

from storefront.application.session import ensure_user_id
from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.cart import CartItem
from storefront.domain.repository.cart_repository import CartRepository

logger = structlog.get_logger(__name__)


class UpdateCartItemHandler:

    def __init__(self, cart_repo: CartRepository) -> None:
        self._cart_repo = cart_repo

    def handle(self, user_id: str | None, item_id: int, quantity: int) -> int:
        """Overwrite the item's quantity and return it."""
        item = self._load(ensure_user_id(user_id), item_id)
        item.set_quantity(quantity)
        self._cart_repo.save(item)
        logger.info("Cart quantity set", user_id=user_id, item_id=item_id, quantity=quantity)
        return item.quantity.value

    def increment(self, user_id: str | None, item_id: int, delta: int) -> int:
        """Change the quantity by ``delta`` (negative to decrease)."""
        item = self._load(ensure_user_id(user_id), item_id)
        item.increment(delta)
        self._cart_repo.save(item)
        logger.info(
            "Cart quantity changed",
            user_id=user_id,
            item_id=item_id,
            quantity=item.quantity.value,
        )
        return item.quantity.value

    def _load(self, user_id: str, item_id: int) -> CartItem:
        item = self._cart_repo.get_by_id(item_id)
        if item is None or item.user_id != user_id:
            raise EntityNotFoundError(f"Cart item #{item_id} not found")
        return item
