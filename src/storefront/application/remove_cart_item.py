"""Application service: Remove Cart Item use case (idempotent)."""

from __future__ import annotations

import structlog

from storefront.application.session import ensure_user_id
from storefront.domain.repository.cart_repository import CartRepository

logger = structlog.get_logger(__name__)


class RemoveCartItemHandler:

    def __init__(self, cart_repo: CartRepository) -> None:
        self._cart_repo = cart_repo

    def handle(self, user_id: str | None, item_id: int) -> bool:
        """Delete the item; return False if there was nothing to delete.

        Another user's item is treated as absent.
        """
        user_id = ensure_user_id(user_id)
        item = self._cart_repo.get_by_id(item_id)
        if item is None or item.user_id != user_id:
            return False

        self._cart_repo.delete(item_id)
        logger.info("Cart item removed", user_id=user_id, item_id=item_id)
        return True
