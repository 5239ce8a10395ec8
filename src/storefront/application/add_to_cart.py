"""Application service: Add to Cart use case.

Adds one unit of a product to the user's cart, creating the cart item
on first add and incrementing it afterwards.
"""

from __future__ import annotations

import structlog

from storefront.application.dto import CartLineDTO, cart_line_to_dto
from storefront.application.session import ensure_user_id
from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.cart import CartItem, CartLine
from storefront.domain.repository.cart_repository import CartRepository
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.service.locks import KeyedLock

logger = structlog.get_logger(__name__)


class AddToCartHandler:

    def __init__(
        self,
        cart_repo: CartRepository,
        product_repo: ProductRepository,
        locks: KeyedLock | None = None,
    ) -> None:
        self._cart_repo = cart_repo
        self._product_repo = product_repo
        self._locks = locks or KeyedLock()

    def handle(self, user_id: str | None, product_id: str) -> CartLineDTO:
        user_id = ensure_user_id(user_id)

        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")

        # One item per (user, product): lookup and insert must not interleave
        with self._locks.hold((user_id, product_id)):
            item = self._cart_repo.get_by_user_and_product(user_id, product_id)
            if item is None:
                item = CartItem.new(user_id, product_id)
            else:
                item.increment()
            self._cart_repo.save(item)

        logger.info(
            "Cart item added",
            user_id=user_id,
            product_id=product_id,
            quantity=item.quantity.value,
        )
        return cart_line_to_dto(CartLine.join(item, product))
