"""Application service: Show Cart use case (query).

Builds the live cart snapshot: every item joined with the product as it
is *now*.  A product deleted from the catalog leaves an orphan line with
empty product fields instead of failing the whole cart.
"""

from __future__ import annotations

from storefront.application.dto import CartDTO, cart_line_to_dto
from storefront.application.session import ensure_user_id
from storefront.domain.model.cart import CartLine
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.cart_repository import CartRepository
from storefront.domain.repository.product_repository import ProductRepository


def cart_snapshot(
    cart_repo: CartRepository,
    product_repo: ProductRepository,
    user_id: str,
) -> list[CartLine]:
    return [
        CartLine.join(item, product_repo.get_by_id(item.product_id))
        for item in cart_repo.list_for_user(user_id)
    ]


class ShowCartHandler:

    def __init__(
        self,
        cart_repo: CartRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._cart_repo = cart_repo
        self._product_repo = product_repo

    def handle(self, user_id: str | None) -> CartDTO:
        user_id = ensure_user_id(user_id)
        lines = cart_snapshot(self._cart_repo, self._product_repo, user_id)

        total = Money.zero()
        for line in lines:
            if line.subtotal is not None:
                total = total + line.subtotal

        return CartDTO(
            user_id=user_id,
            lines=[cart_line_to_dto(line) for line in lines],
            total=str(total.rounded()),
        )
