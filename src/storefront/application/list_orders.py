"""Application service: Order History use case (query).

Lists a user's orders newest first, optionally filtered by status.
Line items are matched back to the *current* catalog by product name to
find a display image; a product that has since been renamed or deleted
gets the placeholder image.  Nothing else about the order comes from the
catalog: names, prices and totals are the order's own snapshot.
"""

from __future__ import annotations

from storefront.application.dto import OrderDTO, order_to_dto
from storefront.application.images import ImageResolver
from storefront.application.session import ensure_user_id
from storefront.domain.model.order import Order, OrderStatus
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_repository import ProductRepository

ALL_STATUSES = "All"


class ListOrdersHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
        images: ImageResolver | None = None,
    ) -> None:
        self._order_repo = order_repo
        self._product_repo = product_repo
        self._images = images or ImageResolver()

    def handle(self, user_id: str | None, status_filter: str | None = None) -> list[OrderDTO]:
        user_id = ensure_user_id(user_id)
        wanted = _parse_filter(status_filter)

        orders = self._order_repo.list_for_user(user_id)
        if wanted is not None:
            orders = [o for o in orders if o.status == wanted]
        orders.sort(key=_newest_first, reverse=True)

        image_refs = {p.name: p.image_url for p in self._product_repo.list_all()}
        return [
            order_to_dto(order, self._display_images(order, image_refs))
            for order in orders
        ]

    def _display_images(
        self, order: Order, image_refs: dict[str, str | None]
    ) -> dict[str, str]:
        return {
            item.product_name: self._images.resolve(image_refs.get(item.product_name))
            for item in order.items
        }


def _parse_filter(status_filter: str | None) -> OrderStatus | None:
    if status_filter is None or status_filter.strip().lower() == ALL_STATUSES.lower():
        return None
    return OrderStatus.parse(status_filter)


def _newest_first(order: Order) -> tuple:
    return (order.created_at, order.id or 0)
