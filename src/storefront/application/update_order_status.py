"""Application service: Update Order Status use case.

Entry point for the fulfillment side.  Status is the only field of an
order that ever changes; the Order aggregate decides which moves are
legal.
"""

from __future__ import annotations

import structlog

from storefront.application.dto import OrderDTO, order_to_dto
from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.order import OrderStatus
from storefront.domain.repository.order_repository import OrderRepository

logger = structlog.get_logger(__name__)


class UpdateOrderStatusHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, order_id: int, status: str) -> OrderDTO:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order #{order_id} not found")

        previous = order.status
        order.advance_to(OrderStatus.parse(status))
        self._order_repo.save(order)

        logger.info(
            "Order status changed",
            order_id=order_id,
            previous=previous.value,
            status=order.status.value,
        )
        return order_to_dto(order)
