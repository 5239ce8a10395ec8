"""Application service: Sales Summary use case (admin dashboard query)."""

from __future__ import annotations

from storefront.application.dto import SalesSummaryDTO
from storefront.domain.model.order import OrderStatus
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.order_repository import OrderRepository


class SalesSummaryHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self) -> SalesSummaryDTO:
        orders = self._order_repo.list_all()

        total = Money.zero()
        by_status = {status.value: 0 for status in OrderStatus}
        for order in orders:
            total = total + order.total
            by_status[order.status.value] += 1

        return SalesSummaryDTO(
            order_count=len(orders),
            total_sales=str(total.rounded()),
            by_status=by_status,
        )
