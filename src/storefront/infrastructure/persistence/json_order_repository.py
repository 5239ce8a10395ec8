"""JSON-file-backed implementation of OrderRepository.

Records use the storefront's order shape::

    {id, user_id, name, email, address, payment_method, total,
     items: [{product_name, quantity, price}], status, created_at}

Money is written as a decimal string.  A record missing a total, price
or quantity is rejected rather than read as zero.
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

from storefront.domain.exceptions import DomainException, PersistenceError
from storefront.domain.model.order import (
    Order,
    OrderLineItem,
    OrderStatus,
    ShippingDetails,
)
from storefront.domain.model.value_objects import Money, Quantity
from storefront.domain.repository.order_repository import OrderRepository
from storefront.infrastructure.persistence.json_store import JsonFileStore


class JsonOrderRepository(JsonFileStore, OrderRepository):

    def __init__(self, file_path: Path) -> None:
        super().__init__(file_path)

    # --- OrderRepository interface --------------------------------------------

    def next_id(self) -> int:
        orders = self._load_raw()
        if not orders:
            return 1
        return max(o["id"] for o in orders) + 1

    def get_by_id(self, order_id: int) -> Order | None:
        for raw in self._load_raw():
            if raw["id"] == order_id:
                return self._to_domain(raw)
        return None

    def list_for_user(self, user_id: str) -> list[Order]:
        return [self._to_domain(raw) for raw in self._load_raw() if raw["user_id"] == user_id]

    def list_all(self) -> list[Order]:
        return [self._to_domain(raw) for raw in self._load_raw()]

    def save(self, order: Order) -> None:
        with self._lock:
            if order.id is None:
                order.id = self.next_id()
            self._upsert("id", self._to_raw(order))

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: Order) -> dict:
        return {
            "id": order.id,
            "user_id": order.user_id,
            "name": order.shipping.name,
            "email": order.shipping.email,
            "address": order.shipping.address,
            "payment_method": order.payment_method,
            "total": str(order.total.amount),
            "items": [
                {
                    "product_name": item.product_name,
                    "quantity": item.quantity.value,
                    "price": str(item.price.amount),
                }
                for item in order.items
            ],
            "status": order.status.value,
            "created_at": order.created_at.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        try:
            items = tuple(
                OrderLineItem(
                    product_name=i["product_name"],
                    quantity=Quantity(i["quantity"]),
                    price=Money.of(i["price"]),
                )
                for i in raw["items"]
            )
            created_at = datetime.fromisoformat(raw["created_at"])
            if created_at.tzinfo is None:
                created_at = created_at.replace(tzinfo=timezone.utc)
            return Order(
                id=raw["id"],
                user_id=raw["user_id"],
                shipping=ShippingDetails(
                    name=raw.get("name") or "",
                    email=raw.get("email") or "",
                    address=raw["address"],
                ),
                payment_method=raw["payment_method"],
                items=items,
                total=Money.of(raw["total"]),
                status=OrderStatus.parse(raw["status"]),
                created_at=created_at,
            )
        except (KeyError, TypeError, ValueError, DomainException) as exc:
            raise PersistenceError(
                f"Malformed order record #{raw.get('id')}: {exc!r}"
            ) from exc
