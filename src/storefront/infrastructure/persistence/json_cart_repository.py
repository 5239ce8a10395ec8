"""JSON-file-backed implementation of CartRepository."""

from __future__ import annotations

from pathlib import Path

from storefront.domain.model.cart import CartItem
from storefront.domain.model.value_objects import Quantity
from storefront.domain.repository.cart_repository import CartRepository
from storefront.infrastructure.persistence.json_store import JsonFileStore


class JsonCartRepository(JsonFileStore, CartRepository):

    def __init__(self, file_path: Path) -> None:
        super().__init__(file_path)

    # --- CartRepository interface ---------------------------------------------

    def get_by_id(self, item_id: int) -> CartItem | None:
        for raw in self._load_raw():
            if raw["id"] == item_id:
                return self._to_domain(raw)
        return None

    def get_by_user_and_product(self, user_id: str, product_id: str) -> CartItem | None:
        for raw in self._load_raw():
            if raw["user_id"] == user_id and raw["product_id"] == product_id:
                return self._to_domain(raw)
        return None

    def list_for_user(self, user_id: str) -> list[CartItem]:
        items = [self._to_domain(raw) for raw in self._load_raw() if raw["user_id"] == user_id]
        return sorted(items, key=lambda item: item.id)

    def save(self, item: CartItem) -> None:
        with self._lock:
            if item.id is None:
                records = self._load_raw()
                item.id = max((raw["id"] for raw in records), default=0) + 1
            self._upsert("id", self._to_raw(item))

    def delete(self, item_id: int) -> None:
        with self._lock:
            records = self._load_raw()
            kept = [raw for raw in records if raw["id"] != item_id]
            if len(kept) != len(records):
                self._persist_raw(kept)

    def delete_for_user(self, user_id: str) -> None:
        with self._lock:
            records = self._load_raw()
            kept = [raw for raw in records if raw["user_id"] != user_id]
            if len(kept) != len(records):
                self._persist_raw(kept)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(item: CartItem) -> dict:
        return {
            "id": item.id,
            "user_id": item.user_id,
            "product_id": item.product_id,
            "quantity": item.quantity.value,
        }

    @staticmethod
    def _to_domain(raw: dict) -> CartItem:
        return CartItem(
            id=raw["id"],
            user_id=raw["user_id"],
            product_id=raw["product_id"],
            quantity=Quantity(raw["quantity"]),
        )
