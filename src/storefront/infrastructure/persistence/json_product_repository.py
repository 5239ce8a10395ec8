"""JSON-file-backed implementation of ProductRepository."""

from __future__ import annotations

from pathlib import Path

from storefront.domain.exceptions import (
    DomainException,
    EntityNotFoundError,
    PersistenceError,
)
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.product_repository import ProductRepository
from storefront.infrastructure.persistence.json_store import JsonFileStore


class JsonProductRepository(JsonFileStore, ProductRepository):

    def __init__(self, file_path: Path) -> None:
        super().__init__(file_path)

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: str) -> Product | None:
        for raw in self._load_raw():
            if raw.get("id") == product_id:
                return self._to_domain(raw)
        return None

    def get_by_name(self, name: str) -> Product | None:
        for raw in self._load_raw():
            if str(raw.get("name", "")).lower() == name.lower():
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[Product]:
        return [self._to_domain(raw) for raw in self._load_raw()]

    def save(self, product: Product) -> None:
        self._upsert("id", self._to_raw(product))

    def update_stock(self, product_id: str, stock: int) -> None:
        with self._lock:
            records = self._load_raw()
            for raw in records:
                if raw.get("id") == product_id:
                    raw["stock"] = stock
                    break
            else:
                raise EntityNotFoundError(f"Product with ID '{product_id}' not found")
            self._persist_raw(records)

    def delete(self, product_id: str) -> None:
        with self._lock:
            records = self._load_raw()
            kept = [raw for raw in records if raw.get("id") != product_id]
            if len(kept) != len(records):
                self._persist_raw(kept)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(product: Product) -> dict:
        return {
            "id": product.id,
            "name": product.name,
            "price": str(product.price.amount),
            "stock": product.stock,
            "description": product.description,
            "image_url": product.image_url,
        }

    @staticmethod
    def _to_domain(raw: dict) -> Product:
        try:
            return Product(
                id=raw["id"],
                name=raw["name"],
                price=Money.of(raw["price"]),
                stock=raw.get("stock", 0),
                description=raw.get("description") or "",
                image_url=raw.get("image_url"),
            )
        except (KeyError, TypeError, DomainException) as exc:
            raise PersistenceError(
                f"Malformed product record {raw.get('id')!r}: {exc!r}"
            ) from exc
