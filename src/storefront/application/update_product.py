"""Application service: Update Product use case."""

from __future__ import annotations

from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.product_repository import ProductRepository


class UpdateProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        product_id: str,
        name: str | None = None,
        price: str | None = None,
        description: str | None = None,
    ) -> Product:
        """Edit a product's catalog fields.

        This does NOT affect any existing orders — they captured a
        snapshot at creation time.  Stock is not editable here; only the
        Inventory Ledger writes it.
        """
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")

        if name is not None:
            product.rename(name)
        if price is not None:
            product.update_price(Money.of(price))
        if description is not None:
            product.description = description

        self._product_repo.save(product)
        return product
