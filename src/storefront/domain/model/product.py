"""Product aggregate.

Products live independently of carts and orders. Their name, price and
description are edited by the store-management side; their stock counter
is shared mutable state that only the Inventory Ledger writes.
"""

from __future__ import annotations

from dataclasses import dataclass

from storefront.domain.exceptions import InsufficientStockError, ValidationError
from storefront.domain.model.value_objects import Money


@dataclass
class Product:
    """A product in the catalog.

    Invariant: ``stock`` is never negative.
    """

    id: str
    name: str
    price: Money
    stock: int = 0
    description: str = ""
    image_url: str | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.stock, int) or self.stock < 0:
            raise ValidationError(
                f"Stock for {self.name} must be a non-negative integer, got {self.stock!r}"
            )

    def decrement_stock(self, quantity: int) -> int:
        """Take ``quantity`` units out of stock and return the new level.

        Raises InsufficientStockError (stock unchanged) if fewer than
        ``quantity`` units remain.
        """
        if quantity <= 0:
            raise ValidationError("Reservation quantity must be positive")
        if quantity > self.stock:
            raise InsufficientStockError(
                product_id=self.id,
                product_name=self.name,
                requested=quantity,
                available=self.stock,
            )
        self.stock -= quantity
        return self.stock

    def increment_stock(self, quantity: int) -> int:
        """Put units back into stock (compensation for a failed checkout)."""
        if quantity <= 0:
            raise ValidationError("Release quantity must be positive")
        self.stock += quantity
        return self.stock

    def update_price(self, new_price: Money) -> None:
        """Change the product price.

        This does NOT affect any existing orders because orders
        capture a price snapshot at creation time.
        """
        self.price = new_price

    def rename(self, new_name: str) -> None:
        if not new_name or not new_name.strip():
            raise ValidationError("Product name is required")
        self.name = new_name.strip()
