"""Cart model.

Two shapes live here on purpose:

* ``CartItem`` is what gets stored: a (user, product) reference and a
  quantity. It holds no product data.
* ``CartLine`` is the live join of a ``CartItem`` with the *current*
  product row, used for display and as checkout input. Prices in a
  ``CartLine`` follow the catalog; only an Order freezes them.
"""

from __future__ import annotations

from dataclasses import dataclass

from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money, Quantity


@dataclass
class CartItem:
    """One product in a user's cart. At most one per (user, product)."""

    id: int | None
    user_id: str
    product_id: str
    quantity: Quantity

    @staticmethod
    def new(user_id: str, product_id: str) -> CartItem:
        return CartItem(id=None, user_id=user_id, product_id=product_id, quantity=Quantity(1))

    def increment(self, delta: int = 1) -> None:
        # Quantity rejects a result below 1 before anything is assigned.
        self.quantity = self.quantity + delta

    def set_quantity(self, value: int) -> None:
        self.quantity = Quantity(value)


@dataclass(frozen=True)
class CartLine:
    """A cart item joined with current product data.

    Product fields are ``None`` when the referenced product no longer
    exists (an orphaned item).
    """

    item_id: int
    product_id: str
    quantity: int
    product_name: str | None = None
    unit_price: Money | None = None
    stock: int | None = None
    image_url: str | None = None

    @property
    def is_orphan(self) -> bool:
        return self.unit_price is None

    @property
    def subtotal(self) -> Money | None:
        if self.unit_price is None:
            return None
        return self.unit_price * self.quantity

    @staticmethod
    def join(item: CartItem, product: Product | None) -> CartLine:
        if product is None:
            return CartLine(
                item_id=item.id,  # type: ignore[arg-type]
                product_id=item.product_id,
                quantity=item.quantity.value,
            )
        return CartLine(
            item_id=item.id,  # type: ignore[arg-type]
            product_id=item.product_id,
            quantity=item.quantity.value,
            product_name=product.name,
            unit_price=product.price,
            stock=product.stock,
            image_url=product.image_url,
        )
