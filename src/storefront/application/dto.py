"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.  Money values are
pre-formatted strings.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from storefront.domain.model.cart import CartLine
from storefront.domain.model.order import Order


@dataclass(frozen=True)
class CartLineDTO:
    """A cart line at current catalog prices. Product fields are None for orphans."""

    item_id: int
    product_id: str
    quantity: int
    product_name: str | None
    unit_price: str | None
    subtotal: str | None
    stock: int | None
    image_url: str | None


@dataclass(frozen=True)
class CartDTO:
    user_id: str
    lines: list[CartLineDTO]
    total: str

    @property
    def is_empty(self) -> bool:
        return not self.lines


@dataclass(frozen=True)
class OrderLineItemDTO:
    """A single line item as displayed to the user."""

    product_name: str
    quantity: int
    unit_price: str
    line_total: str
    image_url: str | None = None


@dataclass(frozen=True)
class OrderDTO:
    """A complete order as displayed to the user."""

    id: int
    user_id: str
    name: str
    email: str
    address: str
    payment_method: str
    status: str
    items: list[OrderLineItemDTO]
    total: str
    created_at: str


@dataclass(frozen=True)
class PlaceOrderResult:
    order: OrderDTO
    skipped_products: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class SalesSummaryDTO:
    order_count: int
    total_sales: str
    by_status: dict[str, int]


# --- Mapping ------------------------------------------------------------------


def cart_line_to_dto(line: CartLine) -> CartLineDTO:
    return CartLineDTO(
        item_id=line.item_id,
        product_id=line.product_id,
        quantity=line.quantity,
        product_name=line.product_name,
        unit_price=str(line.unit_price) if line.unit_price is not None else None,
        subtotal=str(line.subtotal) if line.subtotal is not None else None,
        stock=line.stock,
        image_url=line.image_url,
    )


def order_to_dto(order: Order, images: dict[str, str] | None = None) -> OrderDTO:
    """Map an Order to its DTO; ``images`` maps product name -> display URL."""
    images = images or {}
    return OrderDTO(
        id=order.id,  # type: ignore[arg-type]
        user_id=order.user_id,
        name=order.shipping.name,
        email=order.shipping.email,
        address=order.shipping.address,
        payment_method=order.payment_method,
        status=order.status.value,
        items=[
            OrderLineItemDTO(
                product_name=item.product_name,
                quantity=item.quantity.value,
                unit_price=str(item.price),
                line_total=str(item.line_total),
                image_url=images.get(item.product_name),
            )
            for item in order.items
        ],
        total=str(order.total),
        created_at=order.created_at.strftime("%Y-%m-%d %H:%M UTC"),
    )
