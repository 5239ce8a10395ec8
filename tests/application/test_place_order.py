"""Integration tests for the PlaceOrder (checkout) use case.

The default reservation policy is STRICT: a checkout either reserves
stock for every product or fails without touching stock, the cart or the
order store.  LENIENT keeps the original storefront behavior of skipping
products without enough stock and placing the order anyway.
"""

from decimal import Decimal

import pytest

from storefront.application.add_to_cart import AddToCartHandler
from storefront.application.place_order import PlaceOrderHandler
from storefront.application.update_cart_item import UpdateCartItemHandler
from storefront.domain.exceptions import (
    EmptyCartError,
    EntityNotFoundError,
    InsufficientStockError,
    MissingAddressError,
    PersistenceError,
    UnauthenticatedError,
)
from storefront.domain.model.order import OrderStatus
from storefront.domain.model.product import Product
from storefront.domain.model.user import UserProfile
from storefront.domain.model.value_objects import Money
from storefront.domain.service.inventory_ledger import InventoryLedger, ReservationPolicy
from tests.fakes import (
    FailingClearCartRepository,
    FailingOrderRepository,
    FailingStockWriteRepository,
    FakeCartRepository,
    FakeOrderRepository,
    FakeProductRepository,
    FakeUserProfileRepository,
)


def _setup(
    stock_b: int = 1,
    policy: ReservationPolicy = ReservationPolicy.STRICT,
    address: str = "12 Mabini St, Manila",
    order_repo: FakeOrderRepository | None = None,
    cart_repo: FakeCartRepository | None = None,
    fail_stock_on: str | None = None,
):
    """Cart: A (price 100, stock 3, qty 2) and B (price 50, stock ``stock_b``, qty 1)."""
    products = [
        Product(id="A", name="A", price=Money.of("100"), stock=3),
        Product(id="B", name="B", price=Money.of("50"), stock=stock_b),
    ]
    if fail_stock_on is None:
        product_repo = FakeProductRepository(products)
    else:
        product_repo = FailingStockWriteRepository(products, fail_on=fail_stock_on)
    cart_repo = cart_repo or FakeCartRepository()
    order_repo = order_repo or FakeOrderRepository()
    profile_repo = FakeUserProfileRepository([
        UserProfile(id="u1", name="Ana Cruz", email="ana@example.com", address=address),
    ])

    add = AddToCartHandler(cart_repo, product_repo)
    add.handle("u1", "A")
    add.handle("u1", "A")
    add.handle("u1", "B")

    handler = PlaceOrderHandler(
        order_repo=order_repo,
        cart_repo=cart_repo,
        product_repo=product_repo,
        profile_repo=profile_repo,
        ledger=InventoryLedger(product_repo),
        policy=policy,
    )
    return handler, order_repo, cart_repo, product_repo


def _cart_contents(cart_repo, user_id="u1"):
    return [(i.product_id, i.quantity.value) for i in cart_repo.list_for_user(user_id)]


class TestPlaceOrderHappyPath:

    def test_creates_pending_order_and_decrements_stock(self):
        handler, order_repo, cart_repo, product_repo = _setup()

        result = handler.handle("u1")

        dto = result.order
        assert dto.total == "₱250.00"
        assert dto.status == "Pending"
        assert len(dto.items) == 2
        assert dto.name == "Ana Cruz"
        assert dto.email == "ana@example.com"
        assert dto.address == "12 Mabini St, Manila"
        assert dto.payment_method == "cod"
        assert result.skipped_products == []

        assert product_repo.stock_of("A") == 1
        assert product_repo.stock_of("B") == 0
        assert cart_repo.list_for_user("u1") == []

        saved = order_repo.get_by_id(dto.id)
        assert saved.status == OrderStatus.PENDING

    def test_total_equals_sum_of_line_items(self):
        handler, order_repo, _, _ = _setup()
        dto = handler.handle("u1").order

        order = order_repo.get_by_id(dto.id)
        line_sum = sum(
            (item.price.amount * item.quantity.value for item in order.items), Decimal("0")
        )
        assert order.total.amount == line_sum.quantize(Decimal("0.01"))

    def test_explicit_address_overrides_profile(self):
        handler, _, _, _ = _setup()
        dto = handler.handle("u1", shipping_address="Lot 4, Cebu City").order
        assert dto.address == "Lot 4, Cebu City"

    def test_other_users_cart_untouched(self):
        handler, _, cart_repo, product_repo = _setup()
        AddToCartHandler(cart_repo, product_repo).handle("u2", "A")

        handler.handle("u1")

        assert _cart_contents(cart_repo, "u2") == [("A", 1)]


class TestPlaceOrderSnapshot:

    def test_product_edits_do_not_change_existing_orders(self):
        handler, order_repo, _, product_repo = _setup()
        dto = handler.handle("u1").order

        product = product_repo.get_by_id("A")
        product.rename("A (2025 edition)")
        product.update_price(Money.of("999"))
        product.description = "changed"
        product_repo.save(product)
        product_repo.delete("B")

        order = order_repo.get_by_id(dto.id)
        assert [(i.product_name, i.price, i.quantity.value) for i in order.items] == [
            ("A", Money.of("100"), 2),
            ("B", Money.of("50"), 1),
        ]
        assert order.total == Money.of("250")


class TestPlaceOrderPreconditions:

    def test_unauthenticated_rejected(self):
        handler, _, cart_repo, _ = _setup()
        with pytest.raises(UnauthenticatedError):
            handler.handle(None)
        assert len(cart_repo.list_for_user("u1")) == 2

    def test_missing_address_rejected_without_side_effects(self):
        handler, order_repo, cart_repo, product_repo = _setup(address="")

        with pytest.raises(MissingAddressError, match="shipping address"):
            handler.handle("u1")

        assert order_repo.list_all() == []
        assert _cart_contents(cart_repo) == [("A", 2), ("B", 1)]
        assert product_repo.stock_of("A") == 3

    def test_empty_cart_rejected(self):
        handler, order_repo, cart_repo, _ = _setup()
        cart_repo.delete_for_user("u1")

        with pytest.raises(EmptyCartError, match="empty"):
            handler.handle("u1")
        assert order_repo.list_all() == []

    def test_missing_address_checked_before_empty_cart(self):
        handler, _, cart_repo, _ = _setup(address="   ")
        cart_repo.delete_for_user("u1")

        with pytest.raises(MissingAddressError):
            handler.handle("u1")

    def test_deleted_product_in_cart_rejected_without_side_effects(self):
        handler, order_repo, cart_repo, product_repo = _setup()
        product_repo.delete("B")

        with pytest.raises(EntityNotFoundError, match="no longer exists"):
            handler.handle("u1")

        assert order_repo.list_all() == []
        assert product_repo.stock_of("A") == 3
        assert _cart_contents(cart_repo) == [("A", 2), ("B", 1)]


class TestPlaceOrderStrictPolicy:

    def test_out_of_stock_fails_whole_checkout(self):
        handler, order_repo, cart_repo, product_repo = _setup(stock_b=0)

        with pytest.raises(InsufficientStockError, match="Insufficient stock for B") as info:
            handler.handle("u1")

        assert info.value.product_id == "B"
        assert order_repo.list_all() == []
        assert product_repo.stock_of("A") == 3
        assert product_repo.stock_of("B") == 0
        assert _cart_contents(cart_repo) == [("A", 2), ("B", 1)]

    def test_quantity_above_stock_fails(self):
        handler, _, cart_repo, product_repo = _setup()
        item = cart_repo.get_by_user_and_product("u1", "A")
        UpdateCartItemHandler(cart_repo).handle("u1", item.id, 4)

        with pytest.raises(InsufficientStockError, match="need 4, have 3"):
            handler.handle("u1")
        assert product_repo.stock_of("A") == 3
        assert product_repo.stock_of("B") == 1


class TestPlaceOrderLenientPolicy:

    def test_out_of_stock_item_skipped_order_still_placed(self):
        handler, order_repo, cart_repo, product_repo = _setup(
            stock_b=0, policy=ReservationPolicy.LENIENT
        )

        result = handler.handle("u1")

        assert result.order.total == "₱250.00"
        assert len(result.order.items) == 2
        assert result.skipped_products == ["B"]
        assert product_repo.stock_of("A") == 1
        assert product_repo.stock_of("B") == 0
        assert cart_repo.list_for_user("u1") == []
        assert len(order_repo.list_all()) == 1


class TestPlaceOrderPersistenceFailure:

    @pytest.mark.parametrize("policy", list(ReservationPolicy))
    def test_cart_kept_and_stock_restored(self, policy):
        handler, _, cart_repo, product_repo = _setup(
            policy=policy, order_repo=FailingOrderRepository()
        )
        before = _cart_contents(cart_repo)

        with pytest.raises(PersistenceError, match="disk full"):
            handler.handle("u1")

        assert _cart_contents(cart_repo) == before
        assert product_repo.stock_of("A") == 3
        assert product_repo.stock_of("B") == 1

    @pytest.mark.parametrize("policy", list(ReservationPolicy))
    def test_stock_write_failure_on_second_product(self, policy):
        handler, order_repo, cart_repo, product_repo = _setup(
            policy=policy, fail_stock_on="B"
        )
        before = _cart_contents(cart_repo)

        with pytest.raises(PersistenceError, match="products.json"):
            handler.handle("u1")

        assert product_repo.stock_of("A") == 3
        assert product_repo.stock_of("B") == 1
        assert _cart_contents(cart_repo) == before
        assert order_repo.list_all() == []

    def test_retry_after_failure_succeeds(self):
        order_repo = FakeOrderRepository()
        handler, _, cart_repo, product_repo = _setup(order_repo=FailingOrderRepository())
        with pytest.raises(PersistenceError):
            handler.handle("u1")

        # Same cart, working storage
        retry = PlaceOrderHandler(
            order_repo=order_repo,
            cart_repo=cart_repo,
            product_repo=product_repo,
            profile_repo=FakeUserProfileRepository([
                UserProfile(id="u1", name="Ana", email="a@example.com", address="Manila"),
            ]),
            ledger=InventoryLedger(product_repo),
        )
        result = retry.handle("u1")

        assert result.order.total == "₱250.00"
        assert product_repo.stock_of("A") == 1

    def test_cart_clear_failure_still_returns_order(self):
        handler, order_repo, cart_repo, _ = _setup(cart_repo=FailingClearCartRepository())

        result = handler.handle("u1")

        assert order_repo.get_by_id(result.order.id) is not None
        assert len(cart_repo.list_for_user("u1")) == 2
