"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.  Repositories and the
ledger are built once per ``Settings`` so every handler shares the same
locks.
"""

from __future__ import annotations

from functools import lru_cache

from storefront.application.images import ImageResolver
from storefront.domain.service.inventory_ledger import InventoryLedger
from storefront.domain.service.locks import KeyedLock
from storefront.infrastructure.config import Settings
from storefront.infrastructure.persistence.json_cart_repository import JsonCartRepository
from storefront.infrastructure.persistence.json_order_repository import (
    JsonOrderRepository,
)
from storefront.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)
from storefront.infrastructure.persistence.json_user_repository import (
    JsonUserProfileRepository,
)


@lru_cache(maxsize=None)
def product_repository(settings: Settings) -> JsonProductRepository:
    return JsonProductRepository(settings.data_dir / "products.json")


@lru_cache(maxsize=None)
def cart_repository(settings: Settings) -> JsonCartRepository:
    return JsonCartRepository(settings.data_dir / "cart_items.json")


@lru_cache(maxsize=None)
def order_repository(settings: Settings) -> JsonOrderRepository:
    return JsonOrderRepository(settings.data_dir / "orders.json")


@lru_cache(maxsize=None)
def profile_repository(settings: Settings) -> JsonUserProfileRepository:
    return JsonUserProfileRepository(settings.data_dir / "user_profiles.json")


@lru_cache(maxsize=None)
def inventory_ledger(settings: Settings) -> InventoryLedger:
    return InventoryLedger(product_repository(settings))


@lru_cache(maxsize=None)
def cart_locks(settings: Settings) -> KeyedLock:
    return KeyedLock()


def image_resolver(settings: Settings) -> ImageResolver:
    return ImageResolver(
        base_url=settings.image_base_url,
        placeholder=settings.placeholder_image,
    )
