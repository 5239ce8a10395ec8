"""Abstract repository for CartItem records."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.cart import CartItem


class CartRepository(ABC):

    @abstractmethod
    def get_by_id(self, item_id: int) -> CartItem | None:
        """Return a cart item by its ID, or None if not found."""

    @abstractmethod
    def get_by_user_and_product(self, user_id: str, product_id: str) -> CartItem | None:
        """Return the user's item for a product, or None."""

    @abstractmethod
    def list_for_user(self, user_id: str) -> list[CartItem]:
        """Return the user's items ordered by item ID."""

    @abstractmethod
    def save(self, item: CartItem) -> None:
        """Persist a new or updated item, assigning an ID to new ones."""

    @abstractmethod
    def delete(self, item_id: int) -> None:
        """Delete an item; a no-op if it does not exist."""

    @abstractmethod
    def delete_for_user(self, user_id: str) -> None:
        """Delete every item in the user's cart."""
