"""Abstract repository for user profiles."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.user import UserProfile


class UserProfileRepository(ABC):

    @abstractmethod
    def get_by_id(self, user_id: str) -> UserProfile | None:
        """Return the profile for a user, or None."""

    @abstractmethod
    def save(self, profile: UserProfile) -> None:
        """Persist a new or updated profile."""
