"""Application service: Save Profile use case (name, email, shipping address)."""

from __future__ import annotations

from storefront.application.session import ensure_user_id
from storefront.domain.model.user import UserProfile
from storefront.domain.repository.user_repository import UserProfileRepository


class SaveProfileHandler:

    def __init__(self, profile_repo: UserProfileRepository) -> None:
        self._profile_repo = profile_repo

    def handle(
        self,
        user_id: str | None,
        name: str | None = None,
        email: str | None = None,
        address: str | None = None,
    ) -> UserProfile:
        """Create or update a profile; fields left as None keep their value."""
        user_id = ensure_user_id(user_id)
        profile = self._profile_repo.get_by_id(user_id) or UserProfile(id=user_id)

        if name is not None:
            profile.name = name.strip()
        if email is not None:
            profile.email = email.strip()
        if address is not None:
            profile.address = address.strip()

        self._profile_repo.save(profile)
        return profile
