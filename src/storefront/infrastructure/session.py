"""Session provider backed by the profile store.

The CLI has no login flow; the user is named with ``--user`` (or
``STOREFRONT_USER``) and must have a saved profile.
"""

from __future__ import annotations

from storefront.application.session import SessionProvider
from storefront.domain.model.user import UserProfile
from storefront.domain.repository.user_repository import UserProfileRepository


class ProfileSessionProvider(SessionProvider):

    def __init__(self, user_id: str | None, profile_repo: UserProfileRepository) -> None:
        self._user_id = user_id
        self._profile_repo = profile_repo

    def current_user(self) -> UserProfile | None:
        if not self._user_id:
            return None
        return self._profile_repo.get_by_id(self._user_id)
