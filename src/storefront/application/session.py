"""Session port: who is making the request.

Handlers never read a "current user" themselves; callers resolve the
session once and pass the user ID in explicitly.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.exceptions import UnauthenticatedError
from storefront.domain.model.user import UserProfile


class SessionProvider(ABC):

    @abstractmethod
    def current_user(self) -> UserProfile | None:
        """Return the signed-in user, or None."""


def require_user(session: SessionProvider) -> str:
    user = session.current_user()
    if user is None:
        raise UnauthenticatedError("Please log in first")
    return user.id


def ensure_user_id(user_id: str | None) -> str:
    if not user_id:
        raise UnauthenticatedError("Please log in first")
    return user_id
