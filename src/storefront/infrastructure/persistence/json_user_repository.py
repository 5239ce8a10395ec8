"""JSON-file-backed implementation of UserProfileRepository."""

from __future__ import annotations

from pathlib import Path

from storefront.domain.model.user import UserProfile
from storefront.domain.repository.user_repository import UserProfileRepository
from storefront.infrastructure.persistence.json_store import JsonFileStore


class JsonUserProfileRepository(JsonFileStore, UserProfileRepository):

    def __init__(self, file_path: Path) -> None:
        super().__init__(file_path)

    def get_by_id(self, user_id: str) -> UserProfile | None:
        for raw in self._load_raw():
            if raw["id"] == user_id:
                return UserProfile(
                    id=raw["id"],
                    name=raw.get("name") or "",
                    email=raw.get("email") or "",
                    address=raw.get("address") or "",
                )
        return None

    def save(self, profile: UserProfile) -> None:
        self._upsert(
            "id",
            {
                "id": profile.id,
                "name": profile.name,
                "email": profile.email,
                "address": profile.address,
            },
        )
