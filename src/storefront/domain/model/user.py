"""User profile as supplied by the profile collaborator."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class UserProfile:
    id: str
    name: str = ""
    email: str = ""
    address: str = ""

    @property
    def has_address(self) -> bool:
        return bool(self.address and self.address.strip())
