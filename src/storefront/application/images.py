"""Resolve a product's stored image reference into a display URL."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ImageResolver:
    base_url: str = ""
    placeholder: str = "/placeholder.png"

    def resolve(self, image_ref: str | None) -> str:
        if not image_ref:
            return self.placeholder
        if image_ref.startswith(("http://", "https://")):
            return image_ref
        if not self.base_url:
            return image_ref
        return f"{self.base_url.rstrip('/')}/{image_ref.lstrip('/')}"
