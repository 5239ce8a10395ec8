"""Runtime configuration, read from the environment (and a ``.env`` file)."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from storefront.domain.service.inventory_ledger import ReservationPolicy


@dataclass(frozen=True)
class Settings:
    data_dir: Path = Path("data")
    reservation_policy: ReservationPolicy = ReservationPolicy.STRICT
    log_level: str = "WARNING"
    image_base_url: str = ""
    placeholder_image: str = "/placeholder.png"

    @staticmethod
    def from_env() -> Settings:
        load_dotenv()
        policy = os.getenv("STOREFRONT_RESERVATION_POLICY", "strict").strip().lower()
        try:
            reservation_policy = ReservationPolicy(policy)
        except ValueError:
            raise ValueError(
                f"STOREFRONT_RESERVATION_POLICY must be 'strict' or 'lenient', got {policy!r}"
            ) from None

        return Settings(
            data_dir=Path(os.getenv("STOREFRONT_DATA_DIR", "data")),
            reservation_policy=reservation_policy,
            log_level=os.getenv("STOREFRONT_LOG_LEVEL", "WARNING").upper(),
            image_base_url=os.getenv("STOREFRONT_IMAGE_BASE_URL", ""),
            placeholder_image=os.getenv("STOREFRONT_PLACEHOLDER_IMAGE", "/placeholder.png"),
        )
