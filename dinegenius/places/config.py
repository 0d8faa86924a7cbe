from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


@dataclass(frozen=True)
class PlacesConfig:
    api_key: str = os.getenv("GOOGLE_PLACES_API_KEY", "")
    base_url: str = "https://places.googleapis.com/v1"
    field_mask: str = (
        "places.id,places.displayName,places.formattedAddress,"
        "places.photos,places.googleMapsUri"
    )
    language: str = "zh-TW"
    photo_max_width: int = 400
    timeout: float = 5.0
    max_workers: int = 5
    enabled: bool = True


DEFAULT_PLACES_CONFIG = PlacesConfig()
