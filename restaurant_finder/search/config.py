from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")

_DATA_DIR = Path(__file__).resolve().parent.parent / "data"


@dataclass(frozen=True)
class SearchConfig:
    catalogue_path: Path = Path(os.getenv("RESTAURANT_CATALOGUE", str(_DATA_DIR / "restaurants.csv")))
    search_radius_km: float = float(os.getenv("SEARCH_RADIUS_KM", "10.0"))
    timezone: str = os.getenv("RESTAURANT_TIMEZONE", "UTC")


DEFAULT_SEARCH_CONFIG = SearchConfig()
