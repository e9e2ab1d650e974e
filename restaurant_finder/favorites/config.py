from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


@dataclass(frozen=True)
class FavoritesConfig:
    store_dir: Path = Path(
        os.getenv("FAVORITES_DIR", str(Path(__file__).resolve().parent.parent / "data" / "favorites"))
    )
    storage_key: str = "restaurant-finder-favorites"


DEFAULT_FAVORITES_CONFIG = FavoritesConfig()
