from __future__ import annotations

from pydantic import BaseModel


class FavoritesResponse(BaseModel):
    ids: list[str]
    count: int


class ToggleResponse(FavoritesResponse):
    is_favorite: bool
    persisted: bool
