from __future__ import annotations

from fastapi import Depends, FastAPI, HTTPException

from .favorites.config import DEFAULT_FAVORITES_CONFIG
from .favorites.favorites_set import FavoritesSet
from .favorites.models import FavoritesResponse, ToggleResponse
from .favorites.store import JsonFileStore
from .search.clock import ClockSource, SystemClock
from .search.config import DEFAULT_SEARCH_CONFIG
from .search.errors import InputError, LocationNotFound, ProviderUnavailable
from .search.models import Coordinate, FilterCriteria, PriceTier, RestaurantOut, SearchResponse
from .search.open_status import restaurant_is_open
from .search.provider import CandidateProvider, DatasetCandidateProvider
from .search.service import search_restaurants

app = FastAPI(title="Restaurant Finder API", version="1.0.0")

_provider: CandidateProvider | None = None
_clock: ClockSource | None = None
_favorites: FavoritesSet | None = None


def get_provider() -> CandidateProvider:
    global _provider
    if _provider is None:
        _provider = DatasetCandidateProvider(DEFAULT_SEARCH_CONFIG)
    return _provider


def get_clock() -> ClockSource:
    global _clock
    if _clock is None:
        _clock = SystemClock(DEFAULT_SEARCH_CONFIG.timezone)
    return _clock


def get_favorites() -> FavoritesSet:
    """Return the process-wide favourites set, hydrating it on first call."""
    global _favorites
    if _favorites is None:
        _favorites = FavoritesSet(
            JsonFileStore(DEFAULT_FAVORITES_CONFIG.store_dir),
            key=DEFAULT_FAVORITES_CONFIG.storage_key,
        )
        _favorites.load()
    return _favorites


def _parse_price_tier(value: str | None) -> PriceTier | None:
    if value is None or value == "All":
        return None
    try:
        return PriceTier(value)
    except ValueError:
        raise HTTPException(status_code=422, detail=f"Unknown price tier {value!r}")


def _favorites_response(ids: frozenset[str]) -> FavoritesResponse:
    ordered = sorted(ids)
    return FavoritesResponse(ids=ordered, count=len(ordered))


# ── Endpoints ────────────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/restaurants", response_model=SearchResponse)
def restaurants(
    address: str | None = None,
    lat: float | None = None,
    lng: float | None = None,
    cuisine: str | None = None,
    price_tier: str | None = None,
    min_rating: float | None = None,
    open_now: bool = False,
    favorites_only: bool = False,
    provider: CandidateProvider = Depends(get_provider),
    clock: ClockSource = Depends(get_clock),
    favorites: FavoritesSet = Depends(get_favorites),
) -> SearchResponse:
    if lat is not None and lng is not None:
        query: str | Coordinate = Coordinate(latitude=lat, longitude=lng)
    elif address and address.strip():
        query = address
    else:
        raise HTTPException(status_code=400, detail="Provide an address or lat/lng")

    try:
        criteria = FilterCriteria(
            cuisine=None if cuisine in (None, "All") else cuisine,
            price_tier=_parse_price_tier(price_tier),
            min_rating=min_rating,
            open_now_only=open_now,
        )
    except InputError as exc:
        raise HTTPException(status_code=422, detail=str(exc))

    try:
        outcome = search_restaurants(
            query,
            criteria,
            provider,
            clock,
            favorites=favorites,
            favorites_only=favorites_only,
        )
    except LocationNotFound as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    except ProviderUnavailable as exc:
        raise HTTPException(status_code=503, detail=str(exc))
    except InputError as exc:
        raise HTTPException(status_code=400, detail=str(exc))

    now = outcome.evaluated_at
    items = [
        RestaurantOut(
            **item.restaurant.model_dump(),
            distance_km=round(item.distance_km, 3),
            is_open=restaurant_is_open(item.restaurant, now),
            is_favorite=favorites.contains(item.restaurant.id),
        )
        for item in outcome.result
    ]

    return SearchResponse(
        origin=outcome.origin,
        total_candidates=outcome.total_candidates,
        count=len(items),
        restaurants=items,
    )


@app.get("/favorites", response_model=FavoritesResponse)
def list_favorites(favorites: FavoritesSet = Depends(get_favorites)) -> FavoritesResponse:
    return _favorites_response(favorites.ids)


@app.post("/favorites/{restaurant_id}/toggle", response_model=ToggleResponse)
def toggle_favorite(
    restaurant_id: str,
    favorites: FavoritesSet = Depends(get_favorites),
) -> ToggleResponse:
    try:
        outcome = favorites.toggle_with_outcome(restaurant_id)
    except InputError as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    ordered = sorted(outcome.ids)
    return ToggleResponse(
        ids=ordered,
        count=len(ordered),
        is_favorite=outcome.is_favorite,
        persisted=outcome.persisted,
    )
