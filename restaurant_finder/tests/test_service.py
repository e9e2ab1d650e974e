from unittest.mock import MagicMock

import pytest

from restaurant_finder.favorites.favorites_set import FavoritesSet
from restaurant_finder.favorites.store import InMemoryStore
from restaurant_finder.search.clock import FixedClock
from restaurant_finder.search.errors import LocationNotFound, ProviderUnavailable
from restaurant_finder.search.models import Coordinate, FilterCriteria, Restaurant
from restaurant_finder.search.provider import CandidateBatch
from restaurant_finder.search.service import search_restaurants

ORIGIN = Coordinate(latitude=0.0, longitude=0.0)


def _restaurant(rid: str, km_east: float, **overrides) -> Restaurant:
    fields = {
        "id": rid,
        "coordinate": Coordinate(latitude=0.0, longitude=km_east / 111.195),
        "cuisine": "Italian",
        "price_tier": "$$",
        "rating": 4.5,
        "opening_time": "11:00",
        "closing_time": "22:00",
    }
    fields.update(overrides)
    return Restaurant(**fields)


CANDIDATES = [
    _restaurant("R1", 2.0),
    _restaurant("R2", 1.0, cuisine="Mexican", rating=3.0, opening_time="06:00", closing_time="10:00"),
    _restaurant("R3", 1.0, rating=4.8),
]


def _provider(restaurants=CANDIDATES) -> MagicMock:
    provider = MagicMock()
    provider.fetch_candidates.return_value = CandidateBatch(origin=ORIGIN, restaurants=list(restaurants))
    return provider


def test_search_ranks_and_filters():
    provider = _provider()
    outcome = search_restaurants("Downtown", FilterCriteria(cuisine="Italian"), provider, FixedClock("12:00"))

    provider.fetch_candidates.assert_called_once_with("Downtown")
    assert outcome.result.ids() == ["R3", "R1"]
    assert outcome.origin == ORIGIN
    assert outcome.total_candidates == 3
    assert str(outcome.evaluated_at) == "12:00"


def test_search_open_now_uses_clock():
    outcome = search_restaurants(
        ORIGIN, FilterCriteria(open_now_only=True), _provider(), FixedClock("08:00")
    )
    assert outcome.result.ids() == ["R2"]


def test_favorites_only_intersects_in_rank_order():
    favorites = FavoritesSet(InMemoryStore())
    favorites.load()
    favorites.toggle("R1")
    favorites.toggle("R2")

    outcome = search_restaurants(
        ORIGIN, FilterCriteria(), _provider(), FixedClock("12:00"), favorites=favorites, favorites_only=True
    )
    assert outcome.result.ids() == ["R2", "R1"]


def test_favorites_only_without_favorites_is_empty():
    outcome = search_restaurants(ORIGIN, FilterCriteria(), _provider(), FixedClock("12:00"), favorites_only=True)
    assert len(outcome.result) == 0


@pytest.mark.parametrize("error", [ProviderUnavailable("down"), LocationNotFound("Nowhere")])
def test_provider_errors_propagate(error):
    provider = MagicMock()
    provider.fetch_candidates.side_effect = error
    with pytest.raises(type(error)):
        search_restaurants("Nowhere", FilterCriteria(), provider, FixedClock("12:00"))


def test_empty_candidate_batch_is_empty_result():
    outcome = search_restaurants(ORIGIN, FilterCriteria(), _provider([]), FixedClock("12:00"))
    assert outcome.result.ids() == []
    assert outcome.total_candidates == 0
