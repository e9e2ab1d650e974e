from pathlib import Path

import pytest

from restaurant_finder.search.config import SearchConfig
from restaurant_finder.search.errors import InputError, LocationNotFound, ProviderUnavailable
from restaurant_finder.search.models import Coordinate
from restaurant_finder.search.provider import CATALOGUE_COLUMNS, DatasetCandidateProvider

HEADER = ",".join(CATALOGUE_COLUMNS)
ROWS = [
    "a,Alpha,1 A St,Springfield,Downtown,10.0,20.0,Italian,$$,4.5,11:00,22:00",
    "b,Beta,2 B St,Springfield,Riverside,10.02,20.0,Thai,$,4.0,,",
    "c,Gamma,3 C St,Shelbyville,Old Town,12.0,22.0,Mexican,$$$,3.5,22:00,02:00",
]


def _write_catalogue(tmp_path: Path, rows: list[str]) -> Path:
    path = tmp_path / "restaurants.csv"
    path.write_text("\n".join([HEADER, *rows]) + "\n")
    return path


def _provider(tmp_path: Path, rows: list[str] = ROWS, radius: float = 10.0) -> DatasetCandidateProvider:
    config = SearchConfig(catalogue_path=_write_catalogue(tmp_path, rows), search_radius_km=radius)
    return DatasetCandidateProvider(config)


def test_address_query_matches_city_case_insensitively(tmp_path: Path):
    batch = _provider(tmp_path).fetch_candidates("springfield")
    assert [r.id for r in batch.restaurants] == ["a", "b"]
    assert batch.origin.latitude == pytest.approx(10.01)
    assert batch.origin.longitude == pytest.approx(20.0)


def test_address_query_matches_locality(tmp_path: Path):
    batch = _provider(tmp_path).fetch_candidates("Old Town")
    assert [r.id for r in batch.restaurants] == ["c"]


def test_rows_are_parsed_into_restaurants(tmp_path: Path):
    batch = _provider(tmp_path).fetch_candidates("Springfield")
    alpha, beta = batch.restaurants
    assert alpha.name == "Alpha"
    assert alpha.price_tier.value == "$$"
    assert str(alpha.opening_time) == "11:00"
    assert beta.opening_time is None and beta.closing_time is None


def test_coordinate_query_uses_radius(tmp_path: Path):
    provider = _provider(tmp_path, radius=5.0)
    origin = Coordinate(latitude=10.0, longitude=20.0)
    batch = provider.fetch_candidates(origin)
    assert batch.origin == origin
    assert [r.id for r in batch.restaurants] == ["a", "b"]


def test_unknown_location_is_not_found(tmp_path: Path):
    provider = _provider(tmp_path)
    with pytest.raises(LocationNotFound):
        provider.fetch_candidates("Capital City")
    with pytest.raises(LocationNotFound):
        provider.fetch_candidates(Coordinate(latitude=-40.0, longitude=100.0))


def test_blank_address_is_rejected(tmp_path: Path):
    with pytest.raises(InputError):
        _provider(tmp_path).fetch_candidates("   ")


def test_missing_catalogue_is_unavailable(tmp_path: Path):
    provider = DatasetCandidateProvider(SearchConfig(catalogue_path=tmp_path / "nope.csv"))
    with pytest.raises(ProviderUnavailable):
        provider.fetch_candidates("Springfield")


def test_undecodable_catalogue_is_unavailable(tmp_path: Path):
    path = tmp_path / "restaurants.csv"
    path.write_bytes(HEADER.encode() + b"\n" + b"z,Caf\xff\xfe\xfa,1 Z St,Oakland,Uptown,10.0,20.0,French,$$,4.0,,\n")
    provider = DatasetCandidateProvider(SearchConfig(catalogue_path=path))
    with pytest.raises(ProviderUnavailable):
        provider.fetch_candidates("Oak")


def test_catalogue_missing_columns_is_unavailable(tmp_path: Path):
    path = tmp_path / "restaurants.csv"
    path.write_text("id,name\n1,Alpha\n")
    provider = DatasetCandidateProvider(SearchConfig(catalogue_path=path))
    with pytest.raises(ProviderUnavailable):
        provider.fetch_candidates("Springfield")


def test_malformed_rows_are_skipped(tmp_path: Path, caplog):
    rows = ROWS + [
        "d,Delta,4 D St,Springfield,Downtown,10.0,20.0,Greek,$$$$$,4.0,11:00,22:00",
        "e,Epsilon,5 E St,Springfield,Downtown,10.0,20.0,Greek,$$,9.0,11:00,22:00",
    ]
    with caplog.at_level("WARNING"):
        batch = _provider(tmp_path, rows).fetch_candidates("Springfield")
    assert [r.id for r in batch.restaurants] == ["a", "b"]
    assert "Skipping malformed catalogue row" in caplog.text


def test_bundled_catalogue_loads():
    provider = DatasetCandidateProvider()
    batch = provider.fetch_candidates("North Beach")
    assert {r.name for r in batch.restaurants} >= {"Trattoria Contadina", "Sotto Mare"}
