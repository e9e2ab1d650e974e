from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Protocol

import numpy as np
import pandas as pd
from pydantic import ValidationError

from .config import DEFAULT_SEARCH_CONFIG, SearchConfig
from .distance import haversine_km
from .errors import InputError, LocationNotFound, ProviderUnavailable
from .models import Coordinate, Restaurant

logger = logging.getLogger(__name__)

CATALOGUE_COLUMNS: list[str] = [
    "id",
    "name",
    "address",
    "city",
    "locality",
    "latitude",
    "longitude",
    "cuisine",
    "price_tier",
    "rating",
    "opening_time",
    "closing_time",
]


@dataclass(frozen=True)
class CandidateBatch:
    origin: Coordinate
    restaurants: list[Restaurant] = field(default_factory=list)


class CandidateProvider(Protocol):
    def fetch_candidates(self, query: str | Coordinate) -> CandidateBatch: ...


def _row_to_restaurant(row: dict) -> Restaurant:
    return Restaurant(
        id=str(row["id"]),
        name=row.get("name") or "",
        address=row.get("address") or "",
        coordinate=Coordinate(latitude=row["latitude"], longitude=row["longitude"]),
        cuisine=row["cuisine"],
        price_tier=row["price_tier"],
        rating=row["rating"],
        opening_time=row.get("opening_time"),
        closing_time=row.get("closing_time"),
    )


class DatasetCandidateProvider:
    """
    Candidate provider backed by a CSV restaurant catalogue.

    The catalogue is read once, on first use. Address queries match city or
    locality names; coordinate queries return everything within the
    configured search radius.
    """

    def __init__(self, config: SearchConfig = DEFAULT_SEARCH_CONFIG) -> None:
        self.config = config
        self._df: pd.DataFrame | None = None
        self._restaurants: list[Restaurant] = []

    def _load(self) -> pd.DataFrame:
        path = self.config.catalogue_path
        try:
            df = pd.read_csv(
                path,
                dtype={"id": str, "opening_time": str, "closing_time": str},
            )
        except (OSError, UnicodeDecodeError, pd.errors.ParserError, pd.errors.EmptyDataError) as exc:
            raise ProviderUnavailable(f"Cannot read restaurant catalogue at {path}") from exc

        missing = [c for c in CATALOGUE_COLUMNS if c not in df.columns]
        if missing:
            raise ProviderUnavailable(f"Restaurant catalogue is missing columns: {missing}")

        # NaN -> None so optional fields (hours, address) read as absent
        df = df[CATALOGUE_COLUMNS].astype(object).where(df[CATALOGUE_COLUMNS].notna(), None)

        keep: list[int] = []
        restaurants: list[Restaurant] = []
        for position, row in enumerate(df.to_dict(orient="records")):
            try:
                restaurants.append(_row_to_restaurant(row))
            except (ValidationError, TypeError, ValueError):
                logger.warning("Skipping malformed catalogue row id=%r", row.get("id"), exc_info=True)
                continue
            keep.append(position)

        df = df.iloc[keep].reset_index(drop=True)
        df["city_lower"] = df["city"].fillna("").astype(str).str.lower()
        df["locality_lower"] = df["locality"].fillna("").astype(str).str.lower()
        df["latitude"] = df["latitude"].astype(float)
        df["longitude"] = df["longitude"].astype(float)

        logger.info("Loaded %d restaurants from %s", len(restaurants), path)
        self._restaurants = restaurants
        return df

    def get_dataframe(self) -> pd.DataFrame:
        """Return the in-memory catalogue, loading it on first call."""
        if self._df is None:
            self._df = self._load()
        return self._df

    def fetch_candidates(self, query: str | Coordinate) -> CandidateBatch:
        df = self.get_dataframe()

        if isinstance(query, Coordinate):
            restaurants = [
                r
                for r in self._restaurants
                if haversine_km(query, r.coordinate) <= self.config.search_radius_km
            ]
            if not restaurants:
                raise LocationNotFound(query)
            return CandidateBatch(origin=query, restaurants=restaurants)

        location_lower = (query or "").strip().lower()
        if not location_lower:
            raise InputError("Search location must not be blank")

        mask = df["city_lower"].str.contains(location_lower, na=False, regex=False) | df[
            "locality_lower"
        ].str.contains(location_lower, na=False, regex=False)
        matched = df.loc[mask]
        if matched.empty:
            raise LocationNotFound(query)

        centroid = np.mean(matched[["latitude", "longitude"]].to_numpy(dtype=float), axis=0)
        origin = Coordinate(latitude=float(centroid[0]), longitude=float(centroid[1]))
        restaurants = [self._restaurants[i] for i in matched.index]
        return CandidateBatch(origin=origin, restaurants=restaurants)
