from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterator

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import InputError

_HHMM = re.compile(r"^\s*(\d{1,2}):(\d{2})\s*$")


class _CallerInput(BaseModel):
    """Frozen model built from caller values; bad values raise ``InputError``."""

    model_config = ConfigDict(frozen=True)

    def __init__(self, **data: Any) -> None:
        try:
            super().__init__(**data)
        except ValidationError as exc:
            raise InputError(str(exc)) from exc


class TimeOfDay(_CallerInput):
    """
    An hour/minute pair with no date attached.

    Out-of-range values raise ``InputError`` on construction.
    """

    hour: int = Field(..., ge=0, le=23)
    minute: int = Field(default=0, ge=0, le=59)

    @classmethod
    def parse(cls, value: str) -> TimeOfDay:
        """Parse a 24-hour ``"HH:MM"`` string such as ``"22:00"`` or ``"9:05"``."""
        match = _HHMM.match(value or "")
        if not match:
            raise InputError(f"Expected HH:MM time of day, got {value!r}")
        hour, minute = int(match.group(1)), int(match.group(2))
        if not (0 <= hour <= 23 and 0 <= minute <= 59):
            raise InputError(f"Time of day out of range: {value!r}")
        return cls(hour=hour, minute=minute)

    @property
    def minutes_since_midnight(self) -> int:
        return self.hour * 60 + self.minute

    def format_12h(self) -> str:
        period = "PM" if self.hour >= 12 else "AM"
        display_hour = self.hour % 12 or 12
        return f"{display_hour}:{self.minute:02d} {period}"

    def __str__(self) -> str:
        return f"{self.hour:02d}:{self.minute:02d}"


class Coordinate(BaseModel):
    model_config = ConfigDict(frozen=True)

    latitude: float
    longitude: float


class PriceTier(str, Enum):
    budget = "$"
    moderate = "$$"
    expensive = "$$$"
    luxury = "$$$$"

    @property
    def rank(self) -> int:
        return len(self.value)


class Restaurant(BaseModel):
    """A candidate restaurant as handed over by the provider. Never mutated."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    name: str = ""
    address: str = ""
    coordinate: Coordinate
    cuisine: str
    price_tier: PriceTier
    rating: float = Field(..., ge=0.0, le=5.0)
    opening_time: TimeOfDay | None = None
    closing_time: TimeOfDay | None = None

    @field_validator("opening_time", "closing_time", mode="before")
    @classmethod
    def _parse_time(cls, value: object) -> object:
        if value is None:
            return None
        if isinstance(value, str):
            if not value.strip():
                return None
            return TimeOfDay.parse(value)
        return value

    @property
    def hours_known(self) -> bool:
        return self.opening_time is not None and self.closing_time is not None


class FilterCriteria(_CallerInput):
    """User-selected constraints for one ranking call. Unset fields do not constrain."""

    cuisine: str | None = None
    price_tier: PriceTier | None = None
    min_rating: float | None = Field(default=None, ge=0.0, le=5.0)
    open_now_only: bool = False

    @field_validator("cuisine")
    @classmethod
    def _reject_blank_cuisine(cls, value: str | None) -> str | None:
        if value is not None and not value.strip():
            raise InputError("cuisine must be a non-empty label or None")
        return value

    @property
    def active_count(self) -> int:
        """Number of constraining fields, as shown on the filter badge."""
        return sum(
            [
                self.cuisine is not None,
                self.price_tier is not None,
                self.min_rating is not None,
                self.open_now_only,
            ]
        )

    def cleared(self) -> FilterCriteria:
        return FilterCriteria()


class RankedItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    restaurant: Restaurant
    distance_km: float


@dataclass(frozen=True)
class RankedResult:
    """Restaurants ordered by non-decreasing distance from the search origin."""

    items: tuple[RankedItem, ...] = ()

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[RankedItem]:
        return iter(self.items)

    def restaurants(self) -> list[Restaurant]:
        return [item.restaurant for item in self.items]

    def ids(self) -> list[str]:
        return [item.restaurant.id for item in self.items]

    def top(self, n: int) -> RankedResult:
        if n < 0:
            raise InputError("n must be non-negative")
        return RankedResult(items=self.items[:n])


class RestaurantOut(Restaurant):
    distance_km: float
    is_open: bool
    is_favorite: bool = False


class SearchResponse(BaseModel):
    origin: Coordinate
    total_candidates: int
    count: int
    restaurants: list[RestaurantOut]
