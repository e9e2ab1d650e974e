from __future__ import annotations

from typing import Callable

from .models import FilterCriteria, PriceTier, Restaurant, TimeOfDay
from .open_status import restaurant_is_open

Predicate = Callable[[Restaurant], bool]


def _cuisine_check(cuisine: str) -> Predicate:
    return lambda r: r.cuisine == cuisine


def _price_check(tier: PriceTier) -> Predicate:
    return lambda r: r.price_tier == tier


def _rating_check(min_rating: float) -> Predicate:
    return lambda r: r.rating >= min_rating


def _open_now_check(now: TimeOfDay) -> Predicate:
    return lambda r: restaurant_is_open(r, now)


def build_predicate(criteria: FilterCriteria, now: TimeOfDay) -> Predicate:
    """
    Combine the active criteria into a single inclusion test.

    Exact-match checks come first so the hours check only runs on
    restaurants that already passed them. With no active criteria every
    restaurant is included.
    """
    checks: list[Predicate] = []
    if criteria.cuisine is not None:
        checks.append(_cuisine_check(criteria.cuisine))
    if criteria.price_tier is not None:
        checks.append(_price_check(criteria.price_tier))
    if criteria.min_rating is not None:
        checks.append(_rating_check(criteria.min_rating))
    if criteria.open_now_only:
        checks.append(_open_now_check(now))

    return lambda restaurant: all(check(restaurant) for check in checks)


def matches(restaurant: Restaurant, criteria: FilterCriteria, now: TimeOfDay) -> bool:
    return build_predicate(criteria, now)(restaurant)
