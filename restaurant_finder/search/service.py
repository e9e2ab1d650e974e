from __future__ import annotations

import logging
from dataclasses import dataclass

from ..favorites.favorites_set import FavoritesSet
from .clock import ClockSource
from .models import Coordinate, FilterCriteria, RankedResult, TimeOfDay
from .provider import CandidateProvider
from .ranking import rank

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SearchOutcome:
    origin: Coordinate
    result: RankedResult
    total_candidates: int
    evaluated_at: TimeOfDay


def search_restaurants(
    query: str | Coordinate,
    criteria: FilterCriteria,
    provider: CandidateProvider,
    clock: ClockSource,
    favorites: FavoritesSet | None = None,
    favorites_only: bool = False,
) -> SearchOutcome:
    """
    Run one search: fetch candidates, rank them, optionally keep favourites only.

    Provider failures propagate to the caller untouched; there is no
    partial result.
    """
    batch = provider.fetch_candidates(query)
    now = clock.now()

    result = rank(batch.origin, batch.restaurants, criteria, now)

    if favorites_only:
        if favorites is None:
            result = RankedResult()
        else:
            result = RankedResult(
                items=tuple(item for item in result if favorites.contains(item.restaurant.id))
            )

    logger.info(
        "Search %r at %s returned %d of %d candidates",
        query,
        now,
        len(result),
        len(batch.restaurants),
    )
    return SearchOutcome(
        origin=batch.origin,
        result=result,
        total_candidates=len(batch.restaurants),
        evaluated_at=now,
    )
