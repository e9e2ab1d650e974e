from __future__ import annotations

import logging
from typing import Sequence

from .distance import haversine_km
from .filters import build_predicate
from .models import Coordinate, FilterCriteria, RankedItem, RankedResult, Restaurant, TimeOfDay

logger = logging.getLogger(__name__)


def rank(
    origin: Coordinate,
    candidates: Sequence[Restaurant],
    criteria: FilterCriteria,
    now: TimeOfDay,
) -> RankedResult:
    """
    Filter candidates and order them by distance from ``origin``.

    Restaurants at equal distance keep their input order. No truncation
    happens here; callers wanting a top-N view use ``RankedResult.top``.
    """
    predicate = build_predicate(criteria, now)

    # --- Distances ---
    measured = [(restaurant, haversine_km(origin, restaurant.coordinate)) for restaurant in candidates]

    # --- Filters ---
    retained = [(restaurant, dist) for restaurant, dist in measured if predicate(restaurant)]

    # --- Ordering (stable: equal distances keep input order) ---
    retained.sort(key=lambda pair: pair[1])

    logger.debug(
        "Ranked %d of %d candidates (%d active filters)",
        len(retained),
        len(candidates),
        criteria.active_count,
    )

    return RankedResult(
        items=tuple(RankedItem(restaurant=r, distance_km=d) for r, d in retained)
    )
