from __future__ import annotations

from .models import Restaurant, TimeOfDay


def is_open(
    opening: TimeOfDay | None,
    closing: TimeOfDay | None,
    now: TimeOfDay,
) -> bool:
    """
    Return whether a venue with the given hours is open at ``now``.

    Unknown hours (either bound missing) count as closed. Opening is
    inclusive and closing exclusive. When closing is at or before opening
    the window runs past midnight, e.g. 22:00-02:00.
    """
    if opening is None or closing is None:
        return False

    open_minutes = opening.minutes_since_midnight
    close_minutes = closing.minutes_since_midnight
    now_minutes = now.minutes_since_midnight

    if close_minutes <= open_minutes:
        return now_minutes >= open_minutes or now_minutes < close_minutes

    return open_minutes <= now_minutes < close_minutes


def restaurant_is_open(restaurant: Restaurant, now: TimeOfDay) -> bool:
    return is_open(restaurant.opening_time, restaurant.closing_time, now)
