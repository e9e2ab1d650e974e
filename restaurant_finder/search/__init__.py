"""
Restaurant discovery core.

Responsibilities:
- Model restaurants, time-of-day values and user filter criteria.
- Decide whether a restaurant is open at a given time of day.
- Compute straight-line (great-circle) distances from the search origin.
- Filter candidates and rank them by ascending distance.
- Obtain candidates from a provider and expose one search entry point.
"""
