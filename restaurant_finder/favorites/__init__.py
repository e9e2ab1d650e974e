"""
Favourite restaurants.

Responsibilities:
- Keep the set of favourite restaurant ids for a session in memory.
- Hydrate it once from a key-value store and mirror every toggle back.
- Treat corrupt or missing stored state as an empty set.
"""
