from __future__ import annotations

import json
import logging
import threading
from dataclasses import dataclass
from typing import Iterable

from ..search.errors import InputError, StoreUnavailable
from ..search.models import Restaurant
from .config import DEFAULT_FAVORITES_CONFIG
from .store import KeyValueStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ToggleOutcome:
    restaurant_id: str
    ids: frozenset[str]
    persisted: bool

    @property
    def is_favorite(self) -> bool:
        return self.restaurant_id in self.ids


class FavoritesSet:
    """
    Favourite restaurant ids for one session.

    The in-memory set answers every read. The store is only read by
    ``load`` and written after each ``toggle``; a failed write is logged
    and kept in ``last_persist_error`` but the toggle itself stands.
    """

    def __init__(self, store: KeyValueStore, key: str = DEFAULT_FAVORITES_CONFIG.storage_key) -> None:
        self.store = store
        self.key = key
        self._ids: set[str] = set()
        self._lock = threading.Lock()
        self.last_persist_error: StoreUnavailable | None = None

    def load(self) -> frozenset[str]:
        ids = self._read()
        with self._lock:
            self._ids = ids
            return frozenset(self._ids)

    def _read(self) -> set[str]:
        try:
            raw = self.store.get(self.key)
        except StoreUnavailable:
            logger.warning("Favourites store unreadable, starting empty", exc_info=True)
            return set()
        if raw is None:
            return set()

        try:
            parsed = json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, ValueError):
            logger.warning("Stored favourites are not valid JSON, starting empty")
            return set()

        if not isinstance(parsed, list) or not all(isinstance(i, str) for i in parsed):
            logger.warning("Stored favourites are not a list of ids, starting empty")
            return set()
        return set(parsed)

    def toggle(self, restaurant_id: str) -> frozenset[str]:
        return self.toggle_with_outcome(restaurant_id).ids

    def toggle_with_outcome(self, restaurant_id: str) -> ToggleOutcome:
        """Toggle and report the resulting set together with whether it reached the store."""
        if not isinstance(restaurant_id, str) or not restaurant_id:
            raise InputError("restaurant id must be a non-empty string")

        with self._lock:
            if restaurant_id in self._ids:
                self._ids.discard(restaurant_id)
            else:
                self._ids.add(restaurant_id)
            snapshot = frozenset(self._ids)
            error = self._persist(snapshot)
        return ToggleOutcome(restaurant_id=restaurant_id, ids=snapshot, persisted=error is None)

    def _persist(self, ids: frozenset[str]) -> StoreUnavailable | None:
        payload = json.dumps(sorted(ids)).encode("utf-8")
        try:
            self.store.put(self.key, payload)
        except StoreUnavailable as exc:
            logger.warning("Could not persist favourites, keeping in-memory state", exc_info=True)
            self.last_persist_error = exc
            return exc
        self.last_persist_error = None
        return None

    def contains(self, restaurant_id: str) -> bool:
        return restaurant_id in self._ids

    __contains__ = contains

    def filter(self, restaurants: Iterable[Restaurant]) -> list[Restaurant]:
        return [r for r in restaurants if r.id in self._ids]

    @property
    def ids(self) -> frozenset[str]:
        with self._lock:
            return frozenset(self._ids)

    def __len__(self) -> int:
        return len(self._ids)
