from __future__ import annotations


class InputError(ValueError):
    """A malformed value was supplied by the caller."""


class UpstreamUnavailable(RuntimeError):
    """An external collaborator failed to answer."""


class ProviderUnavailable(UpstreamUnavailable):
    """The candidate provider could not be reached or read."""


class StoreUnavailable(UpstreamUnavailable):
    """The persistent key-value store failed a read or write."""


class LocationNotFound(LookupError):
    """The provider knows no restaurants for the requested location."""

    def __init__(self, query: object) -> None:
        super().__init__(f"No restaurants found near {query!r}")
        self.query = query
