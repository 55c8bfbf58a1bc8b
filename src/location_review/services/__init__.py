"""Service layer for business logic.

This layer contains the core business logic and orchestration.
Services depend on protocols (interfaces), not concrete implementations,
making them testable and flexible.

Architecture:
    Handler -> Service -> Repository
    (HTTP)  -> (Business) -> (Data Access)

Usage:
    ```python
    from location_review.services import CachedLocationSource, LocationSelector

    source = CachedLocationSource(source=upstream, cache=cache)
    selector = LocationSelector(source=source, store=store)
    result = await selector.select(city_id=1, starting_at=0)
    ```
"""

from .cached_location_source import CachedLocationSource
from .entry_service import EntryService
from .location_selector import LocationSelector
from .resolution_service import ResolutionService

__all__ = [
    "CachedLocationSource",
    "EntryService",
    "LocationSelector",
    "ResolutionService",
]
