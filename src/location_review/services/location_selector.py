"""Random selection of an unreviewed, non-duplicate location entry."""

import logging
import random
from collections.abc import Iterable, Mapping

from location_review.config import CITY_BOXES
from location_review.entities import GeoBox, LocationCandidate, SelectionResult
from location_review.protocols import LocationSource, LocationStore

logger = logging.getLogger(__name__)


def exclude_resolved(
    candidates: Iterable[LocationCandidate],
    resolved_ids: set[int],
) -> list[LocationCandidate]:
    """Drop candidates whose entry already has a resolution."""
    return [c for c in candidates if c.entry_id not in resolved_ids]


def filter_by_box(candidates: Iterable[LocationCandidate], box: GeoBox) -> list[LocationCandidate]:
    """Keep candidates inside the box (bounds inclusive)."""
    return [c for c in candidates if box.contains(c.lat, c.lng)]


def filter_by_epoch(candidates: Iterable[LocationCandidate], starting_at: int) -> list[LocationCandidate]:
    """Keep candidates with epoch >= starting_at. A non-positive bound keeps everything."""
    if starting_at <= 0:
        return list(candidates)
    return [c for c in candidates if c.epoch >= starting_at]


class LocationSelector:
    """Picks one random eligible candidate per request.

    Business logic:
    1. Remove already resolved entries
    2. Apply the city box filter (unknown city ids apply no filter)
    3. Apply the starting_at time filter
    4. Sample pool indices without replacement, fetching each sampled
       entry's full text and skipping duplicates of resolved texts
    5. Return the first accepted candidate, enriched with its full text
       and maps link, together with the pool size

    Every pool index is examined at most once, so a pool of N candidates
    costs at most N detail lookups and N duplicate checks.
    """

    def __init__(
        self,
        source: LocationSource,
        store: LocationStore,
        city_boxes: Mapping[int, GeoBox] | None = None,
        rng: random.Random | None = None,
    ) -> None:
        """Initialize the selector.

        Args:
            source: Candidate source, normally a CachedLocationSource (required).
            store: Resolved-entries store for exclusion and duplicate checks (required).
            city_boxes: City id -> GeoBox table. Defaults to CITY_BOXES.
            rng: Random generator; seeded from OS entropy once if None.
        """
        self._source = source
        self._store = store
        self._city_boxes = CITY_BOXES if city_boxes is None else city_boxes
        self._rng = rng or random.Random()

    async def eligible_candidates(
        self,
        city_id: int = 0,
        starting_at: int = 0,
    ) -> list[LocationCandidate]:
        """Build the filtered candidate pool for one request.

        Raises:
            UpstreamError: If the candidate list cannot be fetched
            PersistenceError: If resolved ids cannot be read
        """
        candidates = await self._source.fetch_all_candidates()
        resolved_ids = await self._store.get_resolved_ids()
        pool = exclude_resolved(candidates, resolved_ids)

        box = self._city_boxes.get(city_id) if city_id > 0 else None
        if box is not None:
            pool = filter_by_box(pool, box)

        return filter_by_epoch(pool, starting_at)

    async def select(self, city_id: int = 0, starting_at: int = 0) -> SelectionResult:
        """Select a random unreviewed, non-duplicate candidate.

        Args:
            city_id: City id of the box to restrict to (0 = anywhere)
            starting_at: Minimum epoch (0 = no lower bound)

        Returns:
            SelectionResult; count 0 and no location when nothing is eligible

        Raises:
            UpstreamError: If a candidate list or detail fetch fails
            PersistenceError: If the resolved-entries store fails
        """
        pool = await self.eligible_candidates(city_id, starting_at)
        if not pool:
            return SelectionResult.empty()

        # Partial Fisher-Yates: unvisited indices live in remaining[:left]
        remaining = list(range(len(pool)))
        left = len(remaining)
        while left > 0:
            pick = self._rng.randrange(left)
            index = remaining[pick]
            left -= 1
            remaining[pick], remaining[left] = remaining[left], remaining[pick]

            candidate = pool[index]
            detail = await self._source.fetch_detail(candidate.entry_id)
            if await self._store.is_duplicate(detail.full_text):
                logger.debug("Entry %d duplicates a resolved message, skipping", candidate.entry_id)
                continue

            return SelectionResult(count=len(pool), location=candidate.enrich(detail.full_text))

        logger.info("All %d eligible candidates are duplicates", len(pool))
        return SelectionResult.empty()
