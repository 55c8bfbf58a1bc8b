"""Location domain entities."""

from dataclasses import dataclass, replace

MAP_LINK_TEMPLATE = "https://www.google.com/maps/?q={lat:f},{lng:f}&ll={lat:f},{lng:f}&z=21"


def map_link(lat: float, lng: float) -> str:
    """Build the maps link shown to reviewers for a coordinate pair."""
    return MAP_LINK_TEMPLATE.format(lat=lat, lng=lng)


@dataclass(frozen=True)
class GeoBox:
    """Rectangular coordinate filter for a city.

    Attributes:
        north: Maximum latitude
        east: Maximum longitude
        south: Minimum latitude
        west: Minimum longitude
    """

    north: float
    east: float
    south: float
    west: float

    def contains(self, lat: float, lng: float) -> bool:
        """Check whether a point lies inside the box (bounds inclusive)."""
        return self.south <= lat <= self.north and self.west <= lng <= self.east


@dataclass(frozen=True)
class LocationCandidate:
    """A scraped location entry offered for review.

    The two transient fields are only populated on the copy returned
    by the selector; cached candidates never carry them.

    Attributes:
        entry_id: Stable identifier assigned by the upstream source
        loc: (latitude, longitude)
        epoch: Ingestion timestamp of the entry
        original_message: Full text of the source message
        original_location: Maps link for the coordinates
    """

    entry_id: int
    loc: tuple[float, float]
    epoch: int
    original_message: str | None = None
    original_location: str | None = None

    @property
    def lat(self) -> float:
        return self.loc[0]

    @property
    def lng(self) -> float:
        return self.loc[1]

    def enrich(self, full_text: str) -> "LocationCandidate":
        """Return a copy carrying the message text and the maps link."""
        return replace(
            self,
            original_message=full_text,
            original_location=map_link(self.lat, self.lng),
        )


@dataclass(frozen=True)
class LocationDetail:
    """The expensive-to-fetch payload behind a candidate."""

    entry_id: int
    full_text: str


@dataclass(frozen=True)
class SelectionResult:
    """Outcome of one selection request.

    Attributes:
        count: Size of the filtered candidate pool (0 when nothing is eligible)
        location: The accepted candidate, or None
    """

    count: int
    location: LocationCandidate | None = None

    @classmethod
    def empty(cls) -> "SelectionResult":
        return cls(count=0, location=None)
