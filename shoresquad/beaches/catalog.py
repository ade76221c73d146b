"""Cleanup beach catalog and the user's persisted beach selection."""

import logging
from urllib.parse import quote, urlencode

from pydantic import BaseModel, Field

from shoresquad.core import AppConfig, Coordinates, UnknownBeachError
from shoresquad.storage import StorageManager

logger = logging.getLogger(__name__)

DEFAULT_BEACH = "pasir-ris"

MAP_VIEWS = {"roadmap": "m", "satellite": "k"}


def _embed_url(name: str, lat: float, lng: float) -> str:
    label = quote(f"{name} Cleanup")
    return (
        "https://maps.google.com/maps?width=100%25&height=400&hl=en"
        f"&q={lat},{lng}+({label})&t=&z=16&ie=UTF8&iwloc=B&output=embed"
    )


class Beach(BaseModel):
    id: str
    name: str
    coordinates: Coordinates
    description: str
    features: list[str] = Field(default_factory=list)
    map_url: str

    @classmethod
    def create(cls, id: str, name: str, lat: float, lng: float, description: str, features: list[str]) -> "Beach":
        return cls(
            id=id,
            name=name,
            coordinates=Coordinates(lat=lat, lng=lng),
            description=description,
            features=features,
            map_url=_embed_url(name, lat, lng),
        )


SINGAPORE_BEACHES: dict[str, Beach] = {
    beach.id: beach
    for beach in (
        Beach.create(
            "pasir-ris",
            "Pasir Ris Beach",
            1.381497,
            103.955574,
            "Street View Asia Location",
            ["Family-friendly", "Large area", "Easy access"],
        ),
        Beach.create(
            "east-coast",
            "East Coast Park Beach",
            1.3010,
            103.9124,
            "Popular recreational beach with cycling path",
            ["Cycling path", "BBQ pits", "High foot traffic"],
        ),
        Beach.create(
            "palawan",
            "Palawan Beach, Sentosa",
            1.2494,
            103.8303,
            "Southernmost point of continental Asia",
            ["Tourist area", "Suspension bridge", "Clear waters"],
        ),
        Beach.create(
            "changi",
            "Changi Beach",
            1.3890,
            103.9834,
            "Historic beach with coastal boardwalk",
            ["Historic significance", "Boardwalk", "Mangrove views"],
        ),
    )
}


class BeachSelector:
    """Tracks which beach the crew is organizing at."""

    def __init__(
        self,
        storage: StorageManager,
        config: AppConfig,
        beaches: dict[str, Beach] | None = None,
    ) -> None:
        self.storage = storage
        self.config = config
        self.beaches = SINGAPORE_BEACHES if beaches is None else beaches

    @property
    def current(self) -> Beach:
        """Stored selection if it is still in the catalog, else the default beach."""
        saved = self.storage.get(self.config.storage.selected_beach)
        if isinstance(saved, str) and saved in self.beaches:
            return self.beaches[saved]
        return self.beaches.get(DEFAULT_BEACH) or next(iter(self.beaches.values()))

    def select(self, beach_id: str) -> Beach:
        """Switch to another beach and remember the choice.

        Raises:
            UnknownBeachError: If the id is not in the catalog
        """
        beach = self.beaches.get(beach_id)
        if beach is None:
            raise UnknownBeachError(beach_id)
        self.storage.set(self.config.storage.selected_beach, beach_id)
        logger.info(f"Switched to {beach.name}")
        return beach

    def directions_url(self) -> str:
        c = self.current.coordinates
        return "https://www.google.com/maps/dir/?" + urlencode(
            {"api": 1, "destination": f"{c.lat},{c.lng}"}, safe=","
        )

    def route_url(self, origin: Coordinates) -> str:
        """Route from ``origin`` to the current beach."""
        c = self.current.coordinates
        return f"https://www.google.com/maps/dir/{origin.lat},{origin.lng}/{c.lat},{c.lng}"

    def place_url(self) -> str:
        c = self.current.coordinates
        return f"https://www.google.com/maps/place/{c.lat},{c.lng}"

    def share_text(self) -> str:
        """Invitation text for the current beach."""
        beach = self.current
        c = beach.coordinates
        return (
            f"Join our beach cleanup at {beach.name}! 🌊\n"
            f"📍 {beach.description}\n"
            f"📅 Coordinates: {c.lat}, {c.lng}\n"
            f"🗺️ {self.place_url()}"
        )

    def map_view_url(self, view: str = "roadmap") -> str:
        """Embeddable map of the current beach; unknown views fall back to roadmap."""
        c = self.current.coordinates
        map_type = MAP_VIEWS.get(view, MAP_VIEWS["roadmap"])
        return f"https://maps.google.com/maps?q={c.lat},{c.lng}&t={map_type}&z=16&output=embed"
