"""Tests for the beach catalog."""

import pytest

from shoresquad.beaches import DEFAULT_BEACH, SINGAPORE_BEACHES, BeachSelector
from shoresquad.core import Coordinates, UnknownBeachError


@pytest.fixture
def selector(storage, config):
    return BeachSelector(storage, config)


def test_catalog_contents():
    """Test the catalog holds the four Singapore beaches."""
    assert list(SINGAPORE_BEACHES) == ["pasir-ris", "east-coast", "palawan", "changi"]
    changi = SINGAPORE_BEACHES["changi"]
    assert changi.name == "Changi Beach"
    assert (changi.coordinates.lat, changi.coordinates.lng) == (1.3890, 103.9834)
    assert "Boardwalk" in changi.features
    assert "q=1.389,103.9834+(Changi%20Beach%20Cleanup)" in changi.map_url
    assert changi.map_url.endswith("output=embed")


def test_default_selection(selector):
    """Test the default beach when nothing is stored."""
    assert selector.current.id == DEFAULT_BEACH


def test_select_persists(selector, storage, config):
    """Test selecting a beach is remembered."""
    beach = selector.select("palawan")

    assert beach.name == "Palawan Beach, Sentosa"
    assert storage.get(config.storage.selected_beach) == "palawan"
    assert BeachSelector(storage, config).current.id == "palawan"


def test_select_unknown_beach(selector):
    """Test unknown ids raise and leave the selection alone."""
    selector.select("changi")

    with pytest.raises(UnknownBeachError) as exc_info:
        selector.select("bondi")

    assert exc_info.value.beach_id == "bondi"
    assert selector.current.id == "changi"


def test_stale_stored_selection_uses_default(selector, storage, config):
    """Test a stored id no longer in the catalog is ignored."""
    storage.set(config.storage.selected_beach, "sentosa-old")

    assert selector.current.id == DEFAULT_BEACH


def test_directions_url(selector):
    """Test Google Maps directions link."""
    selector.select("east-coast")

    assert selector.directions_url() == "https://www.google.com/maps/dir/?api=1&destination=1.301,103.9124"


def test_route_url(selector):
    """Test the route link runs from the given origin to the selected beach."""
    selector.select("changi")

    assert (
        selector.route_url(Coordinates(lat=1.3521, lng=103.8198))
        == "https://www.google.com/maps/dir/1.3521,103.8198/1.389,103.9834"
    )


def test_share_text(selector):
    """Test the invitation text."""
    text = selector.share_text()

    assert text.startswith("Join our beach cleanup at Pasir Ris Beach!")
    assert "Street View Asia Location" in text
    assert "Coordinates: 1.381497, 103.955574" in text
    assert text.endswith("https://www.google.com/maps/place/1.381497,103.955574")


@pytest.mark.parametrize(
    ("view", "map_type"),
    [("roadmap", "t=m"), ("satellite", "t=k"), ("terrain", "t=m")],
)
def test_map_view_url(selector, view, map_type):
    """Test map views, with unknown views falling back to roadmap."""
    url = selector.map_view_url(view)

    assert url.startswith("https://maps.google.com/maps?q=1.381497,103.955574")
    assert map_type in url
