"""Tests for map overlay renderers."""
import pytest
from jurismap.core.models import Point, ResolvedJurisdiction
from jurismap.core.renderers import NativeMapRenderer, PydeckRenderer, get_renderer, hex_to_rgb

LOCATION = Point(latitude=30.3, longitude=-97.75)

CITY = ResolvedJurisdiction(
    id="austin",
    name="Austin Police",
    type="municipal",
    boundary=[[-97.8, 30.2], [-97.7, 30.2], [-97.7, 30.4], [-97.8, 30.4], [-97.8, 30.2]],
    non_emergency_number="311",
)

UNMAPPED = ResolvedJurisdiction(id="u", name="Unmapped Sheriff", type="county", boundary=[])


def test_get_renderer_by_name():
    assert isinstance(get_renderer("web"), PydeckRenderer)
    assert isinstance(get_renderer("NATIVE"), NativeMapRenderer)


def test_get_renderer_unknown_name():
    with pytest.raises(ValueError):
        get_renderer("svg")


def test_hex_to_rgb():
    assert hex_to_rgb("#1e40af") == (30, 64, 175)
    assert hex_to_rgb("fff") == (255, 255, 255)
    with pytest.raises(ValueError):
        hex_to_rgb("#12345")


def test_web_renderer_layers():
    deck = PydeckRenderer(color="#ff0000", fill_opacity=0.5).render_overlay(LOCATION, [CITY, UNMAPPED])

    assert [layer.type for layer in deck.layers] == ["ScatterplotLayer", "PolygonLayer"]
    polygon_layer = deck.layers[1]
    assert [row["id"] for row in polygon_layer.data] == ["austin"]
    assert polygon_layer.data[0]["polygon"] == CITY.boundary


def test_web_renderer_marker_only_for_empty_boundary():
    deck = PydeckRenderer().render_overlay(LOCATION, [UNMAPPED])
    assert [layer.type for layer in deck.layers] == ["ScatterplotLayer"]


def test_native_renderer_payload():
    payload = NativeMapRenderer(color="#1e40af", fill_opacity=0.3, zoom=13).render_overlay(
        LOCATION, [CITY, UNMAPPED]
    )

    assert payload["marker"] == {
        "coordinate": {"latitude": 30.3, "longitude": -97.75},
        "title": "Your Location",
    }
    assert payload["region"]["latitude"] == 30.3
    assert payload["region"]["latitudeDelta"] == pytest.approx(360.0 / 2 ** 13)

    assert len(payload["polygons"]) == 1
    overlay = payload["polygons"][0]
    assert overlay["title"] == "Austin Police"
    assert overlay["description"] == "311"
    assert overlay["coordinates"][0] == {"latitude": 30.2, "longitude": -97.8}
    assert overlay["fillColor"] == "rgba(30, 64, 175, 0.3)"


def test_native_renderer_without_jurisdictions():
    payload = NativeMapRenderer().render_overlay(LOCATION, [])
    assert payload["polygons"] == []
    assert payload["marker"]["coordinate"]["longitude"] == -97.75
