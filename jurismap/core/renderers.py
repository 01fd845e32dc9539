"""Map overlay renderers, one per target platform.

The target is picked from the MAP_RENDERER setting through ``get_renderer``.
Every renderer receives boundaries in ``[lon, lat]`` order and skips
jurisdictions whose boundary is empty (marker only).
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Sequence, Tuple

import pydeck as pdk

from jurismap.core.config import MAP_RENDERER, MAP_ZOOM, OVERLAY_COLOR, OVERLAY_FILL_OPACITY
from jurismap.core.models import Point, ResolvedJurisdiction
from jurismap.core.normalizer import to_lat_lng

LOCATION_LABEL = "Your Location"


def hex_to_rgb(color: str) -> Tuple[int, int, int]:
    """'#1e40af' -> (30, 64, 175)"""
    value = color.lstrip("#")
    if len(value) == 3:
        value = "".join(ch * 2 for ch in value)
    if len(value) != 6:
        raise ValueError(f"Not a hex colour: {color}")
    return tuple(int(value[i:i + 2], 16) for i in (0, 2, 4))


class OverlayRenderer(ABC):
    """Capability interface: draw the location marker plus jurisdiction overlays."""

    name: str = ""

    def __init__(self, color: str = OVERLAY_COLOR, fill_opacity: float = OVERLAY_FILL_OPACITY,
                 zoom: int = MAP_ZOOM):
        self.color = color
        self.fill_opacity = fill_opacity
        self.zoom = zoom

    @abstractmethod
    def render_overlay(self, location: Point, jurisdictions: Sequence[ResolvedJurisdiction]) -> Any:
        """
        Render the location and its jurisdictions.

        Args:
            location: Query point (marker position and map centre)
            jurisdictions: Ranked jurisdictions

        Returns:
            Platform-specific map object or payload
        """
        pass

    @staticmethod
    def overlays(jurisdictions: Sequence[ResolvedJurisdiction]) -> List[ResolvedJurisdiction]:
        return [j for j in jurisdictions if j.has_overlay]


class PydeckRenderer(OverlayRenderer):
    """Web map: a pydeck Deck with a marker layer and a polygon layer."""

    name = "web"

    def render_overlay(self, location: Point, jurisdictions: Sequence[ResolvedJurisdiction]) -> pdk.Deck:
        r, g, b = hex_to_rgb(self.color)
        layers = [
            pdk.Layer(
                "ScatterplotLayer",
                data=[{
                    "lon": location.longitude,
                    "lat": location.latitude,
                    "name": LOCATION_LABEL,
                }],
                get_position=["lon", "lat"],
                get_color=[255, 0, 0, 200],
                get_radius=30,
                radius_min_pixels=6,
                radius_max_pixels=20,
                pickable=True
            )
        ]

        polygons = [
            {
                "id": j.id,
                "name": j.name,
                "type": j.type,
                "phone": j.non_emergency_number,
                "website": j.website,
                # pydeck takes [lon, lat], the stored order
                "polygon": j.boundary,
            }
            for j in self.overlays(jurisdictions)
        ]
        if polygons:
            layers.append(
                pdk.Layer(
                    "PolygonLayer",
                    data=polygons,
                    get_polygon="polygon",
                    get_fill_color=[r, g, b, int(round(self.fill_opacity * 255))],
                    get_line_color=[r, g, b, 255],
                    line_width_min_pixels=2,
                    stroked=True,
                    filled=True,
                    pickable=True
                )
            )

        view_state = pdk.ViewState(
            longitude=location.longitude,
            latitude=location.latitude,
            zoom=self.zoom,
            pitch=0
        )

        return pdk.Deck(
            map_style=None,
            initial_view_state=view_state,
            layers=layers,
            tooltip={"text": "{name}"}
        )


class NativeMapRenderer(OverlayRenderer):
    """
    Native map payload (region, marker, polygons) for mobile map widgets.

    Native widgets take ``{latitude, longitude}`` objects, so every boundary
    goes through ``to_lat_lng``.
    """

    name = "native"

    def render_overlay(self, location: Point, jurisdictions: Sequence[ResolvedJurisdiction]) -> Dict[str, Any]:
        r, g, b = hex_to_rgb(self.color)
        delta = 360.0 / (2 ** self.zoom)
        coordinate = {"latitude": location.latitude, "longitude": location.longitude}

        return {
            "region": {
                **coordinate,
                "latitudeDelta": delta,
                "longitudeDelta": delta,
            },
            "marker": {"coordinate": coordinate, "title": LOCATION_LABEL},
            "polygons": [
                {
                    "id": j.id,
                    "title": j.name,
                    "description": j.non_emergency_number,
                    "coordinates": to_lat_lng(j.boundary),
                    "strokeColor": self.color,
                    "fillColor": f"rgba({r}, {g}, {b}, {self.fill_opacity})",
                }
                for j in self.overlays(jurisdictions)
            ],
        }


RENDERERS = {
    PydeckRenderer.name: PydeckRenderer,
    NativeMapRenderer.name: NativeMapRenderer,
}


def get_renderer(name: Optional[str] = None, **kwargs) -> OverlayRenderer:
    """
    Get the renderer for a platform.

    Args:
        name: "web" or "native"; the MAP_RENDERER setting when omitted

    Raises:
        ValueError: For an unknown renderer name
    """
    key = (name or MAP_RENDERER).lower()
    if key not in RENDERERS:
        raise ValueError(f"Unknown map renderer: {key} (expected one of {sorted(RENDERERS)})")
    return RENDERERS[key](**kwargs)
