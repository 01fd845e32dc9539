"""Streamlit display of rendered map overlays, keyed by renderer name."""
import json
from typing import Any, Callable, Dict, Sequence

import streamlit as st

from jurismap.core.models import Point, ResolvedJurisdiction
from jurismap.core.renderers import OverlayRenderer


def show_deck(rendered: Any):
    st.pydeck_chart(rendered)


def show_payload(rendered: Any):
    with st.expander("Native map payload", expanded=True):
        st.code(json.dumps(rendered, indent=2), language="json")


# One entry per name in jurismap.core.renderers.RENDERERS
DISPLAYS: Dict[str, Callable[[Any], None]] = {
    "web": show_deck,
    "native": show_payload,
}


def show_map(renderer: OverlayRenderer, point: Point, jurisdictions: Sequence[ResolvedJurisdiction]):
    """Render with the configured renderer and hand the result to its display."""
    DISPLAYS[renderer.name](renderer.render_overlay(point, jurisdictions))
