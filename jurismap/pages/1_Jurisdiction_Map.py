"""Map page: resolve a location and overlay its jurisdictions."""
import pandas as pd
import streamlit as st

from jurismap.core.renderers import get_renderer
from jurismap.core.service import JurisdictionService, validate_point
from jurismap.utils.error_handler import handle_streamlit_errors
from jurismap.utils.map_display import show_map
from jurismap.utils.session import get_runtime
from jurismap.utils.timing import Timer


@handle_streamlit_errors()
def render_page():
    service: JurisdictionService = get_runtime().service

    st.title("🗺️ Jurisdiction Map")

    col1, col2, col3, col4 = st.columns([2, 2, 2, 1])
    with col1:
        latitude = st.number_input("Latitude", value=30.2672, format="%.6f")
    with col2:
        longitude = st.number_input("Longitude", value=-97.7431, format="%.6f")
    with col3:
        accuracy = st.number_input("GPS accuracy (m)", value=0.0, min_value=0.0)
    with col4:
        st.write("")
        resolve_button = st.button("Resolve", type="primary", use_container_width=True)

    if not resolve_button:
        return

    point = validate_point(latitude, longitude, accuracy or None)
    with Timer("resolve_page"):
        jurisdictions = service.resolve(point)

    if not jurisdictions:
        st.info("No jurisdiction covers this location.")
        show_map(get_renderer(), point, [])
        return

    primary = jurisdictions[0]
    st.success(f"✅ Primary jurisdiction: **{primary.name}** ({primary.type})")
    if not primary.has_overlay:
        st.caption("Boundary shape unavailable for this agency; showing your location only.")

    st.dataframe(
        pd.DataFrame([
            {
                "Rank": i,
                "Name": j.name,
                "Type": j.type,
                "Non-emergency": j.non_emergency_number,
                "Website": j.website,
                "Boundary vertices": len(j.boundary),
            }
            for i, j in enumerate(jurisdictions, 1)
        ]),
        use_container_width=True,
        hide_index=True
    )

    show_map(get_renderer(), point, jurisdictions)


render_page()
