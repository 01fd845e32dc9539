"""Main Streamlit application entry point."""
import streamlit as st
from jurismap.core.config import LOG_LEVEL
from jurismap.utils.error_tracking import setup_error_tracking
from jurismap.utils.logging import setup_logging
from jurismap.utils.session import get_runtime

# Setup logging
setup_logging(LOG_LEVEL)
setup_error_tracking()

# Page configuration
st.set_page_config(
    page_title="Jurisdiction Map",
    page_icon="🚓",
    layout="wide"
)

runtime = get_runtime()

st.title("🚓 Jurisdiction Map")
st.markdown("Find the police, fire and EMS jurisdictions covering a location.")

report = runtime.load_report
col1, col2, col3 = st.columns(3)
with col1:
    st.metric("Boundaries loaded", report.loaded)
with col2:
    st.metric("Rejected", len(report.rejected))
with col3:
    st.metric("Snapshot generation", runtime.store.snapshot.generation)

st.caption(f"Source: {report.source}")

if report.rejected:
    with st.expander("Rejected boundary records"):
        st.dataframe(report.rejected, use_container_width=True)
