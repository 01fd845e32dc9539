"""Streamlit session state helpers."""
import streamlit as st
from jurismap.core.bootstrap import Runtime, build_runtime


def get_runtime() -> Runtime:
    """Build the resolver runtime once per session."""
    if "runtime" not in st.session_state:
        st.session_state.runtime = build_runtime()
    return st.session_state.runtime
