"""ParkSense operator console: Streamlit entry point."""

import streamlit as st
import sys
import os

# Add project root to path for imports
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from components.sidebar import render_sidebar
from data.session_store import initialize_session_state
from tabs import (
    tab_vehicle_entry,
    tab_vehicle_exit,
    tab_occupancy,
)


def main():
    st.set_page_config(
        page_title="ParkSense",
        page_icon="🅿️",
        layout="wide",
        initial_sidebar_state="expanded",
    )

    initialize_session_state()
    sidebar_state = render_sidebar()

    tab1, tab2, tab3 = st.tabs([
        "🚗 Vehicle Entry",
        "🏁 Vehicle Exit",
        "📊 Occupancy",
    ])

    with tab1:
        tab_vehicle_entry.render(sidebar_state)
    with tab2:
        tab_vehicle_exit.render(sidebar_state)
    with tab3:
        tab_occupancy.render(sidebar_state)


if __name__ == "__main__":
    main()
